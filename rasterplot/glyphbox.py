from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rasterplot.geometry import Point, Rectangle

if TYPE_CHECKING:
    from rasterplot.axis import Axis
    from rasterplot.draw import Canvas
    from rasterplot.plot import Plot


@dataclass(frozen=True)
class GlyphBox:
    # x, y: anchor in normalized coordinates. rect: device-unit offset from the anchor.
    x: float = 0.0
    y: float = 0.0
    rect: Rectangle = Rectangle()

    def size(self) -> Point:
        return self.rect.size()


@runtime_checkable
class Plotter(Protocol):
    def plot(self, canvas: "Canvas", plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> None: ...


@runtime_checkable
class GlyphBoxer(Protocol):
    def glyph_boxes(self, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> list[GlyphBox]: ...


@runtime_checkable
class DataRanger(Protocol):
    def data_range(self) -> tuple[float, float, float, float]: ...


@runtime_checkable
class Thumbnailer(Protocol):
    def thumbnail(self, canvas: "Canvas") -> None: ...


def keep_glyph_box(box: GlyphBox) -> bool:
    size = box.size()
    if size.x > 0 and not (0.0 <= box.x <= 1.0):
        return False
    if size.y > 0 and not (0.0 <= box.y <= 1.0):
        return False
    return True


def filter_glyph_boxes(boxes: Iterable[GlyphBox]) -> list[GlyphBox]:
    return [b for b in boxes if keep_glyph_box(b)]
