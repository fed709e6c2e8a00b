from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

import numpy as np

from rasterplot.geometry import Point
from rasterplot.raster import draw_polyline, draw_text, fill_polygon, new_canvas
from rasterplot.text import RGBA, TextStyle


@runtime_checkable
class Painter(Protocol):
    """Drawing surface consumed by the plot. Coordinates are device units, origin bottom-left."""

    def set_color(self, color: RGBA) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def fill(self, path: Sequence[Point]) -> None: ...

    def stroke(self, path: Sequence[Point]) -> None: ...

    def fill_text(self, style: TextStyle, point: Point, text: str) -> None:
        """Draw `text` with the bottom-left of its bounding box at `point`."""
        ...


class RasterPainter:
    """Painter backed by an RGBA uint8 numpy array."""

    def __init__(self, width: int, height: int, background: RGBA = (0, 0, 0, 0)) -> None:
        self.width = int(width)
        self.height = int(height)
        self._rgba = new_canvas(self.width, self.height, color=background)
        self._color: RGBA = (0, 0, 0, 255)
        self._line_width = 1.0

    def rgba(self) -> np.ndarray:
        return self._rgba.copy()

    def set_color(self, color: RGBA) -> None:
        self._color = color

    def set_line_width(self, width: float) -> None:
        self._line_width = float(width)

    def fill(self, path: Sequence[Point]) -> None:
        fill_polygon(self._rgba, [(p.x, self.height - p.y) for p in path], self._color)

    def stroke(self, path: Sequence[Point]) -> None:
        if self._line_width <= 0 or not path:
            return
        xs = np.asarray([self._col(p.x) for p in path], dtype=np.int32)
        ys = np.asarray([self._row(p.y) for p in path], dtype=np.int32)
        width = max(1, int(round(self._line_width)))
        draw_polyline(self._rgba, xs, ys, color=self._color, width=width)

    def fill_text(self, style: TextStyle, point: Point, text: str) -> None:
        if not text:
            return
        _, h = style.extent(text)
        draw_text(
            self._rgba,
            int(round(point.x)),
            int(round(self.height - (point.y + h))),
            text,
            style.color,
            font=style.resolved_font(),
            rotate_deg=style.rotate_deg,
        )

    def _col(self, x: float) -> int:
        return int(math.floor(x))

    def _row(self, y: float) -> int:
        return int(math.floor(self.height - y))
