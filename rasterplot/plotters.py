from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import numpy as np

from rasterplot.adapters.normalize import normalize_xy
from rasterplot.draw import Canvas, LineStyle
from rasterplot.geometry import Point, Rectangle
from rasterplot.glyphbox import GlyphBox
from rasterplot.text import RGBA

if TYPE_CHECKING:
    from rasterplot.axis import Axis
    from rasterplot.plot import Plot


def _coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float = 1.0) -> RGBA:
    a = max(0.0, min(1.0, alpha))
    if len(color) == 3:
        r, g, b = color
        return (r, g, b, int(a * 255))
    r, g, b, base = color
    return (r, g, b, int(a * base))


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    breaks = np.flatnonzero(np.diff(idx) != 1)
    starts = np.concatenate(([idx[0]], idx[breaks + 1]))
    ends = np.concatenate((idx[breaks] + 1, [idx[-1] + 1]))
    return [(int(s), int(e)) for s, e in zip(starts, ends)]


def _clip_rect(r: Rectangle, bounds: Rectangle) -> Rectangle | None:
    lo = Point(max(r.min.x, bounds.min.x), max(r.min.y, bounds.min.y))
    hi = Point(min(r.max.x, bounds.max.x), min(r.max.y, bounds.max.y))
    if lo.x >= hi.x or lo.y > hi.y:
        return None
    return Rectangle(lo, hi)


def _square(center: Point, radius: float) -> tuple[Point, ...]:
    return Rectangle(Point(center.x - radius, center.y - radius), Point(center.x + radius, center.y + radius)).path()


class Scatter:
    """Square markers centred on each finite point."""

    def __init__(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (62, 149, 255),
        radius: float = 2.0,
        alpha: float = 1.0,
    ) -> None:
        if radius <= 0:
            raise ValueError("marker radius must be > 0")
        self.series = normalize_xy(y=y, x=x, data=data, source_name=label)
        self.label = label
        self.color = _coerce_color(color, alpha)
        self.radius = float(radius)

    def plot(self, c: Canvas, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> None:
        fx, fy = plt.transforms(c, x_axis, y_axis)
        c.set_color(self.color)
        for xv, yv in zip(*self.series.finite_points()):
            p = Point(fx(float(xv)), fy(float(yv)))
            if not (c.contains_x(p.x) and c.contains_y(p.y)):
                continue
            c.fill(_square(p, self.radius))

    def glyph_boxes(self, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> list[GlyphBox]:
        r = self.radius
        rect = Rectangle(Point(-r, -r), Point(r, r))
        return [
            GlyphBox(x=x_axis.norm(float(xv)), y=y_axis.norm(float(yv)), rect=rect)
            for xv, yv in zip(*self.series.finite_points())
        ]

    def data_range(self) -> tuple[float, float, float, float]:
        return self.series.data_range()

    def thumbnail(self, c: Canvas) -> None:
        c.set_color(self.color)
        c.fill(_square(c.center(), self.radius))


class Line:
    """Polyline through the points in order; non-finite points break the line."""

    def __init__(
        self,
        y: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (255, 165, 0),
        width: float = 1.0,
        alpha: float = 1.0,
    ) -> None:
        if width <= 0:
            raise ValueError("line width must be > 0")
        self.series = normalize_xy(y=y, x=x, data=data, source_name=label)
        self.label = label
        self.style = LineStyle(color=_coerce_color(color, alpha), width=float(width))

    def plot(self, c: Canvas, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> None:
        fx, fy = plt.transforms(c, x_axis, y_axis)
        xs, ys = self.series.x, self.series.y
        lines = [
            [Point(fx(float(xs[i])), fy(float(ys[i]))) for i in range(start, end)]
            for start, end in _contiguous_true_runs(self.series.mask)
        ]
        c.stroke_lines(self.style, *c.clip_lines(*lines))

    def data_range(self) -> tuple[float, float, float, float]:
        return self.series.data_range()

    def thumbnail(self, c: Canvas) -> None:
        y = c.center().y
        c.stroke_line2(self.style, c.rect.min.x, y, c.rect.max.x, y)


class BarChart:
    """Vertical bars rising from zero, `width` device units wide.

    Bars sit at the series x positions, 0..n-1 unless `x` is given.
    """

    def __init__(
        self,
        values: Any = None,
        *,
        x: Any = None,
        data: Any = None,
        label: str | None = None,
        color: tuple[int, int, int] | tuple[int, int, int, int] = (110, 169, 255),
        width: float = 10.0,
        alpha: float = 1.0,
        line: LineStyle | None = None,
    ) -> None:
        if width <= 0:
            raise ValueError("bar width must be > 0")
        self.series = normalize_xy(y=values, x=x, data=data, source_name=label)
        self.label = label
        self.color = _coerce_color(color, alpha)
        self.width = float(width)
        self.line = line

    def _bar(
        self, fx: Callable[[float], float], fy: Callable[[float], float], xv: float, yv: float, base: float
    ) -> Rectangle:
        x = fx(xv)
        y0 = fy(base)
        y1 = fy(yv)
        return Rectangle(Point(x - self.width / 2.0, min(y0, y1)), Point(x + self.width / 2.0, max(y0, y1)))

    def plot(self, c: Canvas, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> None:
        fx, fy = plt.transforms(c, x_axis, y_axis)
        # Log axes have no zero; bars start at the bottom of the range.
        base = y_axis.min if y_axis.log_scale else 0.0
        for xv, yv in zip(*self.series.finite_points()):
            bar = _clip_rect(self._bar(fx, fy, float(xv), float(yv), base), c.rect)
            if bar is None:
                continue
            c.set_color(self.color)
            c.fill(bar.path())
            if self.line is not None:
                c.stroke_lines(self.line, bar.path())

    def glyph_boxes(self, plt: "Plot", x_axis: "Axis", y_axis: "Axis") -> list[GlyphBox]:
        half = self.width / 2.0
        rect = Rectangle(Point(-half, 0.0), Point(half, 0.0))
        return [
            GlyphBox(x=x_axis.norm(float(xv)), y=y_axis.norm(float(yv)), rect=rect)
            for xv, yv in zip(*self.series.finite_points())
        ]

    def data_range(self) -> tuple[float, float, float, float]:
        xmin, xmax, ymin, ymax = self.series.data_range()
        return xmin, xmax, min(0.0, ymin), max(0.0, ymax)

    def thumbnail(self, c: Canvas) -> None:
        c.set_color(self.color)
        c.fill(c.rect.path())
