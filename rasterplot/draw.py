from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from rasterplot.geometry import Point, Rectangle
from rasterplot.painter import Painter
from rasterplot.text import RGBA, TextStyle


# Tolerance for deciding whether a device position falls inside a canvas.
SLOP = 0.01


@dataclass(frozen=True)
class LineStyle:
    color: RGBA = (0, 0, 0, 255)
    width: float = 1.0


@dataclass(frozen=True)
class Canvas:
    """A rectangular view onto a painter.

    Canvases are values: cropping returns a new canvas and never touches the
    painter, so a draw pass can hand each stage its own view.
    """

    painter: Painter
    rect: Rectangle

    @classmethod
    def full(cls, painter: Painter, width: float, height: float) -> "Canvas":
        return cls(painter=painter, rect=Rectangle.from_bounds(0.0, 0.0, float(width), float(height)))

    def x(self, norm: float) -> float:
        return self.rect.min.x + norm * (self.rect.max.x - self.rect.min.x)

    def y(self, norm: float) -> float:
        return self.rect.min.y + norm * (self.rect.max.y - self.rect.min.y)

    def center(self) -> Point:
        return Point((self.rect.min.x + self.rect.max.x) / 2.0, (self.rect.min.y + self.rect.max.y) / 2.0)

    def contains_x(self, x: float) -> bool:
        return self.rect.min.x - SLOP <= x <= self.rect.max.x + SLOP

    def contains_y(self, y: float) -> bool:
        return self.rect.min.y - SLOP <= y <= self.rect.max.y + SLOP

    def crop(self, left: float, right: float, bottom: float, top: float) -> "Canvas":
        """Offset each edge; positive `left`/`bottom` and negative `right`/`top` shrink the view."""
        rect = Rectangle(
            Point(self.rect.min.x + left, self.rect.min.y + bottom),
            Point(self.rect.max.x + right, self.rect.max.y + top),
        )
        return replace(self, rect=rect)

    def with_x_bounds(self, x0: float, x1: float) -> "Canvas":
        return replace(self, rect=Rectangle(Point(x0, self.rect.min.y), Point(x1, self.rect.max.y)))

    def with_y_bounds(self, y0: float, y1: float) -> "Canvas":
        return replace(self, rect=Rectangle(Point(self.rect.min.x, y0), Point(self.rect.max.x, y1)))

    def set_color(self, color: RGBA) -> None:
        self.painter.set_color(color)

    def fill(self, path: Sequence[Point]) -> None:
        self.painter.fill(path)

    def stroke(self, path: Sequence[Point]) -> None:
        self.painter.stroke(path)

    def stroke_lines(self, style: LineStyle, *lines: Sequence[Point]) -> None:
        if style.width <= 0:
            return
        self.painter.set_color(style.color)
        self.painter.set_line_width(style.width)
        for line in lines:
            if len(line) > 0:
                self.painter.stroke(line)

    def clip_lines(self, *lines: Sequence[Point]) -> list[list[Point]]:
        """Cut polylines to the canvas; a line that leaves and re-enters is split in two."""
        out: list[list[Point]] = []
        for line in lines:
            if len(line) == 1:
                if self.contains_x(line[0].x) and self.contains_y(line[0].y):
                    out.append([line[0]])
                continue
            current: list[Point] = []
            for a, b in zip(line, line[1:]):
                seg = _clip_segment(self.rect, a, b)
                if seg is None or (current and current[-1] != seg[0]):
                    if current:
                        out.append(current)
                    current = []
                if seg is None:
                    continue
                if not current:
                    current.append(seg[0])
                current.append(seg[1])
            if current:
                out.append(current)
        return out

    def stroke_line2(self, style: LineStyle, x0: float, y0: float, x1: float, y1: float) -> None:
        self.stroke_lines(style, (Point(x0, y0), Point(x1, y1)))

    def fill_text(self, style: TextStyle, point: Point, xalign: float, yalign: float, text: str) -> None:
        """Draw text aligned relative to `point`.

        The alignments are fractions of the text extent added to `point`:
        `xalign=-0.5` centres horizontally, `xalign=-1` right-aligns,
        `yalign=-1` hangs the text below the point, `yalign=0` sits on it.
        """
        if not text:
            return
        w, h = style.extent(text)
        origin = Point(point.x + xalign * w, point.y + yalign * h)
        self.painter.fill_text(style, origin, text)


def _clip_segment(rect: Rectangle, a: Point, b: Point) -> tuple[Point, Point] | None:
    # Liang-Barsky; unclipped ends are returned as-is so consecutive segments still join.
    dx = b.x - a.x
    dy = b.y - a.y
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, a.x - rect.min.x),
        (dx, rect.max.x - a.x),
        (-dy, a.y - rect.min.y),
        (dy, rect.max.y - a.y),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    start = a if t0 == 0.0 else Point(a.x + t0 * dx, a.y + t0 * dy)
    end = b if t1 == 1.0 else Point(a.x + t1 * dx, a.y + t1 * dy)
    return start, end
