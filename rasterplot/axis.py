from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from rasterplot.config import DEFAULT_PLOT_DEFAULTS, PlotDefaults
from rasterplot.draw import Canvas, LineStyle
from rasterplot.geometry import Point, Rectangle
from rasterplot.glyphbox import GlyphBox
from rasterplot.scales import LinearScale, LogScale, Normalizer
from rasterplot.text import TextStyle
from rasterplot.ticks import DefaultTicks, LogTicks, Tick, Ticker


@dataclass
class AxisLabel:
    style: TextStyle
    text: str = ""


@dataclass
class TickConfig:
    label: TextStyle
    line: LineStyle = LineStyle()
    length: float = 8.0
    marker: Ticker = field(default_factory=DefaultTicks)


@dataclass
class Axis:
    """Numeric range plus the style used to draw it.

    `min`/`max` start at +inf/-inf so the first data range added replaces
    them; `sanitize_range` turns an untouched axis into [-1, 1].
    """

    label: AxisLabel
    tick: TickConfig
    line: LineStyle = LineStyle()
    padding: float = 5.0
    min: float = math.inf
    max: float = -math.inf
    scale: Normalizer = field(default_factory=LinearScale)
    align_right: bool = False
    suggested_ticks: int = 5

    def norm(self, value: float) -> float:
        return self.scale.normalize(self.min, self.max, value)

    def sanitize_range(self) -> None:
        if self.log_scale:
            self._sanitize_log_range()
            return
        if math.isinf(self.min):
            self.min = 0.0
        if math.isinf(self.max):
            self.max = 0.0
        if self.min > self.max:
            self.min, self.max = self.max, self.min
        if self.min == self.max:
            self.min -= 1.0
            self.max += 1.0

    def _sanitize_log_range(self) -> None:
        # Bounds must stay positive; equal bounds widen by a decade each way.
        if not math.isfinite(self.min) or self.min <= 0:
            self.min = 1.0
        if not math.isfinite(self.max) or self.max <= 0:
            self.max = 1.0
        if self.min > self.max:
            self.min, self.max = self.max, self.min
        if self.min == self.max:
            self.min /= 10.0
            self.max *= 10.0

    @property
    def log_scale(self) -> bool:
        return isinstance(self.scale, LogScale)

    def use_log_scale(self, enabled: bool = True) -> None:
        if enabled:
            self.scale = LogScale()
            self.tick.marker = LogTicks(suggested=self.suggested_ticks)
        else:
            self.scale = LinearScale()
            self.tick.marker = DefaultTicks(suggested=self.suggested_ticks)

    def ticks(self) -> list[Tick]:
        return self.tick.marker.ticks(self.min, self.max)

    def draws_ticks(self) -> bool:
        return self.tick.length > 0 and self.tick.line.width > 0


def make_axis(defaults: PlotDefaults = DEFAULT_PLOT_DEFAULTS) -> Axis:
    """Build an axis with default styling; raises FontResolutionError when fonts are unavailable."""
    label_style = TextStyle.create(
        color=defaults.foreground_color,
        font_family=defaults.font_family,
        font_size_px=defaults.label_font_px,
        strict=defaults.strict_fonts,
    )
    tick_style = TextStyle.create(
        color=defaults.foreground_color,
        font_family=defaults.font_family,
        font_size_px=defaults.tick_font_px,
        strict=defaults.strict_fonts,
    )
    return Axis(
        label=AxisLabel(style=label_style),
        tick=TickConfig(
            label=tick_style,
            line=LineStyle(color=defaults.foreground_color, width=defaults.tick_line_width),
            length=defaults.tick_length,
            marker=DefaultTicks(suggested=defaults.suggested_ticks),
        ),
        line=LineStyle(color=defaults.foreground_color, width=defaults.axis_line_width),
        padding=defaults.axis_padding,
        suggested_ticks=defaults.suggested_ticks,
    )


def tick_label_height(style: TextStyle, ticks: Sequence[Tick]) -> float:
    return max((style.height(t.label) for t in ticks if not t.is_minor()), default=0.0)


def tick_label_width(style: TextStyle, ticks: Sequence[Tick]) -> float:
    return max((style.width(t.label) for t in ticks if not t.is_minor()), default=0.0)


class HorizontalAxis:
    """Draws an axis below the data area, stacked upward from the canvas bottom."""

    def __init__(self, axis: Axis) -> None:
        self.axis = axis

    def size(self) -> float:
        a = self.axis
        h = 0.0
        if a.label.text:
            h += a.label.style.height(a.label.text)
        marks = a.ticks()
        if marks:
            if a.draws_ticks():
                h += a.tick.length
            h += tick_label_height(a.tick.label, marks)
        h += a.line.width / 2.0
        h += a.padding
        return h

    def draw(self, c: Canvas) -> None:
        a = self.axis
        y = c.rect.min.y
        if a.label.text:
            c.fill_text(a.label.style, Point(c.center().x, y), -0.5, 0.0, a.label.text)
            y += a.label.style.height(a.label.text)

        marks = a.ticks()
        label_h = tick_label_height(a.tick.label, marks)
        for t in marks:
            x = c.x(a.norm(t.value))
            if not c.contains_x(x) or t.is_minor():
                continue
            c.fill_text(a.tick.label, Point(x, y + label_h), -0.5, -1.0, t.label)

        if marks:
            y += label_h

        if marks and a.draws_ticks():
            length = a.tick.length
            for t in marks:
                x = c.x(a.norm(t.value))
                if not c.contains_x(x):
                    continue
                start = t.length_offset(length)
                c.stroke_line2(a.tick.line, x, y + start, x, y + length)
            y += length

        y += a.line.width / 2.0
        c.stroke_line2(a.line, c.rect.min.x, y, c.rect.max.x, y)

    def glyph_boxes(self) -> list[GlyphBox]:
        a = self.axis
        boxes: list[GlyphBox] = []
        for t in a.ticks():
            if t.is_minor():
                continue
            w = a.tick.label.width(t.label)
            boxes.append(GlyphBox(x=a.norm(t.value), rect=Rectangle(Point(-w / 2.0, 0.0), Point(w / 2.0, 0.0))))
        return boxes


class VerticalAxis:
    """Draws a Y axis; on the left of the data area unless `axis.align_right` is set."""

    def __init__(self, axis: Axis, *, align_right: bool | None = None) -> None:
        self.axis = axis
        self.align_right = axis.align_right if align_right is None else align_right
        self._label_style = axis.label.style.rotated(90)

    def size(self) -> float:
        a = self.axis
        w = 0.0
        if a.label.text:
            w += self._label_style.width(a.label.text)
        marks = a.ticks()
        if marks:
            label_w = tick_label_width(a.tick.label, marks)
            if label_w > 0:
                w += label_w + a.tick.label.space_width()
            if a.draws_ticks():
                w += a.tick.length
        w += a.line.width / 2.0
        w += a.padding
        return w

    def draw(self, c: Canvas) -> None:
        if self.align_right:
            self._draw_right(c)
        else:
            self._draw_left(c)

    def _draw_left(self, c: Canvas) -> None:
        a = self.axis
        x = c.rect.min.x
        if a.label.text:
            c.fill_text(self._label_style, Point(x, c.center().y), 0.0, -0.5, a.label.text)
            x += self._label_style.width(a.label.text)

        marks = a.ticks()
        label_w = tick_label_width(a.tick.label, marks)
        if marks and label_w > 0:
            x += label_w
            for t in marks:
                y = c.y(a.norm(t.value))
                if not c.contains_y(y) or t.is_minor():
                    continue
                c.fill_text(a.tick.label, Point(x, y), -1.0, -0.5, t.label)
            x += a.tick.label.space_width()

        if marks and a.draws_ticks():
            length = a.tick.length
            for t in marks:
                y = c.y(a.norm(t.value))
                if not c.contains_y(y):
                    continue
                start = t.length_offset(length)
                c.stroke_line2(a.tick.line, x + start, y, x + length, y)
            x += length

        x += a.line.width / 2.0
        c.stroke_line2(a.line, x, c.rect.min.y, x, c.rect.max.y)

    def _draw_right(self, c: Canvas) -> None:
        a = self.axis
        x = c.rect.min.x + a.padding + a.line.width / 2.0
        c.stroke_line2(a.line, x, c.rect.min.y, x, c.rect.max.y)

        marks = a.ticks()
        if marks and a.draws_ticks():
            length = a.tick.length
            for t in marks:
                y = c.y(a.norm(t.value))
                if not c.contains_y(y):
                    continue
                end = length - t.length_offset(length)
                c.stroke_line2(a.tick.line, x, y, x + end, y)
            x += length

        label_w = tick_label_width(a.tick.label, marks)
        if marks and label_w > 0:
            x += a.tick.label.space_width()
            for t in marks:
                y = c.y(a.norm(t.value))
                if not c.contains_y(y) or t.is_minor():
                    continue
                c.fill_text(a.tick.label, Point(x, y), 0.0, -0.5, t.label)
            x += label_w

        if a.label.text:
            c.fill_text(self._label_style, Point(x, c.center().y), 0.0, -0.5, a.label.text)

    def glyph_boxes(self) -> list[GlyphBox]:
        a = self.axis
        boxes: list[GlyphBox] = []
        for t in a.ticks():
            if t.is_minor():
                continue
            h = a.tick.label.height(t.label)
            boxes.append(GlyphBox(y=a.norm(t.value), rect=Rectangle(Point(0.0, -h / 2.0), Point(0.0, h / 2.0))))
        return boxes
