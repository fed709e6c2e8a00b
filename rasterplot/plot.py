from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, replace

import numpy as np
from PIL import Image

from rasterplot.axis import Axis, HorizontalAxis, VerticalAxis, make_axis
from rasterplot.config import DEFAULT_PLOT_DEFAULTS, PlotDefaults
from rasterplot.draw import Canvas
from rasterplot.geometry import Point
from rasterplot.glyphbox import DataRanger, GlyphBox, GlyphBoxer, Plotter, filter_glyph_boxes
from rasterplot.legend import Legend, make_legend
from rasterplot.padding import pad_x, pad_y
from rasterplot.painter import RasterPainter
from rasterplot.text import RGBA, TextStyle
from rasterplot.ticks import ConstantTicks, Tick


LOGGER = logging.getLogger(__name__)

GLYPH_BOX_COLOR: RGBA = (255, 0, 0, 255)


@dataclass
class Title:
    style: TextStyle
    text: str = ""
    padding: float = 0.0


@dataclass(frozen=True)
class PlotterEntry:
    plotter: Plotter
    y_axis: int = 0


@dataclass(frozen=True)
class PlotLayout:
    area: Canvas
    y_axis: Canvas
    x_axis: Canvas
    data: Canvas
    legend: Canvas
    secondary_y_axis: Canvas | None = None


class Plot:
    """A chart: title, one X axis, one or more Y axes, renderers and a legend."""

    def __init__(self, defaults: PlotDefaults = DEFAULT_PLOT_DEFAULTS) -> None:
        self.defaults = defaults
        self.title = Title(
            style=TextStyle.create(
                color=defaults.foreground_color,
                font_family=defaults.font_family,
                font_size_px=defaults.title_font_px,
                strict=defaults.strict_fonts,
            ),
            padding=defaults.title_padding,
        )
        self.background_color: RGBA | None = defaults.background_color
        self.x: Axis = make_axis(defaults)
        self.ys: list[Axis] = [make_axis(defaults)]
        self.legend: Legend = make_legend(defaults)
        self.plotters: list[PlotterEntry] = []

    def add(self, *plotters: Plotter) -> None:
        for p in plotters:
            self.add_with_axis(0, p)

    def add_with_axis(self, y_axis: int, *plotters: Plotter) -> None:
        if not 0 <= y_axis < len(self.ys):
            raise ValueError(f"y axis index out of range: {y_axis} (plot has {len(self.ys)})")
        y = self.ys[y_axis]
        for p in plotters:
            if isinstance(p, DataRanger):
                xmin, xmax, ymin, ymax = p.data_range()
                self.x.min = min(self.x.min, xmin)
                self.x.max = max(self.x.max, xmax)
                y.min = min(y.min, ymin)
                y.max = max(y.max, ymax)
            self.plotters.append(PlotterEntry(plotter=p, y_axis=y_axis))

    def add_y_axis(self) -> int:
        self.ys.append(make_axis(self.defaults))
        return len(self.ys) - 1

    def glyph_boxes(self) -> list[GlyphBox]:
        boxes: list[GlyphBox] = []
        for entry in self.plotters:
            if isinstance(entry.plotter, GlyphBoxer):
                boxes.extend(entry.plotter.glyph_boxes(self, self.x, self.ys[entry.y_axis]))
        return filter_glyph_boxes(boxes)

    def sanitize_ranges(self) -> None:
        self.x.sanitize_range()
        for y in self.ys:
            y.sanitize_range()

    def layout(self, c: Canvas) -> PlotLayout:
        """Compute every stage canvas for `c` without painting anything."""
        self.sanitize_ranges()
        area = self._below_title(c)

        margin_right = -self.defaults.secondary_axis_margin if len(self.ys) > 1 else 0.0
        x_height = HorizontalAxis(self.x).size()
        y_width = VerticalAxis(self.ys[0]).size()

        secondary = None
        if len(self.ys) > 1:
            strip = area.crop(area.rect.width() + margin_right, 0.0, x_height, 0.0)
            secondary = pad_y(self, strip)

        layout = PlotLayout(
            area=area,
            y_axis=pad_y(self, area.crop(0.0, 0.0, x_height, 0.0)),
            x_axis=pad_x(self, area.crop(y_width, margin_right, 0.0, 0.0)),
            data=pad_y(self, pad_x(self, area.crop(y_width, margin_right, x_height, 0.0))),
            legend=area.crop(y_width, margin_right, x_height, 0.0),
            secondary_y_axis=secondary,
        )
        LOGGER.debug("plot layout area=%s data=%s", area.rect, layout.data.rect)
        return layout

    def draw(self, c: Canvas) -> None:
        if self.background_color is not None:
            c.set_color(self.background_color)
            c.fill(c.rect.path())
        if self.title.text:
            c.fill_text(self.title.style, Point(c.center().x, c.rect.max.y), -0.5, -1.0, self.title.text)

        layout = self.layout(c)
        VerticalAxis(self.ys[0]).draw(layout.y_axis)
        HorizontalAxis(self.x).draw(layout.x_axis)
        for entry in self.plotters:
            entry.plotter.plot(layout.data, self, self.x, self.ys[entry.y_axis])
        self.legend.draw(layout.legend)
        if layout.secondary_y_axis is not None:
            VerticalAxis(self.ys[1], align_right=True).draw(layout.secondary_y_axis)

    def data_canvas(self, c: Canvas) -> Canvas:
        return self.layout(c).data

    def transforms(
        self,
        c: Canvas,
        x_axis: Axis | None = None,
        y_axis: Axis | None = None,
    ) -> tuple[Callable[[float], float], Callable[[float], float]]:
        """Data-to-device functions on data canvas `c`; defaults to X and the primary Y axis."""
        x = self.x if x_axis is None else x_axis
        y = self.ys[0] if y_axis is None else y_axis

        def x_fn(v: float) -> float:
            return c.x(x.norm(v))

        def y_fn(v: float) -> float:
            return c.y(y.norm(v))

        return x_fn, y_fn

    def draw_glyph_boxes(self, c: Canvas) -> None:
        c.painter.set_color(GLYPH_BOX_COLOR)
        c.painter.set_line_width(1.0)
        for b in self.glyph_boxes():
            anchor = Point(c.x(b.x), c.y(b.y))
            c.stroke(b.rect.offset(anchor).path())

    def nominal_x(self, *names: str) -> None:
        """Configure X for categorical data at positions 0..len(names)-1."""
        if not names:
            raise ValueError("nominal_x requires at least one name")
        self.x.tick.line = replace(self.x.tick.line, width=0.0)
        self.x.tick.length = 0.0
        self.x.line = replace(self.x.line, width=0.0)
        self.ys[-1].padding = self.x.tick.label.width(names[0]) / 2.0
        self.x.tick.marker = ConstantTicks([Tick(float(i), name) for i, name in enumerate(names)])
        self.x.min = min(self.x.min, 0.0)
        self.x.max = max(self.x.max, float(len(names) - 1))

    def nominal_y(self, y_axis: int, *names: str) -> None:
        if not names:
            raise ValueError("nominal_y requires at least one name")
        if not 0 <= y_axis < len(self.ys):
            raise ValueError(f"y axis index out of range: {y_axis} (plot has {len(self.ys)})")
        y = self.ys[y_axis]
        y.tick.line = replace(y.tick.line, width=0.0)
        y.tick.length = 0.0
        y.line = replace(y.line, width=0.0)
        self.x.padding = max(self.x.padding, y.tick.label.height(names[0]) / 2.0)
        y.tick.marker = ConstantTicks([Tick(float(i), name) for i, name in enumerate(names)])
        y.min = min(y.min, 0.0)
        y.max = max(y.max, float(len(names) - 1))

    def hide_x(self) -> None:
        _hide(self.x)

    def hide_y(self) -> None:
        for y in self.ys:
            _hide(y)

    def hide_axes(self) -> None:
        self.hide_x()
        self.hide_y()

    def to_rgba(self, width: int, height: int) -> np.ndarray:
        painter = RasterPainter(width, height)
        self.draw(Canvas.full(painter, width, height))
        return painter.rgba()

    def save(self, path: str | os.PathLike[str], width: int, height: int) -> None:
        LOGGER.info("saving %dx%d plot to %s", width, height, path)
        Image.fromarray(self.to_rgba(width, height)).save(path)

    def _below_title(self, c: Canvas) -> Canvas:
        if not self.title.text:
            return c
        return c.crop(0.0, 0.0, 0.0, -(self.title.style.height(self.title.text) + self.title.padding))


def _hide(axis: Axis) -> None:
    axis.tick.length = 0.0
    axis.tick.line = replace(axis.tick.line, width=0.0)
    axis.line = replace(axis.line, width=0.0)
    axis.padding = 0.0
    axis.tick.marker = ConstantTicks([])
