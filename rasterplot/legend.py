from __future__ import annotations

from dataclasses import dataclass, field

from rasterplot.config import DEFAULT_PLOT_DEFAULTS, PlotDefaults
from rasterplot.draw import Canvas
from rasterplot.geometry import Point, Rectangle
from rasterplot.glyphbox import Thumbnailer
from rasterplot.text import TextStyle


@dataclass(frozen=True)
class LegendEntry:
    text: str
    thumbnailers: tuple[Thumbnailer, ...]


@dataclass
class Legend:
    """Labelled thumbnails stacked in a corner of the plot area.

    Entries are drawn right-aligned at the bottom unless `left` or `top` is
    set; `x_offset`/`y_offset` shift the whole block and `padding` separates
    consecutive entries.
    """

    style: TextStyle
    padding: float = 0.0
    top: bool = False
    left: bool = False
    x_offset: float = 0.0
    y_offset: float = 0.0
    thumbnail_width: float = 20.0
    entries: list[LegendEntry] = field(default_factory=list)

    def add(self, text: str, *thumbnailers: Thumbnailer) -> None:
        self.entries.append(LegendEntry(text=text, thumbnailers=tuple(thumbnailers)))

    def entry_height(self) -> float:
        return max((self.style.height(e.text) for e in self.entries), default=0.0)

    def draw(self, c: Canvas) -> None:
        if not self.entries:
            return
        icon_x = c.rect.min.x
        text_x = icon_x + self.thumbnail_width + self.style.space_width()
        xalign = 0.0
        if not self.left:
            icon_x = c.rect.max.x - self.thumbnail_width
            text_x = icon_x - self.style.space_width()
            xalign = -1.0
        text_x += self.x_offset
        icon_x += self.x_offset

        entry_h = self.entry_height()
        y = c.rect.max.y - entry_h
        if not self.top:
            y = c.rect.min.y + (entry_h + self.padding) * (len(self.entries) - 1)
        y += self.y_offset

        icon = Canvas(
            painter=c.painter,
            rect=Rectangle(Point(icon_x, y), Point(icon_x + self.thumbnail_width, y + entry_h)),
        )
        for entry in self.entries:
            for thumb in entry.thumbnailers:
                thumb.thumbnail(icon)
            y_off = (entry_h - self.style.height(entry.text)) / 2.0
            c.fill_text(self.style, Point(text_x, icon.rect.min.y + y_off), xalign, 0.0, entry.text)
            icon = icon.crop(0.0, 0.0, -(entry_h + self.padding), -(entry_h + self.padding))


def make_legend(defaults: PlotDefaults = DEFAULT_PLOT_DEFAULTS) -> Legend:
    style = TextStyle.create(
        color=defaults.foreground_color,
        font_family=defaults.font_family,
        font_size_px=defaults.legend_font_px,
        strict=defaults.strict_fonts,
    )
    return Legend(style=style, thumbnail_width=defaults.legend_thumbnail_width)
