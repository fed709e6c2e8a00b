from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rasterplot.axis import HorizontalAxis, VerticalAxis
from rasterplot.draw import Canvas
from rasterplot.glyphbox import GlyphBox

if TYPE_CHECKING:
    from rasterplot.plot import Plot


LOGGER = logging.getLogger(__name__)


def left_most(c: Canvas, boxes: Sequence[GlyphBox]) -> GlyphBox:
    min_x = c.rect.min.x
    found = GlyphBox()
    for b in boxes:
        if b.size().x <= 0 or not (0.0 <= b.x <= 1.0):
            continue
        x = c.x(b.x) + b.rect.min.x
        if x < min_x:
            min_x = x
            found = b
    return found


def right_most(c: Canvas, boxes: Sequence[GlyphBox]) -> GlyphBox:
    max_x = c.rect.max.x
    found = GlyphBox(x=1.0)
    for b in boxes:
        if b.size().x <= 0 or not (0.0 <= b.x <= 1.0):
            continue
        x = c.x(b.x) + b.rect.min.x + b.size().x
        if x > max_x:
            max_x = x
            found = b
    return found


def bottom_most(c: Canvas, boxes: Sequence[GlyphBox]) -> GlyphBox:
    min_y = c.rect.min.y
    found = GlyphBox()
    for b in boxes:
        if b.size().y <= 0 or not (0.0 <= b.y <= 1.0):
            continue
        y = c.y(b.y) + b.rect.min.y
        if y < min_y:
            min_y = y
            found = b
    return found


def top_most(c: Canvas, boxes: Sequence[GlyphBox]) -> GlyphBox:
    max_y = c.rect.max.y
    found = GlyphBox(y=1.0)
    for b in boxes:
        if b.size().y <= 0 or not (0.0 <= b.y <= 1.0):
            continue
        y = c.y(b.y) + b.rect.min.y + b.size().y
        if y > max_y:
            max_y = y
            found = b
    return found


def solve_bounds(
    raw_min: float,
    raw_max: float,
    low_norm: float,
    low_offset: float,
    high_norm: float,
    high_offset: float,
) -> tuple[float, float] | None:
    # (n, m) that put both glyph edges on the raw bounds; None when the anchors coincide.
    if low_norm == high_norm:
        return None
    lo = raw_min - low_offset
    hi = raw_max - high_offset
    denom = low_norm - high_norm
    n = (low_norm * hi - high_norm * lo) / denom
    m = ((low_norm - 1.0) * hi - high_norm * lo + lo) / denom
    if not (math.isfinite(n) and math.isfinite(m)):
        return None
    return n, m


def pad_x_boxes(c: Canvas, data_boxes: Sequence[GlyphBox], axis_boxes: Sequence[GlyphBox]) -> Canvas:
    left = left_most(c, data_boxes)
    right = right_most(c, list(data_boxes) + list(axis_boxes))
    bounds = solve_bounds(c.rect.min.x, c.rect.max.x, left.x, left.rect.min.x, right.x, right.rect.max.x)
    if bounds is None:
        LOGGER.warning("horizontal padding is degenerate (extreme glyphs share x=%s); keeping raw bounds", left.x)
        return c
    LOGGER.debug("padded x bounds (%.3f, %.3f) -> (%.3f, %.3f)", c.rect.min.x, c.rect.max.x, bounds[0], bounds[1])
    return c.with_x_bounds(*bounds)


def pad_y_boxes(c: Canvas, data_boxes: Sequence[GlyphBox], axis_boxes: Sequence[GlyphBox]) -> Canvas:
    bottom = bottom_most(c, data_boxes)
    top = top_most(c, list(data_boxes) + list(axis_boxes))
    bounds = solve_bounds(c.rect.min.y, c.rect.max.y, bottom.y, bottom.rect.min.y, top.y, top.rect.max.y)
    if bounds is None:
        LOGGER.warning("vertical padding is degenerate (extreme glyphs share y=%s); keeping raw bounds", bottom.y)
        return c
    LOGGER.debug("padded y bounds (%.3f, %.3f) -> (%.3f, %.3f)", c.rect.min.y, c.rect.max.y, bounds[0], bounds[1])
    return c.with_y_bounds(*bounds)


def pad_x(plt: "Plot", c: Canvas) -> Canvas:
    return pad_x_boxes(c, plt.glyph_boxes(), HorizontalAxis(plt.x).glyph_boxes())


def pad_y(plt: "Plot", c: Canvas) -> Canvas:
    axis_boxes: list[GlyphBox] = []
    for y_axis in plt.ys:
        axis_boxes.extend(VerticalAxis(y_axis).glyph_boxes())
    return pad_y_boxes(c, plt.glyph_boxes(), axis_boxes)
