from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from PIL import Image, ImageDraw

from rasterplot.raster.canvas import RGBA, blend_coverage


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Fill a polygon given in raster (column, row) coordinates."""
    if len(points) < 3:
        return
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = max(0, int(math.floor(min(xs))))
    y0 = max(0, int(math.floor(min(ys))))
    x1 = min(dst.shape[1], int(math.ceil(max(xs))))
    y1 = min(dst.shape[0], int(math.ceil(max(ys))))
    if x1 <= x0 or y1 <= y0:
        return
    mask = Image.new("L", (x1 - x0, y1 - y0), 0)
    local = [(px - x0, py - y0) for px, py in points]
    ImageDraw.Draw(mask).polygon(local, fill=255)
    blend_coverage(dst, x0, y0, np.asarray(mask, dtype=np.uint8), color)
