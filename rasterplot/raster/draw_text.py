from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from rasterplot.errors import FontResolutionError
from rasterplot.raster.canvas import RGBA, blend_coverage


DEFAULT_FONT_FAMILY = "Comic Mono"
MONO_FONT_FALLBACK_PATTERNS = (
    "comicmono",
    "comic mono",
    "menlo",
    "monaco",
    "courier new",
    "courier",
    "dejavusansmono",
    "dejavu sans mono",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font: Font,
    rotate_deg: int = 0,
) -> None:
    """Blend `text` into `dst` with the top-left of its (rotated) bounding box at (x, y)."""
    if not text:
        return
    mask = _render_mask(text=text, font=font)
    mask = _rotate_mask(mask, rotate_deg=rotate_deg)
    blend_coverage(dst, x, y, mask, color)


def text_size(text: str, *, font: Font, rotate_deg: int = 0) -> tuple[int, int]:
    if not text:
        return (0, 0)
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    turns = _normalize_quarter_turns(rotate_deg)
    if turns % 2 == 1:
        return (h, w)
    return (w, h)


def load_font(font_family: str, font_size_px: float, *, strict: bool = False) -> Font:
    try:
        return _load_font(font_family, float(font_size_px), strict)
    except OSError as exc:
        raise FontResolutionError(f"cannot load font {font_family!r} at {font_size_px}px: {exc}") from exc


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float, strict: bool) -> Font:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family, strict=strict)
    if font_path is None:
        if strict:
            raise FontResolutionError(f"font family not found: {font_family!r}")
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        if strict:
            raise
        return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str, *, strict: bool = False) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) if strict else (wanted,) + MONO_FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            name = path.name.lower().replace(" ", "")
            if p in stem or p in name:
                return path
    return None


@lru_cache(maxsize=512)
def _render_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)
