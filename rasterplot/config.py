from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class PlotDefaults:
    """Default styling applied to new plots, axes and legends."""

    font_family: str = "Comic Mono"
    strict_fonts: bool = False
    title_font_px: float = 14.0
    label_font_px: float = 12.0
    tick_font_px: float = 10.0
    legend_font_px: float = 10.0
    background_color: RGBA = (255, 255, 255, 255)
    foreground_color: RGBA = (0, 0, 0, 255)
    axis_line_width: float = 1.0
    tick_line_width: float = 1.0
    tick_length: float = 8.0
    axis_padding: float = 5.0
    title_padding: float = 0.0
    suggested_ticks: int = 5
    legend_thumbnail_width: float = 20.0
    secondary_axis_margin: float = 72.0


DEFAULT_PLOT_DEFAULTS = PlotDefaults()

_FONT_SIZE_KEYS = ("title_font_px", "label_font_px", "tick_font_px", "legend_font_px")
_NON_NEGATIVE_KEYS = (
    "axis_line_width",
    "tick_line_width",
    "tick_length",
    "axis_padding",
    "title_padding",
    "legend_thumbnail_width",
    "secondary_axis_margin",
)


def resolve_defaults(overrides: Mapping[str, Any] | None = None) -> PlotDefaults:
    raw: dict[str, Any] = asdict(DEFAULT_PLOT_DEFAULTS)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown plot default: {key}")
            raw[key] = value

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("`font_family` must be a non-empty string")
    for key in _FONT_SIZE_KEYS:
        if not isinstance(raw[key], (int, float)) or float(raw[key]) <= 0:
            raise ValueError(f"`{key}` must be a positive number")
    for key in _NON_NEGATIVE_KEYS:
        if not isinstance(raw[key], (int, float)) or float(raw[key]) < 0:
            raise ValueError(f"`{key}` must be a non-negative number")
    for key in ("background_color", "foreground_color"):
        raw[key] = _validate_color(key, raw[key])
    if not isinstance(raw["suggested_ticks"], int) or raw["suggested_ticks"] <= 0:
        raise ValueError("`suggested_ticks` must be a positive integer")

    return PlotDefaults(
        font_family=raw["font_family"].strip(),
        strict_fonts=bool(raw["strict_fonts"]),
        title_font_px=float(raw["title_font_px"]),
        label_font_px=float(raw["label_font_px"]),
        tick_font_px=float(raw["tick_font_px"]),
        legend_font_px=float(raw["legend_font_px"]),
        background_color=raw["background_color"],
        foreground_color=raw["foreground_color"],
        axis_line_width=float(raw["axis_line_width"]),
        tick_line_width=float(raw["tick_line_width"]),
        tick_length=float(raw["tick_length"]),
        axis_padding=float(raw["axis_padding"]),
        title_padding=float(raw["title_padding"]),
        suggested_ticks=int(raw["suggested_ticks"]),
        legend_thumbnail_width=float(raw["legend_thumbnail_width"]),
        secondary_axis_margin=float(raw["secondary_axis_margin"]),
    )


def _validate_color(key: str, value: Any) -> RGBA:
    if not isinstance(value, (tuple, list)) or len(value) not in (3, 4):
        raise ValueError(f"`{key}` must be an RGB or RGBA tuple")
    channels = [int(c) for c in value]
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError(f"`{key}` channels must be in [0, 255]")
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])
