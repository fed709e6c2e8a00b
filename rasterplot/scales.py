from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Protocol

import numpy as np

from rasterplot.errors import PlotDataError


class Normalizer(Protocol):
    def normalize(self, vmin: float, vmax: float, value: float) -> float: ...


@dataclass(frozen=True)
class LinearScale:
    def normalize(self, vmin: float, vmax: float, value: float) -> float:
        return (value - vmin) / (vmax - vmin)


@dataclass(frozen=True)
class LogScale:
    def normalize(self, vmin: float, vmax: float, value: float) -> float:
        if vmin <= 0 or vmax <= 0 or value <= 0:
            raise PlotDataError(f"log scale requires positive values (range [{vmin}, {vmax}], value {value})")
        lo = math.log(vmin)
        return (math.log(value) - lo) / (math.log(vmax) - lo)


# (upper bound on the mantissa, nice mantissa) pairs.
_ROUNDED_MANTISSAS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))
_CEILED_MANTISSAS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Multiples of a 1/2/5 step covering [vmin, vmax] with about `target` values.

    The first and last values may overhang the range; see `ticks_within_range`.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    first = math.floor(vmin / step)
    last = math.ceil(vmax / step)
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def ticks_within_range(ticks: np.ndarray, *, vmin: float, vmax: float) -> np.ndarray:
    if ticks.size == 0:
        return ticks
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else max(1e-12, abs(vmax - vmin))
    eps = max(1e-12, step * 1e-6)
    out = ticks[(ticks >= vmin - eps) & (ticks <= vmax + eps)]
    if out.size == 0:
        if abs(vmax - vmin) > 1e-12:
            return np.asarray([vmin, vmax], dtype=np.float64)
        return np.asarray([vmin], dtype=np.float64)
    return out


def format_tick(value: float, *, step: float | None = None) -> str:
    """Label for one tick; `step` fixes the number of decimals shared by an axis."""
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude != 0 and (magnitude >= 1e6 or magnitude < 1e-6 or (step is not None and abs(step) < 1e-4)):
        return f"{value:.4e}"

    decimals = 6 if step is None else _decimals_from_step(step)
    exact = Decimal(str(value))
    try:
        text = format(exact.quantize(Decimal(1).scaleb(-decimals)), "f")
    except InvalidOperation:
        text = format(exact, "f")
    # Integers keep their trailing zeros (30, 40).
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks.tolist()]


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = math.floor(math.log10(value))
    scale = 10.0**exp
    mantissa = value / scale
    if round_result:
        nice = next((n for bound, n in _ROUNDED_MANTISSAS if mantissa < bound), 10.0)
    else:
        nice = next((n for bound, n in _CEILED_MANTISSAS if mantissa <= bound), 10.0)
    return nice * scale


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    exponent = Decimal(str(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
