from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from rasterplot.scales import format_tick, format_ticks_for_axis, generate_nice_ticks, ticks_within_range


@dataclass(frozen=True)
class Tick:
    value: float
    label: str = ""

    def is_minor(self) -> bool:
        return self.label == ""

    def length_offset(self, length: float) -> float:
        # Minor marks are half length and touch the axis line.
        if self.is_minor():
            return length / 2.0
        return 0.0


class Ticker(Protocol):
    def ticks(self, vmin: float, vmax: float) -> list[Tick]: ...


@dataclass(frozen=True)
class DefaultTicks:
    suggested: int = 5

    def ticks(self, vmin: float, vmax: float) -> list[Tick]:
        if vmax <= vmin:
            return [Tick(vmin, format_tick(vmin))]
        major = generate_nice_ticks(vmin, vmax, self.suggested)
        major = ticks_within_range(major, vmin=vmin, vmax=vmax)
        labels = format_ticks_for_axis(major)
        out = [Tick(float(v), lbl) for v, lbl in zip(major.tolist(), labels, strict=False)]
        if major.size < 2:
            return out
        half = float(major[1] - major[0]) / 2.0
        minors = np.arange(float(major[0]) - half, float(major[-1]) + half * 1.5, 2.0 * half, dtype=np.float64)
        eps = half * 1e-6
        for value in minors.tolist():
            if vmin - eps <= value <= vmax + eps:
                out.append(Tick(float(value)))
        out.sort(key=lambda t: t.value)
        return out


@dataclass(frozen=True)
class LogTicks:
    # Used for the linear fallback when the range holds no power of ten.
    suggested: int = 5

    def ticks(self, vmin: float, vmax: float) -> list[Tick]:
        if vmin <= 0 or vmax <= vmin:
            return DefaultTicks(self.suggested).ticks(vmin, vmax)
        lo = int(math.ceil(math.log10(vmin) - 1e-12))
        hi = int(math.floor(math.log10(vmax) + 1e-12))
        if hi < lo:
            return DefaultTicks(self.suggested).ticks(vmin, vmax)
        out: list[Tick] = []
        for exp in range(lo - 1, hi + 1):
            base = 10.0**exp
            if exp >= lo:
                out.append(Tick(base, format_tick(base)))
            for mult in range(2, 10):
                value = mult * base
                if vmin <= value <= vmax:
                    out.append(Tick(value))
        out.sort(key=lambda t: t.value)
        return out


class ConstantTicks:
    def __init__(self, ticks: Sequence[Tick]) -> None:
        self._ticks = tuple(ticks)

    def ticks(self, vmin: float, vmax: float) -> list[Tick]:
        return list(self._ticks)

    def __repr__(self) -> str:
        return f"ConstantTicks({list(self._ticks)!r})"
