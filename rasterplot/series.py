from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    source_name: str | None = None

    def finite_points(self) -> tuple[np.ndarray, np.ndarray]:
        return self.x[self.mask], self.y[self.mask]

    def data_range(self) -> tuple[float, float, float, float]:
        xs, ys = self.finite_points()
        return float(xs.min()), float(xs.max()), float(ys.min()), float(ys.max())
