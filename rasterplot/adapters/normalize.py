from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from rasterplot.errors import PlotDataError
from rasterplot.series import SeriesData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


LOGGER = logging.getLogger(__name__)


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
    source_name: str | None = None,
) -> SeriesData:
    """Coerce plot input into float64 arrays plus a finite-point mask.

    `y` may be a sequence, numpy array, torch tensor or pandas Series; with
    `data=` it may name a DataFrame column. When `x` is omitted a numeric
    Series index is used, otherwise sample positions 0..n-1.
    """
    y_values = _resolve_input(y, key="y", data=data)
    if y_values is None:
        raise PlotDataError("y input is required")

    y_arr = _coerce_1d_numeric(y_values, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    if x is None:
        x_arr = _implicit_x(y_values, y_arr.size)
    else:
        x_values = _resolve_input(x, key="x", data=data)
        x_arr = _coerce_1d_numeric(x_values, label="x")

    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not np.any(mask):
        raise PlotDataError("series contains no finite points")
    dropped = int(mask.size - np.count_nonzero(mask))
    if dropped:
        LOGGER.debug("series %r has %d non-finite points", source_name, dropped)

    return SeriesData(x=x_arr, y=y_arr, mask=mask, source_name=source_name)


def _implicit_x(y_values: Any, size: int) -> np.ndarray:
    if pd is not None and isinstance(y_values, pd.Series) and _is_numeric_dtype(y_values.index):
        if not isinstance(y_values.index, pd.RangeIndex):
            return y_values.index.to_numpy(dtype=np.float64)
    return np.arange(size, dtype=np.float64)


def _resolve_input(value: Any, key: str, data: Any) -> Any:
    if data is not None:
        if pd is None:
            raise PlotDataError("pandas is required when using `data=`")
        if not isinstance(data, pd.DataFrame):
            raise PlotDataError("`data` must be a pandas DataFrame")
        if isinstance(value, str):
            if value not in data.columns:
                raise PlotDataError(f"column not found: {value}")
            return data[value]
        if value is None and key == "y":
            numeric_cols = [c for c in data.columns if _is_numeric_dtype(data[c])]
            if len(numeric_cols) != 1:
                raise PlotDataError("when y is omitted, data must have exactly one numeric column")
            return data[numeric_cols[0]]
        return value

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 1:
            raise PlotDataError("DataFrame input must contain exactly one numeric column")
        return value[numeric_cols[0]]

    return value


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    try:
        return bool(pd.api.types.is_numeric_dtype(series))
    except (TypeError, ValueError):
        return False


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
        elif isinstance(raw, Decimal):
            out[i] = float(raw)
        else:
            try:
                out[i] = float(raw)
            except (TypeError, ValueError) as exc:
                raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
