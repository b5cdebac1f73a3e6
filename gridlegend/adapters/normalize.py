from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from gridlegend.errors import PlotDataError
from gridlegend.series import SeriesData


def normalize_xy(y: Any, *, x: Any = None, source_name: str | None = None) -> SeriesData:
    """Coerce array-like ``x``/``y`` inputs into float64 series data with a finite mask."""
    if y is None:
        raise PlotDataError("y input is required")
    y_arr = _coerce_1d(y, label="y")
    if y_arr.size == 0:
        raise PlotDataError("empty series")

    x_arr = np.arange(y_arr.size, dtype=np.float64) if x is None else _coerce_1d(x, label="x")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    if not np.any(mask):
        raise PlotDataError("series contains no finite points")
    return SeriesData(x=x_arr, y=y_arr, mask=mask, source_name=source_name)


def _coerce_1d(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")

    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
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
