from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float


def compute_limits(x: np.ndarray, y: np.ndarray, mask: np.ndarray, y_buffer_ratio: float = 0.05) -> DataLimits:
    vx = x[mask]
    vy = y[mask]
    xmin = float(np.min(vx))
    xmax = float(np.max(vx))
    ymin = float(np.min(vy))
    ymax = float(np.max(vy))

    if ymin == ymax:
        delta = max(1.0, abs(ymin) * y_buffer_ratio)
        ymin -= delta
        ymax += delta
    else:
        pad = (ymax - ymin) * y_buffer_ratio
        ymin -= pad
        ymax += pad

    if xmin == xmax:
        xmin -= 1.0
        xmax += 1.0

    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


def union_limits(limits: list[DataLimits]) -> DataLimits:
    if not limits:
        raise ValueError("at least one DataLimits is required")
    return DataLimits(
        xmin=min(lim.xmin for lim in limits),
        xmax=max(lim.xmax for lim in limits),
        ymin=min(lim.ymin for lim in limits),
        ymax=max(lim.ymax for lim in limits),
    )


def build_transform(limits: DataLimits, width: int, height: int) -> PlotTransform:
    if width <= 1 or height <= 1:
        raise ValueError("plot viewport width/height must be > 1")
    sx = (width - 1) / (limits.xmax - limits.xmin)
    tx = -limits.xmin * sx
    sy = (height - 1) / (limits.ymax - limits.ymin)
    ty = -limits.ymin * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def map_to_pixels(x: np.ndarray, y: np.ndarray, transform: PlotTransform, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    px = np.rint(x * transform.sx + transform.tx).astype(np.int32)
    py = np.rint(y * transform.sy + transform.ty).astype(np.int32)
    py = (height - 1) - py
    np.clip(px, 0, width - 1, out=px)
    np.clip(py, 0, height - 1, out=py)
    return px, py
