from __future__ import annotations

import numpy as np

from gridlegend.colors import RGBA
from gridlegend.raster.canvas import draw_pixel


def draw_markers(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    size: int = 1,
    *,
    shape: str = "s",
    face_color: RGBA | None = None,
) -> None:
    """Draw one marker per point. ``color`` strokes the outline, ``face_color`` fills it."""
    if shape == "none":
        return
    radius = max(0, size // 2)
    edge, face = marker_masks(shape, radius)
    if face_color is None and shape == "s" and radius <= 1:
        # tiny square markers are drawn solid, as scatter points
        edge = edge | face
    for x, y in zip(xs.tolist(), ys.tolist(), strict=False):
        if face_color is not None:
            _stamp(dst, int(x), int(y), face, face_color)
        _stamp(dst, int(x), int(y), edge, color)


def marker_masks(shape: str, radius: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(edge, face)`` boolean masks of shape ``(2r+1, 2r+1)``."""
    span = np.arange(-radius, radius + 1)
    dx, dy = np.meshgrid(span, span)
    if shape in {"+", "x"}:
        strokes = (dx == 0) | (dy == 0) if shape == "+" else (np.abs(dx) == np.abs(dy))
        return strokes, np.zeros_like(strokes)
    if shape == ".":
        dot = _inside(shape="o", dx=dx, dy=dy, radius=max(1, radius // 3))
        return dot, np.zeros_like(dot)
    outer = _inside(shape=shape, dx=dx, dy=dy, radius=radius)
    inner = _inside(shape=shape, dx=dx, dy=dy, radius=radius - 1) if radius > 0 else np.zeros_like(outer)
    return outer & ~inner, inner


def _inside(*, shape: str, dx: np.ndarray, dy: np.ndarray, radius: float) -> np.ndarray:
    if radius < 0:
        return np.zeros(dx.shape, dtype=bool)
    if shape == "s":
        return (np.abs(dx) <= radius) & (np.abs(dy) <= radius)
    if shape == "o":
        return dx * dx + dy * dy <= radius * radius + radius
    if shape == "d":
        return np.abs(dx) + np.abs(dy) <= radius
    if shape in {"^", "v"}:
        # canvas rows grow downward, so "^" widens toward positive dy
        depth = dy + radius if shape == "^" else radius - dy
        return (np.abs(dy) <= radius) & (2 * np.abs(dx) <= depth)
    raise ValueError(f"unsupported marker shape: {shape!r}")


def _stamp(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    radius = mask.shape[0] // 2
    for yy, xx in zip(*np.nonzero(mask), strict=False):
        draw_pixel(dst, x + int(xx) - radius, y + int(yy) - radius, color)
