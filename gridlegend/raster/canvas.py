from __future__ import annotations

import numpy as np

from gridlegend.colors import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend_span(dst[y, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend_span(dst[ya : yb + 1, x], color)


def fill_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA) -> None:
    """Alpha-blend a solid rectangle given by its top-left corner."""
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + width)
    y1 = min(dst.shape[0], y + height)
    if x1 <= x0 or y1 <= y0:
        return
    _blend_span(dst[y0:y1, x0:x1], color)


def stroke_rect(dst: np.ndarray, x: int, y: int, width: int, height: int, color: RGBA, line_width: int = 1) -> None:
    if width <= 0 or height <= 0:
        return
    lw = max(1, min(line_width, width, height))
    fill_rect(dst, x, y, width, lw, color)
    fill_rect(dst, x, y + height - lw, width, lw, color)
    fill_rect(dst, x, y + lw, lw, height - 2 * lw, color)
    fill_rect(dst, x + width - lw, y + lw, lw, height - 2 * lw, color)


def _blend_span(view: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    src = np.asarray(color[0:3], dtype=np.float32)
    view[..., :3] = (src * a + view[..., :3].astype(np.float32) * inv).astype(np.uint8)
    view[..., 3] = 255
