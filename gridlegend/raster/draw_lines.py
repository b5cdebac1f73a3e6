from __future__ import annotations

import numpy as np

from gridlegend.colors import RGBA
from gridlegend.raster.canvas import draw_pixel


# on/off run lengths in pixels, scaled by the stroke width
DASH_PATTERNS: dict[str, tuple[int, ...]] = {
    "-": (),
    "--": (6, 4),
    ":": (1, 3),
    "-.": (6, 3, 1, 3),
}


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    line_style: str = "-",
) -> None:
    if xs.size < 2 or line_style == "none":
        return
    if line_style not in DASH_PATTERNS:
        raise ValueError(f"unsupported line style: {line_style!r}")
    pattern = tuple(run * max(1, width) for run in DASH_PATTERNS[line_style])
    phase = 0
    for i in range(xs.size - 1):
        phase = _draw_line_segment(
            dst,
            int(xs[i]),
            int(ys[i]),
            int(xs[i + 1]),
            int(ys[i + 1]),
            color=color,
            width=width,
            pattern=pattern,
            phase=phase,
        )


def _pattern_on(pattern: tuple[int, ...], phase: int) -> bool:
    if not pattern:
        return True
    pos = phase % sum(pattern)
    for idx, run in enumerate(pattern):
        if pos < run:
            return idx % 2 == 0
        pos -= run
    return True


def _draw_line_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    *,
    color: RGBA,
    width: int,
    pattern: tuple[int, ...],
    phase: int,
) -> int:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        if _pattern_on(pattern, phase):
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        phase += 1
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy
    return phase


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
