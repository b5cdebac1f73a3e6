from __future__ import annotations

import re
from typing import Any

RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

SHORT_COLORS: dict[str, RGBA] = {
    "k": (0, 0, 0, 255),
    "b": (0, 0, 255, 255),
    "r": (255, 0, 0, 255),
    "g": (0, 255, 0, 255),
    "c": (0, 255, 255, 255),
    "m": (255, 0, 255, 255),
    "y": (255, 255, 0, 255),
    "w": (255, 255, 255, 255),
}
LONG_COLORS: dict[str, str] = {
    "black": "k",
    "blue": "b",
    "red": "r",
    "green": "g",
    "cyan": "c",
    "magenta": "m",
    "yellow": "y",
    "white": "w",
}


def parse_color(value: Any) -> RGBA | None:
    """Parse a color spec into RGBA255, or ``None`` for ``"none"``.

    Accepts short and long color names, ``#RRGGBB``/``#RRGGBBAA`` hex strings
    and RGB(A) sequences of 0-255 ints or 0-1 floats.
    """
    if isinstance(value, str):
        key = value.strip().lower()
        if key == "none":
            return None
        key = LONG_COLORS.get(key, key)
        if key in SHORT_COLORS:
            return SHORT_COLORS[key]
        if _HEX_COLOR.match(key):
            r = int(key[1:3], 16)
            g = int(key[3:5], 16)
            b = int(key[5:7], 16)
            a = int(key[7:9], 16) if len(key) == 9 else 255
            return (r, g, b, a)
        raise ValueError(f"unrecognized color: {value!r}")

    try:
        channels = [float(v) for v in value]
    except TypeError as exc:
        raise ValueError(f"unrecognized color: {value!r}") from exc
    if len(channels) not in (3, 4):
        raise ValueError(f"color must have 3 or 4 channels, got {len(channels)}")
    if any(c < 0 for c in channels):
        raise ValueError(f"color channels must be >= 0: {value!r}")
    if all(c <= 1.0 for c in channels) and any(isinstance(v, float) for v in value):
        channels = [c * 255.0 for c in channels]
    if any(c > 255 for c in channels):
        raise ValueError(f"color channels must be <= 255: {value!r}")
    if len(channels) == 3:
        channels.append(255.0)
    r, g, b, a = (int(round(c)) for c in channels)
    return (r, g, b, a)


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    r, g, b, a = color
    return (r, g, b, int(max(0.0, min(1.0, alpha)) * a))
