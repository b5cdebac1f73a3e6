from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import numpy as np

from gridlegend.colors import RGBA


SeriesMode = Literal["markers", "lines", "lines+markers"]
LineStyle = Literal["-", "--", ":", "-.", "none"]
MarkerShape = Literal["none", ".", "o", "s", "d", "^", "v", "+", "x"]

LINE_STYLES: tuple[str, ...] = ("-", "--", ":", "-.", "none")
MARKER_SHAPES: tuple[str, ...] = ("none", ".", "o", "s", "d", "^", "v", "+", "x")


@dataclass(frozen=True)
class SeriesData:
    x: np.ndarray
    y: np.ndarray
    mask: np.ndarray
    source_name: str | None = None


@dataclass(frozen=True)
class SeriesStyle:
    mode: SeriesMode
    color: RGBA = (62, 149, 255, 255)
    marker_size: int = 1
    line_width: int = 1
    line_style: LineStyle = "-"
    marker: MarkerShape = "s"
    marker_edge_color: RGBA | None = None
    marker_face_color: RGBA | None = None


@dataclass(frozen=True)
class SeriesSpec:
    data: SeriesData
    style: SeriesStyle
    label: str | None = None


@dataclass(frozen=True)
class SampleItem:
    """Visual identity of one plotted series, reused to draw its legend glyph.

    ``marker_edge_color`` and ``marker_face_color`` of ``None`` fall back to
    ``color`` and to no fill respectively.
    """

    color: RGBA = (62, 149, 255, 255)
    line_style: LineStyle = "-"
    line_width: int = 1
    marker: MarkerShape = "none"
    marker_edge_color: RGBA | None = None
    marker_face_color: RGBA | None = None
    marker_size: int = 6

    def __post_init__(self) -> None:
        if self.line_style not in LINE_STYLES:
            raise ValueError(f"unsupported line style: {self.line_style!r}")
        if self.marker not in MARKER_SHAPES:
            raise ValueError(f"unsupported marker: {self.marker!r}")
        if self.line_width < 1:
            raise ValueError("line_width must be >= 1")
        if self.marker_size < 1:
            raise ValueError("marker_size must be >= 1")

    @property
    def draws_line(self) -> bool:
        return self.line_style != "none"

    @property
    def draws_marker(self) -> bool:
        return self.marker != "none"

    @classmethod
    def from_series(cls, spec: SeriesSpec) -> "SampleItem":
        style = spec.style
        return cls(
            color=style.color,
            line_style=style.line_style if style.mode in {"lines", "lines+markers"} else "none",
            line_width=max(1, style.line_width),
            marker=style.marker if style.mode in {"markers", "lines+markers"} else "none",
            marker_edge_color=style.marker_edge_color,
            marker_face_color=style.marker_face_color,
            marker_size=max(2, style.marker_size),
        )
