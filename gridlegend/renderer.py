from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Protocol

import numpy as np

from gridlegend.colors import RGBA
from gridlegend.geometry import Extent, Rect
from gridlegend.raster import draw_markers, draw_polyline, draw_text, fill_rect, stroke_rect, text_size
from gridlegend.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX
from gridlegend.series import SampleItem


HAlign = Literal["left", "center", "right"]


@dataclass(frozen=True)
class FontSpec:
    family: str = DEFAULT_FONT_FAMILY
    size_px: float = DEFAULT_FONT_SIZE_PX
    bold: bool = False
    italic: bool = False


class TextMeasurer(Protocol):
    def measure_text(self, text: str, font: FontSpec) -> Extent: ...


class Renderer(TextMeasurer, Protocol):
    """Drawing capability used by the legend. Coordinates are y-up pixels."""

    def draw_text(self, x: float, y: float, text: str, font: FontSpec, color: RGBA, *, halign: HAlign = "left") -> None: ...

    def draw_line(self, xs: tuple[float, ...], ys: tuple[float, ...], item: SampleItem) -> None: ...

    def draw_point(self, x: float, y: float, item: SampleItem) -> None: ...

    def draw_box(self, rect: Rect, *, fill: RGBA, edge: RGBA, line_width: int) -> None: ...


class RasterRenderer:
    """Pillow/numpy renderer over an RGBA canvas whose row 0 is the top edge."""

    def __init__(self, canvas: np.ndarray | None = None) -> None:
        self.canvas = canvas

    def measure_text(self, text: str, font: FontSpec) -> Extent:
        w, h = text_size(text, font_family=font.family, font_size_px=font.size_px, italic=font.italic)
        return Extent(width=float(w), height=float(h))

    def draw_text(self, x: float, y: float, text: str, font: FontSpec, color: RGBA, *, halign: HAlign = "left") -> None:
        canvas = self._require_canvas()
        extent = self.measure_text(text, font)
        left = x - {"left": 0.0, "center": extent.width / 2, "right": extent.width}[halign]
        top = self._row(y + extent.height / 2)
        draw_text(
            canvas,
            int(round(left)),
            int(round(top)),
            text,
            color,
            font_family=font.family,
            font_size_px=font.size_px,
            embolden_px=2 if font.bold else 1,
            italic=font.italic,
        )

    def draw_line(self, xs: tuple[float, ...], ys: tuple[float, ...], item: SampleItem) -> None:
        canvas = self._require_canvas()
        px = np.rint(np.asarray(xs, dtype=np.float64)).astype(np.int32)
        py = np.rint(np.asarray([self._row(v) for v in ys], dtype=np.float64)).astype(np.int32)
        draw_polyline(canvas, px, py, color=item.color, width=item.line_width, line_style=item.line_style)

    def draw_point(self, x: float, y: float, item: SampleItem) -> None:
        canvas = self._require_canvas()
        draw_markers(
            canvas,
            np.asarray([int(round(x))], dtype=np.int32),
            np.asarray([int(round(self._row(y)))], dtype=np.int32),
            color=item.marker_edge_color or item.color,
            size=item.marker_size,
            shape=item.marker,
            face_color=item.marker_face_color,
        )

    def draw_box(self, rect: Rect, *, fill: RGBA, edge: RGBA, line_width: int) -> None:
        canvas = self._require_canvas()
        x, y, w, h = rect.to_canvas(canvas.shape[0])
        fill_rect(canvas, x, y, w, h, fill)
        stroke_rect(canvas, x, y, w, h, edge, line_width=line_width)

    def _row(self, y: float) -> float:
        return self._require_canvas().shape[0] - y

    def _require_canvas(self) -> np.ndarray:
        if self.canvas is None:
            raise RuntimeError("renderer has no canvas bound; only measure_text is available")
        return self.canvas
