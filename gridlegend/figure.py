from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

import numpy as np

from gridlegend.adapters import normalize_xy
from gridlegend.colors import RGBA, parse_color, with_alpha
from gridlegend.errors import PlotDataError
from gridlegend.geometry import Rect
from gridlegend.raster import draw_markers, draw_polyline, draw_text, fill_rect, new_canvas, stroke_rect, text_size
from gridlegend.raster.draw_text import DEFAULT_FONT_FAMILY
from gridlegend.renderer import RasterRenderer
from gridlegend.scales import DataLimits, build_transform, compute_limits, map_to_pixels, union_limits
from gridlegend.series import LINE_STYLES, MARKER_SHAPES, SeriesSpec, SeriesStyle

if TYPE_CHECKING:
    from gridlegend.legend import GridLegend


LOGGER = logging.getLogger(__name__)

ResizeCallback = Callable[[Rect], None]


def _coerce_color(color: Any, alpha: float) -> RGBA:
    parsed = parse_color(color)
    if parsed is None:
        raise PlotDataError("series color cannot be 'none'")
    return with_alpha(parsed, alpha)


def _optional_color(color: Any) -> RGBA | None:
    return None if color is None else parse_color(color)


@dataclass(frozen=True)
class FigureStyle:
    background: RGBA = (12, 16, 23, 255)


@dataclass
class Axes:
    """Plot area hosted by a figure.

    The figure allocates the axes a rectangle (figure size minus gutters); an
    outside legend may shrink the drawn plot area inside that allocation via
    ``set_plot_rect``.
    """

    figure: "Figure" = field(repr=False, compare=False)
    title: str = ""

    _series: list[SeriesSpec] = field(default_factory=list)
    _plot_rect_override: Rect | None = None
    grid_legend: "GridLegend | None" = None

    # plot region gutters
    gutter_left: int = 48
    gutter_right: int = 16
    gutter_top: int = 24
    gutter_bottom: int = 32

    # style
    frame_color: RGBA = (60, 67, 78, 255)
    plot_bg_color: RGBA = (20, 26, 36, 255)
    text_color: RGBA = (208, 218, 232, 255)
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = 12.0
    _last_limits: DataLimits | None = None

    def plot(
        self,
        y: Any = None,
        *,
        x: Any = None,
        label: str | None = None,
        color: Any = (255, 165, 0),
        width: int = 1,
        line_style: str = "-",
        marker: str = "none",
        marker_size: int = 6,
        marker_edge_color: Any = None,
        marker_face_color: Any = None,
        alpha: float = 1.0,
    ) -> "Axes":
        mode = "lines" if marker == "none" else "lines+markers"
        return self._add_series(
            y,
            x=x,
            label=label,
            style=SeriesStyle(
                mode=mode,
                color=_coerce_color(color, alpha),
                marker_size=max(1, marker_size),
                line_width=max(1, width),
                line_style=self._check_line_style(line_style),
                marker=self._check_marker("s" if marker == "none" else marker),
                marker_edge_color=_optional_color(marker_edge_color),
                marker_face_color=_optional_color(marker_face_color),
            ),
        )

    def scatter(
        self,
        y: Any = None,
        *,
        x: Any = None,
        label: str | None = None,
        color: Any = (62, 149, 255),
        size: int = 2,
        marker: str = "s",
        face_color: Any = None,
        alpha: float = 1.0,
    ) -> "Axes":
        return self._add_series(
            y,
            x=x,
            label=label,
            style=SeriesStyle(
                mode="markers",
                color=_coerce_color(color, alpha),
                marker_size=max(1, size),
                line_width=1,
                line_style="none",
                marker=self._check_marker(marker),
                marker_face_color=_optional_color(face_color),
            ),
        )

    def _add_series(self, y: Any, *, x: Any, label: str | None, style: SeriesStyle) -> "Axes":
        series_data = normalize_xy(y, x=x, source_name=label)
        self._series.append(SeriesSpec(data=series_data, style=style, label=label))
        return self

    @staticmethod
    def _check_line_style(line_style: str) -> Any:
        if line_style not in LINE_STYLES:
            raise PlotDataError(f"unsupported line style: {line_style}")
        return line_style

    @staticmethod
    def _check_marker(marker: str) -> Any:
        if marker not in MARKER_SHAPES:
            raise PlotDataError(f"unsupported marker: {marker}")
        return marker

    def legendable_series(self) -> list[SeriesSpec]:
        """Series that can be drawn as legend samples, in plotting order."""
        return [spec for spec in self._series if spec.style.mode in {"lines", "markers", "lines+markers"}]

    def allocated_rect(self) -> Rect:
        width = max(1, self.figure.width - self.gutter_left - self.gutter_right)
        height = max(1, self.figure.height - self.gutter_top - self.gutter_bottom)
        return Rect(float(self.gutter_left), float(self.gutter_bottom), float(width), float(height))

    def plot_rect(self) -> Rect:
        return self._plot_rect_override if self._plot_rect_override is not None else self.allocated_rect()

    def set_plot_rect(self, rect: Rect | None) -> "Axes":
        """Override the drawn plot area; ``None`` restores the figure allocation."""
        if rect is not None and (rect.width < 1 or rect.height < 1):
            raise ValueError("plot rect width and height must be >= 1")
        self._plot_rect_override = rect
        return self

    def last_limits(self) -> DataLimits | None:
        return self._last_limits

    def render(self, canvas: np.ndarray) -> None:
        px0, py0, pw, ph = self.plot_rect().to_canvas(canvas.shape[0])
        fill_rect(canvas, px0, py0, pw, ph, self.plot_bg_color)

        if self._series and pw > 1 and ph > 1:
            limits = union_limits([compute_limits(s.data.x, s.data.y, s.data.mask) for s in self._series])
            self._last_limits = limits
            transform = build_transform(limits, pw, ph)
            for spec in self._series:
                mask = spec.data.mask
                xs, ys = map_to_pixels(spec.data.x[mask], spec.data.y[mask], transform, pw, ph)
                xs = xs + px0
                ys = ys + py0
                style = spec.style
                if style.mode in {"lines", "lines+markers"}:
                    draw_polyline(canvas, xs, ys, color=style.color, width=style.line_width, line_style=style.line_style)
                if style.mode in {"markers", "lines+markers"}:
                    draw_markers(
                        canvas,
                        xs,
                        ys,
                        color=style.marker_edge_color or style.color,
                        size=style.marker_size,
                        shape=style.marker,
                        face_color=style.marker_face_color,
                    )

        stroke_rect(canvas, px0, py0, pw, ph, self.frame_color)
        if self.title:
            tw, th = text_size(self.title, font_family=self.font_family, font_size_px=self.font_size_px)
            ty = max(0, py0 - th - 4)
            draw_text(canvas, px0 + (pw - tw) // 2, ty, self.title, self.text_color, font_family=self.font_family, font_size_px=self.font_size_px)


@dataclass
class Figure:
    """Host container: owns the pixel size, the axes, and the resize subscription."""

    width: int = 1280
    height: int = 720
    style: FigureStyle = field(default_factory=FigureStyle)
    _axes: Axes | None = None
    _resize_callback: ResizeCallback | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")

    def axes(self, *, title: str = "", **style: Any) -> Axes:
        if self._axes is not None:
            raise PlotDataError("figure supports a single axes")
        self._axes = Axes(figure=self, title=title, **style)
        return self._axes

    @property
    def primary_axes(self) -> Axes | None:
        return self._axes

    def subscribe_resize(self, callback: ResizeCallback) -> None:
        """Register the single resize callback; a later subscription replaces it."""
        self._resize_callback = callback

    def unsubscribe_resize(self, callback: ResizeCallback) -> None:
        if self._resize_callback == callback:
            self._resize_callback = None

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = int(width)
        self.height = int(height)
        LOGGER.debug("figure resized to %dx%d", self.width, self.height)
        if self._resize_callback is None:
            return
        host = self._axes.allocated_rect() if self._axes is not None else Rect(0.0, 0.0, float(self.width), float(self.height))
        self._resize_callback(host)

    def to_rgba(self) -> np.ndarray:
        frame = new_canvas(self.width, self.height, color=self.style.background)
        if self._axes is None:
            return frame
        self._axes.render(frame)
        if self._axes.grid_legend is not None:
            self._axes.grid_legend.draw(RasterRenderer(frame))
        return frame
