from __future__ import annotations

import logging
from dataclasses import dataclass

from gridlegend.colors import RGBA
from gridlegend.figure import Axes
from gridlegend.geometry import Rect
from gridlegend.layout import GridLayout, GridSpec, LayoutGeometry
from gridlegend.location import Placement, resolve_location
from gridlegend.options import TRANSPARENT, GridLegendOptions
from gridlegend.renderer import FontSpec, Renderer


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LegendStyle:
    fill: RGBA
    edge: RGBA
    line_width: int
    text_color: RGBA
    font: FontSpec


def resolve_style(options: GridLegendOptions, axes: Axes) -> LegendStyle:
    """Fill in axes-inherited defaults. With the box off, edge and fill default to transparent."""
    if options.box:
        edge = options.edge_color if options.edge_color is not None else axes.frame_color
        fill = options.color if options.color is not None else axes.plot_bg_color
    else:
        edge = options.edge_color if options.edge_color is not None else TRANSPARENT
        fill = options.color if options.color is not None else TRANSPARENT
    return LegendStyle(
        fill=fill,
        edge=edge,
        line_width=options.line_width,
        text_color=options.text_color if options.text_color is not None else axes.text_color,
        font=FontSpec(
            family=options.font_name or axes.font_family,
            size_px=options.font_size or axes.font_size_px,
            bold=options.bold,
            italic=options.italic,
        ),
    )


class GridLegend:
    """Handle to a grid legend overlay anchored to one axes.

    The grid layout is fixed at construction; only the placement is
    recomputed when the host figure is resized.
    """

    def __init__(
        self,
        axes: Axes,
        grid: GridSpec,
        layout: GridLayout,
        options: GridLegendOptions,
        style: LegendStyle,
    ) -> None:
        self.axes = axes
        self.grid = grid
        self.layout = layout
        self.options = options
        self.style = style
        self.placement: Placement | None = None
        self._attached = False

    @property
    def geometry(self) -> LayoutGeometry:
        return self.layout.geometry

    @property
    def attached(self) -> bool:
        return self._attached

    def bounds(self) -> Rect | None:
        return None if self.placement is None else self.placement.rect

    def attach(self) -> Placement:
        """Bind to the axes, subscribe to figure resizes and place the legend."""
        self.axes.grid_legend = self
        self.axes.figure.subscribe_resize(self.on_resize)
        self._attached = True
        return self.relocate(self.axes.allocated_rect())

    def relocate(self, host_rect: Rect) -> Placement:
        placement = resolve_location(
            host_rect,
            self.options.location,
            self.options.offset,
            self.geometry.total_width,
            self.geometry.total_height,
            self.options.outer_margin,
        )
        self.axes.set_plot_rect(placement.host_rect)
        self.placement = placement
        LOGGER.debug(
            "grid legend placed %s at (%.1f, %.1f) size %dx%d",
            placement.location,
            placement.x,
            placement.y,
            self.geometry.total_width,
            self.geometry.total_height,
        )
        return placement

    def on_resize(self, host_rect: Rect) -> None:
        self.relocate(host_rect)

    def remove(self) -> None:
        """Detach from the axes and give back any plot area taken by an outside location."""
        self.axes.figure.unsubscribe_resize(self.on_resize)
        if self.axes.grid_legend is self:
            self.axes.grid_legend = None
            self.axes.set_plot_rect(None)
        self.placement = None
        self._attached = False

    def draw(self, renderer: Renderer) -> None:
        if self.placement is None or not self.options.visible:
            return
        ox, oy = self.placement.corner
        style = self.style
        renderer.draw_box(self.placement.rect, fill=style.fill, edge=style.edge, line_width=style.line_width)
        for label in self.layout.labels:
            renderer.draw_text(ox + label.x, oy + label.y, label.text, style.font, style.text_color, halign=label.halign)
        for sample in self.layout.samples:
            y = oy + sample.y
            if sample.item.draws_line:
                renderer.draw_line((ox + sample.x_start, ox + sample.x_end), (y, y), sample.item)
            if sample.item.draws_marker:
                renderer.draw_point(ox + sample.marker_x, y, sample.item)
