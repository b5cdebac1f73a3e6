from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Union

from gridlegend.errors import NoLegendableObjects, PlotDataError
from gridlegend.figure import Axes, Figure
from gridlegend.interpreter import Label
from gridlegend.layout import GridSpec, compute_layout
from gridlegend.legend import GridLegend, resolve_style
from gridlegend.options import GridLegendOptions, validate_options
from gridlegend.renderer import RasterRenderer, TextMeasurer
from gridlegend.series import SampleItem


LOGGER = logging.getLogger(__name__)

DEFAULT_ASPECT_RATIO = 16.0 / 9.0
DEFAULT_FIGURE_SIZE = (1280, 720)


@dataclass(frozen=True)
class HostBinding:
    """Legend the series already plotted on ``axes``."""

    axes: Axes


@dataclass(frozen=True)
class ItemGrid:
    """Legend an explicit grid (or flat row-major list) of sample items."""

    items: Sequence[Any]
    axes: Axes | None = None


LegendSource = Union[HostBinding, ItemGrid, None]


def figure(width: int | None = None, height: int | None = None, *, aspect_ratio: float = DEFAULT_ASPECT_RATIO) -> Figure:
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_FIGURE_SIZE
    elif width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None
    return Figure(width=width, height=height)


def grid_legend(
    fig: Figure,
    row_labels: Label | Sequence[Label],
    col_labels: Label | Sequence[Label],
    source: LegendSource = None,
    *,
    measurer: TextMeasurer | None = None,
    **options: Any,
) -> GridLegend | None:
    """Create a grid legend on ``fig`` and return its handle.

    ``source`` selects what fills the grid cells: a ``HostBinding`` legends the
    series of the given axes, an ``ItemGrid`` supplies the sample items
    directly, and ``None`` discovers the series of the ``parent`` option or of
    the figure's axes. When discovery finds nothing to legend, nothing is
    created and ``None`` is returned.

    Any grid legend already on the target axes is removed first. See
    ``GridLegendOptions`` for the accepted keyword options.
    """
    opts = validate_options(options)
    try:
        axes, items = _resolve_source(fig, source, opts)
    except NoLegendableObjects as exc:
        LOGGER.debug("grid legend skipped: %s", exc)
        return None

    grid = GridSpec.build(row_labels, col_labels, items, interpreter=opts.interpreter)
    style = resolve_style(opts, axes)
    layout = compute_layout(
        grid,
        measurer if measurer is not None else RasterRenderer(),
        font=style.font,
        alignment=opts.alignment,
        item_line_length=opts.item_size,
        margin_width=opts.margin_width,
        margin_height=opts.margin_height,
        padding_width=opts.padding_width,
        padding_height=opts.padding_height,
    )

    if axes.grid_legend is not None:
        axes.grid_legend.remove()
    legend = GridLegend(axes, grid, layout, opts, style)
    try:
        legend.attach()
    except Exception:
        legend.remove()
        raise
    return legend


def _resolve_source(fig: Figure, source: LegendSource, opts: GridLegendOptions) -> tuple[Axes, Any]:
    if isinstance(source, HostBinding):
        axes = _check_owner(fig, source.axes)
        return axes, _series_items(axes)

    if isinstance(source, ItemGrid):
        axes = source.axes or opts.parent or fig.primary_axes
        if axes is None:
            raise PlotDataError("figure has no axes to host the legend")
        return _check_owner(fig, axes), source.items

    if source is not None:
        raise TypeError(f"source must be HostBinding, ItemGrid or None, got {type(source).__name__}")

    axes = opts.parent or fig.primary_axes
    if axes is None:
        raise NoLegendableObjects("figure has no axes")
    items = _series_items(_check_owner(fig, axes))
    if not items:
        raise NoLegendableObjects("axes has no legendable series")
    return axes, items


def _series_items(axes: Axes) -> list[SampleItem]:
    return [SampleItem.from_series(spec) for spec in axes.legendable_series()]


def _check_owner(fig: Figure, axes: Any) -> Axes:
    if not isinstance(axes, Axes):
        raise TypeError(f"expected Axes, got {type(axes).__name__}")
    if axes.figure is not fig:
        raise PlotDataError("axes belongs to a different figure")
    return axes
