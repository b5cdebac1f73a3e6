from gridlegend.api import HostBinding, ItemGrid, figure, grid_legend
from gridlegend.errors import (
    AlignmentLengthMismatch,
    EmptyGrid,
    GridLegendError,
    InvalidAlignment,
    InvalidOption,
    ItemGridShapeMismatch,
    NoLegendableObjects,
    PlotDataError,
    TooManyItems,
)
from gridlegend.figure import Axes, Figure
from gridlegend.geometry import Extent, Rect
from gridlegend.layout import GridLayout, GridSpec, LayoutGeometry, compute_layout, normalize_alignment
from gridlegend.legend import GridLegend
from gridlegend.location import Placement, resolve_location
from gridlegend.options import GridLegendOptions, validate_options
from gridlegend.series import SampleItem

__all__ = [
    "AlignmentLengthMismatch",
    "Axes",
    "EmptyGrid",
    "Extent",
    "Figure",
    "GridLayout",
    "GridLegend",
    "GridLegendError",
    "GridLegendOptions",
    "GridSpec",
    "HostBinding",
    "InvalidAlignment",
    "InvalidOption",
    "ItemGrid",
    "ItemGridShapeMismatch",
    "LayoutGeometry",
    "NoLegendableObjects",
    "Placement",
    "PlotDataError",
    "Rect",
    "SampleItem",
    "TooManyItems",
    "compute_layout",
    "figure",
    "grid_legend",
    "normalize_alignment",
    "resolve_location",
    "validate_options",
]
