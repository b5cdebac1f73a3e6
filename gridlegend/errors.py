from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when host plot data cannot be normalized or rendered."""


class GridLegendError(ValueError):
    """Base class for grid legend construction errors."""


class InvalidAlignment(GridLegendError):
    pass


class AlignmentLengthMismatch(GridLegendError):
    pass


class TooManyItems(GridLegendError):
    pass


class ItemGridShapeMismatch(GridLegendError):
    pass


class EmptyGrid(GridLegendError):
    pass


class InvalidOption(GridLegendError):
    pass


class NoLegendableObjects(GridLegendError):
    """Nothing to put in a legend; the public entry point treats this as a no-op."""
