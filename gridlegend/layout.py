from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from gridlegend.errors import AlignmentLengthMismatch, EmptyGrid, InvalidAlignment, ItemGridShapeMismatch, TooManyItems
from gridlegend.geometry import Extent
from gridlegend.interpreter import Label, interpret, label_text
from gridlegend.options import (
    DEFAULT_ITEM_LINE_LENGTH,
    DEFAULT_MARGIN_HEIGHT,
    DEFAULT_MARGIN_WIDTH,
    DEFAULT_PADDING_HEIGHT,
    DEFAULT_PADDING_WIDTH,
)
from gridlegend.renderer import FontSpec, HAlign, TextMeasurer
from gridlegend.series import SampleItem


ALIGNMENT_TOKENS: dict[str, HAlign] = {
    "left": "left",
    "l": "left",
    "center": "center",
    "c": "center",
    "right": "right",
    "r": "right",
}

ItemGrid = tuple[tuple[SampleItem | None, ...], ...]


@dataclass(frozen=True)
class GridSpec:
    row_labels: tuple[str, ...]
    col_labels: tuple[str, ...]
    items: ItemGrid

    @property
    def n_rows(self) -> int:
        return len(self.row_labels)

    @property
    def n_cols(self) -> int:
        return len(self.col_labels)

    @classmethod
    def build(
        cls,
        row_labels: Label | Sequence[Label],
        col_labels: Label | Sequence[Label],
        items: Any = None,
        *,
        interpreter: str = "tex",
    ) -> "GridSpec":
        """Flatten and interpret labels, then shape ``items`` into a row x column grid.

        A bare string is a single label. Inside a label sequence, a nested
        sequence of strings is one multi-line label.
        """
        rows = tuple(interpret(label_text(label), interpreter) for label in _as_label_list(row_labels))
        cols = tuple(interpret(label_text(label), interpreter) for label in _as_label_list(col_labels))
        return cls(row_labels=rows, col_labels=cols, items=build_item_grid(items, len(rows), len(cols)))


@dataclass(frozen=True)
class LayoutGeometry:
    row_height: int
    header_height: int
    col_widths: tuple[int, ...]
    total_width: int
    total_height: int


@dataclass(frozen=True)
class LabelPlacement:
    kind: Literal["row", "column"]
    index: int
    text: str
    x: float
    y: float
    halign: HAlign


@dataclass(frozen=True)
class SamplePlacement:
    row: int
    col: int
    item: SampleItem
    x_start: float
    x_end: float
    y: float

    @property
    def marker_x(self) -> float:
        return (self.x_start + self.x_end) / 2


@dataclass(frozen=True)
class GridLayout:
    geometry: LayoutGeometry
    alignments: tuple[HAlign, ...]
    labels: tuple[LabelPlacement, ...]
    samples: tuple[SamplePlacement, ...]


def _as_label_list(labels: Label | Sequence[Label]) -> list[Label]:
    if isinstance(labels, str):
        return [labels]
    return list(labels)


def normalize_alignment(alignment: str | Sequence[str] | None, n_columns: int) -> tuple[HAlign, ...]:
    """Expand ``alignment`` to ``n_columns + 1`` tokens; index 0 is the row-label column.

    A single value (string or one-element sequence) is broadcast to every
    column, ``n_columns`` values get ``left`` prepended for the row labels, and
    ``n_columns + 1`` values are used as given.
    """
    if alignment is None or alignment == "":
        raw: list[str] = ["left"] + ["center"] * n_columns
    elif isinstance(alignment, str):
        raw = ["left"] + [alignment] * n_columns
    else:
        values = list(alignment)
        if len(values) == 1:
            raw = ["left"] + values * n_columns
        elif len(values) == n_columns:
            raw = ["left"] + values
        elif len(values) == n_columns + 1:
            raw = values
        else:
            raise AlignmentLengthMismatch(
                f"alignment has {len(values)} entries; expected 1, {n_columns} or {n_columns + 1}"
            )

    out: list[HAlign] = []
    for token in raw:
        key = token.strip().lower() if isinstance(token, str) else None
        if key not in ALIGNMENT_TOKENS:
            raise InvalidAlignment(f"invalid alignment {token!r}; options are 'left', 'center' and 'right'")
        out.append(ALIGNMENT_TOKENS[key])
    return tuple(out)


def build_item_grid(items: Any, n_rows: int, n_cols: int) -> ItemGrid:
    """Shape ``items`` into ``n_rows`` x ``n_cols``.

    A flat sequence fills the grid row-major and is padded with empty cells; a
    sequence of row sequences must match the grid exactly.
    """
    if items is None:
        return tuple(tuple(None for _ in range(n_cols)) for _ in range(n_rows))

    values = list(items)
    if values and all(isinstance(row, (list, tuple)) for row in values):
        if len(values) != n_rows or any(len(row) != n_cols for row in values):
            widths = sorted({len(row) for row in values})
            raise ItemGridShapeMismatch(f"item grid has {len(values)} rows of width {widths}; expected {n_rows}x{n_cols} to match the labels")
        return tuple(tuple(_check_item(cell) for cell in row) for row in values)

    capacity = n_rows * n_cols
    if len(values) > capacity:
        raise TooManyItems(f"{len(values)} items do not fit a {n_rows}x{n_cols} grid; add row or column labels")
    flat = [_check_item(cell) for cell in values] + [None] * (capacity - len(values))
    return tuple(tuple(flat[r * n_cols : (r + 1) * n_cols]) for r in range(n_rows))


def _check_item(cell: Any) -> SampleItem | None:
    if cell is None or isinstance(cell, SampleItem):
        return cell
    raise TypeError(f"grid cells must be SampleItem or None, got {type(cell).__name__}")


def compute_layout(
    grid: GridSpec,
    measurer: TextMeasurer,
    *,
    font: FontSpec,
    alignment: str | Sequence[str] | None = None,
    item_line_length: int = DEFAULT_ITEM_LINE_LENGTH,
    margin_width: int = DEFAULT_MARGIN_WIDTH,
    margin_height: int = DEFAULT_MARGIN_HEIGHT,
    padding_width: int = DEFAULT_PADDING_WIDTH,
    padding_height: int = DEFAULT_PADDING_HEIGHT,
) -> GridLayout:
    n_rows, n_cols = grid.n_rows, grid.n_cols
    alignments = normalize_alignment(alignment, n_cols)
    if n_rows == 0 or n_cols == 0:
        raise EmptyGrid(f"a grid legend needs at least one row and one column, got {n_rows}x{n_cols}")

    row_extents = [measurer.measure_text(text, font) for text in grid.row_labels]
    col_extents = [measurer.measure_text(text, font) for text in grid.col_labels]
    geometry = grid_geometry(
        row_extents,
        col_extents,
        item_line_length=item_line_length,
        margin_width=margin_width,
        margin_height=margin_height,
        padding_width=padding_width,
        padding_height=padding_height,
    )

    labels: list[LabelPlacement] = []
    samples: list[SamplePlacement] = []
    col_widths = geometry.col_widths
    half = item_line_length / 2
    for i in range(n_rows + 1):
        y_bottom = (n_rows - i) * (geometry.row_height + margin_height) + padding_height
        y_top = y_bottom + (geometry.header_height if i == 0 else geometry.row_height)
        y0 = (y_bottom + y_top) / 2
        for k in range(n_cols + 1):
            if i == 0 and k == 0:
                continue
            x_left = k * margin_width + padding_width + sum(col_widths[:k])
            x_right = x_left + col_widths[k]
            align = alignments[k]
            if align == "left":
                x0 = float(x_left)
                span = (x0, x0 + item_line_length)
            elif align == "center":
                x0 = (x_left + x_right) / 2
                span = (x0 - half, x0 + half)
            else:
                x0 = float(x_right)
                span = (x0 - item_line_length, x0)

            if i == 0:
                labels.append(LabelPlacement("column", k - 1, grid.col_labels[k - 1], x0, y0, align))
            elif k == 0:
                labels.append(LabelPlacement("row", i - 1, grid.row_labels[i - 1], x0, y0 + margin_height, align))
            else:
                item = grid.items[i - 1][k - 1]
                if item is not None:
                    samples.append(SamplePlacement(i - 1, k - 1, item, span[0], span[1], y0))

    return GridLayout(geometry=geometry, alignments=alignments, labels=tuple(labels), samples=tuple(samples))


def grid_geometry(
    row_extents: Sequence[Extent],
    col_extents: Sequence[Extent],
    *,
    item_line_length: int = DEFAULT_ITEM_LINE_LENGTH,
    margin_width: int = DEFAULT_MARGIN_WIDTH,
    margin_height: int = DEFAULT_MARGIN_HEIGHT,
    padding_width: int = DEFAULT_PADDING_WIDTH,
    padding_height: int = DEFAULT_PADDING_HEIGHT,
) -> LayoutGeometry:
    if not row_extents or not col_extents:
        raise EmptyGrid("a grid legend needs at least one row and one column")
    n_rows = len(row_extents)
    n_cols = len(col_extents)
    row_height = math.ceil(max(e.height for e in row_extents))
    header_height = math.ceil(max(e.height for e in col_extents))
    col_widths = (math.ceil(max(e.width for e in row_extents)),) + tuple(
        math.ceil(max(e.width, item_line_length)) for e in col_extents
    )
    total_width = sum(col_widths) + n_cols * margin_width + 2 * padding_width
    total_height = header_height + n_rows * row_height + n_rows * margin_height + 2 * padding_height
    return LayoutGeometry(
        row_height=row_height,
        header_height=header_height,
        col_widths=col_widths,
        total_width=total_width,
        total_height=total_height,
    )
