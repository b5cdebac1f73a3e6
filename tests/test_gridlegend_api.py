from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from gridlegend import (
    Extent,
    Figure,
    HostBinding,
    InvalidAlignment,
    InvalidOption,
    ItemGrid,
    Rect,
    SampleItem,
    TooManyItems,
    figure,
    grid_legend,
)
from gridlegend.renderer import FontSpec


class FixedMeasurer:
    def measure_text(self, text: str, font: FontSpec) -> Extent:
        lines = text.split("\n")
        return Extent(width=6.0 * max(len(line) for line in lines), height=10.0 * len(lines))


MEASURER = FixedMeasurer()
# axes allocation for this figure is Rect(48, 32, 400, 300)
FIG_W = 464
FIG_H = 356


def _figure_with_series(n: int) -> Figure:
    fig = Figure(width=FIG_W, height=FIG_H)
    ax = fig.axes()
    for i in range(n):
        ax.plot(x=[0, 1, 2], y=[i, i + 1, i], color=(40 * i, 120, 200), marker="o" if i % 2 else "none")
    return fig


class GridLegendApiTests(unittest.TestCase):
    def test_figure_derives_missing_dimension(self) -> None:
        self.assertEqual(figure(width=1600).height, 900)
        self.assertEqual(figure(height=90).width, 160)
        with self.assertRaises(ValueError):
            figure(width=0)

    def test_northeast_scenario(self) -> None:
        fig = _figure_with_series(4)
        legend = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER)
        assert legend is not None
        self.assertEqual(legend.geometry.total_width, 122)
        self.assertEqual(legend.geometry.total_height, 38)
        assert legend.placement is not None
        self.assertEqual(legend.placement.corner, (448 - 10 - 122, 332 - 10 - 38))
        self.assertIs(fig.primary_axes.grid_legend, legend)

    def test_eastoutside_shrinks_plot_area_until_removed(self) -> None:
        fig = _figure_with_series(4)
        ax = fig.primary_axes
        assert ax is not None
        legend = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="eastoutside")
        assert legend is not None and legend.placement is not None
        self.assertEqual(ax.plot_rect(), Rect(48.0, 32.0, 400.0 - 132.0, 300.0))
        self.assertEqual(legend.placement.x, ax.plot_rect().right + 10)
        self.assertEqual(legend.placement.y, 32.0 + 150.0 - 19.0)

        legend.remove()
        self.assertEqual(ax.plot_rect(), ax.allocated_rect())
        self.assertIsNone(ax.grid_legend)
        self.assertFalse(legend.attached)

    def test_resize_relocates_without_remeasuring(self) -> None:
        fig = _figure_with_series(4)
        measurer = mock.Mock(wraps=MEASURER)
        legend = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=measurer, location="eastoutside")
        assert legend is not None and legend.placement is not None
        calls = measurer.measure_text.call_count
        first = legend.placement

        fig.resize(FIG_W + 100, FIG_H)
        assert legend.placement is not None
        self.assertEqual(measurer.measure_text.call_count, calls)
        self.assertEqual(legend.placement.x, first.x + 100)
        self.assertEqual(fig.primary_axes.plot_rect().width, 500.0 - 132.0)

    def test_resize_to_same_size_keeps_corner(self) -> None:
        for location in ("northeast", "southwestoutside", "northoutside"):
            with self.subTest(location=location):
                fig = _figure_with_series(4)
                legend = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location=location, offset=(3, -4))
                assert legend is not None
                before = legend.placement
                plot_before = fig.primary_axes.plot_rect()
                fig.resize(FIG_W, FIG_H)
                self.assertEqual(legend.placement, before)
                self.assertEqual(fig.primary_axes.plot_rect(), plot_before)

    def test_unknown_location_matches_northeast(self) -> None:
        fig = _figure_with_series(4)
        ne = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="ne")
        assert ne is not None
        ne_corner = ne.placement.corner
        other = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="somewhere")
        assert other is not None
        self.assertEqual(other.placement.corner, ne_corner)

    def test_fewer_series_than_cells_are_padded(self) -> None:
        fig = _figure_with_series(3)
        legend = grid_legend(fig, ["A", "B"], ["X", "Y"], HostBinding(fig.primary_axes), measurer=MEASURER)
        assert legend is not None
        self.assertEqual(len(legend.layout.samples), 3)
        self.assertEqual(legend.grid.items[1][1], None)
        self.assertEqual(len([p for p in legend.layout.labels if p.kind == "row"]), 2)

    def test_series_become_sample_items(self) -> None:
        fig = _figure_with_series(2)
        legend = grid_legend(fig, "only row", ["X", "Y"], measurer=MEASURER)
        assert legend is not None
        first, second = legend.grid.items[0]
        self.assertEqual(first.marker, "none")
        self.assertEqual(first.line_style, "-")
        self.assertEqual(second.marker, "o")
        self.assertEqual(second.color, (40, 120, 200, 255))

    def test_too_many_series_raises_and_leaves_nothing_attached(self) -> None:
        fig = _figure_with_series(5)
        with self.assertRaises(TooManyItems):
            grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER)
        self.assertIsNone(fig.primary_axes.grid_legend)
        self.assertIsNone(fig._resize_callback)

    def test_explicit_items_grid(self) -> None:
        fig = Figure(width=FIG_W, height=FIG_H)
        ax = fig.axes()
        items = [[SampleItem(color=(255, 0, 0, 255)), None], [None, SampleItem(marker="d", line_style="none")]]
        legend = grid_legend(fig, ["A", "B"], ["X", "Y"], ItemGrid(items), measurer=MEASURER)
        assert legend is not None
        self.assertIs(legend.axes, ax)
        self.assertEqual([(s.row, s.col) for s in legend.layout.samples], [(0, 0), (1, 1)])

    def test_item_grid_overflow_raises(self) -> None:
        fig = Figure(width=FIG_W, height=FIG_H)
        fig.axes()
        with self.assertRaises(TooManyItems):
            grid_legend(fig, ["A"], ["X", "Y"], ItemGrid([SampleItem()] * 3), measurer=MEASURER)

    def test_nothing_to_legend_is_a_no_op(self) -> None:
        self.assertIsNone(grid_legend(Figure(width=200, height=100), ["A"], ["X"], measurer=MEASURER))
        fig = Figure(width=200, height=100)
        fig.axes()
        self.assertIsNone(grid_legend(fig, ["A"], ["X"], measurer=MEASURER))

    def test_new_legend_replaces_previous_one(self) -> None:
        fig = _figure_with_series(4)
        first = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="westoutside")
        second = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="south")
        assert first is not None and second is not None
        self.assertFalse(first.attached)
        self.assertTrue(second.attached)
        self.assertIs(fig.primary_axes.grid_legend, second)
        self.assertEqual(fig.primary_axes.plot_rect(), fig.primary_axes.allocated_rect())

    def test_failed_layout_keeps_previous_legend(self) -> None:
        fig = _figure_with_series(4)
        first = grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER)
        with self.assertRaises(InvalidAlignment):
            grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, alignment="top")
        self.assertIs(fig.primary_axes.grid_legend, first)

    def test_failure_during_placement_tears_down_legend(self) -> None:
        fig = _figure_with_series(4)
        with mock.patch("gridlegend.legend.resolve_location", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                grid_legend(fig, ["A", "B"], ["X", "Y"], measurer=MEASURER, location="eastoutside")
        self.assertIsNone(fig.primary_axes.grid_legend)
        self.assertIsNone(fig._resize_callback)
        self.assertEqual(fig.primary_axes.plot_rect(), fig.primary_axes.allocated_rect())

    def test_unknown_option_raises(self) -> None:
        fig = _figure_with_series(1)
        with self.assertRaises(InvalidOption):
            grid_legend(fig, ["A"], ["X"], measurer=MEASURER, fontsize=12)

    def test_axes_from_another_figure_is_rejected(self) -> None:
        fig = _figure_with_series(1)
        other = _figure_with_series(1)
        with self.assertRaises(ValueError):
            grid_legend(fig, ["A"], ["X"], HostBinding(other.primary_axes), measurer=MEASURER)


class GridLegendRenderTests(unittest.TestCase):
    def _frame(self, **options) -> np.ndarray:
        fig = _figure_with_series(4)
        if options:
            grid_legend(fig, ["Alpha", "Beta"], ["One", "Two"], **options)
        return fig.to_rgba()

    def test_legend_changes_rendered_frame(self) -> None:
        plain = self._frame()
        with_legend = self._frame(location="northwest", color="w", text_color="k")
        self.assertEqual(with_legend.shape, (FIG_H, FIG_W, 4))
        self.assertFalse(np.array_equal(plain, with_legend))

    def test_legend_box_is_drawn_inside_its_bounds(self) -> None:
        fig = _figure_with_series(4)
        legend = grid_legend(fig, ["Alpha", "Beta"], ["One", "Two"], location="southwest", color=(255, 255, 255), edge_color="r")
        assert legend is not None
        frame = fig.to_rgba()
        x, y, w, h = legend.bounds().to_canvas(fig.height)
        self.assertEqual(tuple(frame[y, x + w // 2]), (255, 0, 0, 255))
        self.assertEqual(tuple(frame[y + h // 2, x]), (255, 0, 0, 255))

    def test_invisible_legend_draws_nothing(self) -> None:
        plain = self._frame()
        hidden = self._frame(location="northwest", visible="off")
        np.testing.assert_array_equal(plain, hidden)

    def test_box_off_still_draws_labels(self) -> None:
        plain = self._frame()
        boxless = self._frame(box="off", text_color="w", font_weight="bold", font_angle="italic")
        self.assertFalse(np.array_equal(plain, boxless))


if __name__ == "__main__":
    unittest.main()
