from __future__ import annotations

import unittest

from gridlegend import Rect, resolve_location
from gridlegend.location import ALIASES, LOCATIONS, canonical_location


HOST = Rect(0.0, 0.0, 400.0, 300.0)
W = 122
H = 38
M = 10


def _corner(keyword: str, offset: tuple[float, float] = (0.0, 0.0), host: Rect = HOST) -> tuple[float, float]:
    return resolve_location(host, keyword, offset, W, H, M).corner


class InsideLocationTests(unittest.TestCase):
    def test_northeast_insets_from_top_right(self) -> None:
        placement = resolve_location(HOST, "northeast", (0, 0), W, H, M)
        self.assertEqual(placement.corner, (400 - 10 - W, 300 - 10 - H))
        self.assertIsNone(placement.host_rect)
        self.assertEqual(placement.rect, Rect(268.0, 252.0, W, H))

    def test_compass_directions(self) -> None:
        expected = {
            "north": (139.0, 252.0),
            "east": (268.0, 131.0),
            "southeast": (268.0, 10.0),
            "south": (139.0, 10.0),
            "southwest": (10.0, 10.0),
            "west": (10.0, 131.0),
            "northwest": (10.0, 252.0),
        }
        for keyword, corner in expected.items():
            with self.subTest(keyword=keyword):
                self.assertEqual(_corner(keyword), corner)

    def test_inside_placement_respects_host_origin(self) -> None:
        host = Rect(48.0, 32.0, 400.0, 300.0)
        self.assertEqual(_corner("southwest", host=host), (58.0, 42.0))
        self.assertEqual(_corner("northeast", host=host), (316.0, 284.0))


class OutsideLocationTests(unittest.TestCase):
    def test_eastoutside_shrinks_host_width(self) -> None:
        placement = resolve_location(HOST, "eastoutside", (0, 0), W, H, M)
        self.assertEqual(placement.host_rect, Rect(0.0, 0.0, 400.0 - (W + M), 300.0))
        assert placement.host_rect is not None
        self.assertEqual(placement.x, placement.host_rect.right + M)
        self.assertEqual(placement.y, 150.0 - H / 2)
        # the legend ends flush with the original right edge
        self.assertEqual(placement.x + W, HOST.right)

    def test_outside_corners_and_hosts(self) -> None:
        expected = {
            "northoutside": ((139.0, 262.0), Rect(0.0, 0.0, 400.0, 252.0)),
            "northeastoutside": ((278.0, 262.0), Rect(0.0, 0.0, 268.0, 300.0)),
            "southeastoutside": ((278.0, 0.0), Rect(0.0, 0.0, 268.0, 300.0)),
            "southoutside": ((139.0, 0.0), Rect(0.0, 48.0, 400.0, 252.0)),
            "southwestoutside": ((0.0, 0.0), Rect(132.0, 0.0, 268.0, 300.0)),
            "westoutside": ((0.0, 131.0), Rect(132.0, 0.0, 268.0, 300.0)),
            "northwestoutside": ((0.0, 262.0), Rect(132.0, 0.0, 268.0, 300.0)),
        }
        for keyword, (corner, host) in expected.items():
            with self.subTest(keyword=keyword):
                placement = resolve_location(HOST, keyword, (0, 0), W, H, M)
                self.assertEqual(placement.corner, corner)
                self.assertEqual(placement.host_rect, host)

    def test_shrink_keeps_one_pixel_of_host(self) -> None:
        placement = resolve_location(Rect(0.0, 0.0, 50.0, 300.0), "eastoutside", (0, 0), W, H, M)
        self.assertEqual(placement.host_rect, Rect(0.0, 0.0, 1.0, 300.0))
        placement = resolve_location(Rect(0.0, 0.0, 400.0, 20.0), "southoutside", (0, 0), W, H, M)
        self.assertEqual(placement.host_rect, Rect(0.0, 19.0, 400.0, 1.0))


class KeywordTests(unittest.TestCase):
    def test_table_covers_sixteen_locations(self) -> None:
        self.assertEqual(len(LOCATIONS), 16)
        self.assertEqual(sum(rule.outside for rule in LOCATIONS.values()), 8)

    def test_abbreviations_and_case(self) -> None:
        for alias, name in ALIASES.items():
            if name.startswith("best"):
                continue
            with self.subTest(alias=alias):
                self.assertEqual(_corner(alias.upper()), _corner(name))
        self.assertEqual(canonical_location("NorthEastOutside"), "northeastoutside")

    def test_best_falls_back_to_fixed_locations(self) -> None:
        self.assertEqual(canonical_location("best"), "northeast")
        self.assertEqual(canonical_location("bo"), "eastoutside")
        self.assertEqual(_corner("best"), _corner("northeast"))
        best_outside = resolve_location(HOST, "bestoutside", (0, 0), W, H, M)
        east_outside = resolve_location(HOST, "eastoutside", (0, 0), W, H, M)
        self.assertEqual(best_outside.corner, east_outside.corner)
        self.assertEqual(best_outside.host_rect, east_outside.host_rect)

    def test_unknown_keyword_uses_northeast(self) -> None:
        with self.assertLogs("gridlegend.location", level="DEBUG"):
            corner = _corner("upper right")
        self.assertEqual(corner, _corner("northeast"))

    def test_offset_is_added_last(self) -> None:
        for keyword in list(LOCATIONS) + ["best", "bestoutside", "nowhere"]:
            with self.subTest(keyword=keyword):
                bx, by = _corner(keyword)
                self.assertEqual(_corner(keyword, offset=(5.0, -3.0)), (bx + 5.0, by - 3.0))

    def test_repeat_resolution_is_identical(self) -> None:
        for keyword in LOCATIONS:
            with self.subTest(keyword=keyword):
                first = resolve_location(HOST, keyword, (2, 3), W, H, M)
                second = resolve_location(HOST, keyword, (2, 3), W, H, M)
                self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
