from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Literal

from gridlegend.geometry import Rect


LOGGER = logging.getLogger(__name__)

Horizontal = Literal["left", "center", "right"]
Vertical = Literal["bottom", "middle", "top"]
Edge = Literal["left", "right", "bottom", "top"]


@dataclass(frozen=True)
class LocationRule:
    horizontal: Horizontal
    vertical: Vertical
    outside: bool = False
    shrink_edge: Edge | None = None


LOCATIONS: dict[str, LocationRule] = {
    "north": LocationRule("center", "top"),
    "northeast": LocationRule("right", "top"),
    "east": LocationRule("right", "middle"),
    "southeast": LocationRule("right", "bottom"),
    "south": LocationRule("center", "bottom"),
    "southwest": LocationRule("left", "bottom"),
    "west": LocationRule("left", "middle"),
    "northwest": LocationRule("left", "top"),
    "northoutside": LocationRule("center", "top", outside=True, shrink_edge="top"),
    "northeastoutside": LocationRule("right", "top", outside=True, shrink_edge="right"),
    "eastoutside": LocationRule("right", "middle", outside=True, shrink_edge="right"),
    "southeastoutside": LocationRule("right", "bottom", outside=True, shrink_edge="right"),
    "southoutside": LocationRule("center", "bottom", outside=True, shrink_edge="bottom"),
    "southwestoutside": LocationRule("left", "bottom", outside=True, shrink_edge="left"),
    "westoutside": LocationRule("left", "middle", outside=True, shrink_edge="left"),
    "northwestoutside": LocationRule("left", "top", outside=True, shrink_edge="left"),
}

# best-location search is not implemented; these reuse fixed placements
FALLBACKS: dict[str, str] = {
    "best": "northeast",
    "bestoutside": "eastoutside",
}

ALIASES: dict[str, str] = {
    "n": "north",
    "ne": "northeast",
    "e": "east",
    "se": "southeast",
    "s": "south",
    "sw": "southwest",
    "w": "west",
    "nw": "northwest",
    "no": "northoutside",
    "neo": "northeastoutside",
    "eo": "eastoutside",
    "seo": "southeastoutside",
    "so": "southoutside",
    "swo": "southwestoutside",
    "wo": "westoutside",
    "nwo": "northwestoutside",
    "b": "best",
    "bo": "bestoutside",
}

DEFAULT_LOCATION = "northeast"


@dataclass(frozen=True)
class Placement:
    """Resolved legend position.

    ``x``/``y`` is the bottom-left corner of the legend box in host pixel space.
    ``host_rect`` is set for outside locations: the shrunk rectangle the host
    plot area must adopt to make room for the legend.
    """

    location: str
    x: float
    y: float
    width: float
    height: float
    host_rect: Rect | None = None

    @property
    def corner(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)


def canonical_location(keyword: str) -> str:
    """Map a keyword or its abbreviation to a key of ``LOCATIONS``.

    ``best``/``bestoutside`` map to their fixed fallbacks and unknown keywords
    map to ``northeast``; neither raises.
    """
    key = keyword.strip().lower()
    key = ALIASES.get(key, key)
    if key in FALLBACKS:
        LOGGER.debug("location %r is not searched; using %s placement", keyword, FALLBACKS[key])
        return FALLBACKS[key]
    if key not in LOCATIONS:
        LOGGER.debug("unknown legend location %r; using %s", keyword, DEFAULT_LOCATION)
        return DEFAULT_LOCATION
    return key


def resolve_location(
    host_rect: Rect,
    keyword: str,
    offset: tuple[float, float],
    total_width: float,
    total_height: float,
    outer_margin: float,
) -> Placement:
    location = canonical_location(keyword)
    rule = LOCATIONS[location]
    host = shrink_host(host_rect, rule.shrink_edge, total_width, total_height, outer_margin) if rule.outside else host_rect
    perpendicular_margin = 0.0 if rule.outside else outer_margin

    if rule.shrink_edge == "right":
        x = host.right + outer_margin
    elif rule.shrink_edge == "left":
        x = host.left - outer_margin - total_width
    else:
        x = _along(rule.horizontal, host.left, host.right, total_width, perpendicular_margin)

    if rule.shrink_edge == "top":
        y = host.top + outer_margin
    elif rule.shrink_edge == "bottom":
        y = host.bottom - outer_margin - total_height
    else:
        y = _along(_VERTICAL_TO_SIDE[rule.vertical], host.bottom, host.top, total_height, perpendicular_margin)

    dx, dy = offset
    return Placement(
        location=location,
        x=x + dx,
        y=y + dy,
        width=total_width,
        height=total_height,
        host_rect=host if rule.outside else None,
    )


def shrink_host(host_rect: Rect, edge: Edge | None, total_width: float, total_height: float, outer_margin: float) -> Rect:
    """Give up ``total + outer_margin`` pixels on ``edge``, keeping at least one pixel of host."""
    if edge in {"left", "right"}:
        cut = max(0.0, min(host_rect.width - 1, total_width + outer_margin))
        if edge == "left":
            return replace(host_rect, x=host_rect.x + cut, width=host_rect.width - cut)
        return replace(host_rect, width=host_rect.width - cut)
    if edge in {"bottom", "top"}:
        cut = max(0.0, min(host_rect.height - 1, total_height + outer_margin))
        if edge == "bottom":
            return replace(host_rect, y=host_rect.y + cut, height=host_rect.height - cut)
        return replace(host_rect, height=host_rect.height - cut)
    return host_rect


_VERTICAL_TO_SIDE: dict[str, Horizontal] = {"bottom": "left", "middle": "center", "top": "right"}


def _along(side: Horizontal, lo: float, hi: float, size: float, margin: float) -> float:
    if side == "left":
        return lo + margin
    if side == "right":
        return hi - margin - size
    return (lo + hi) / 2 - size / 2
