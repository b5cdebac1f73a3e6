from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from gridlegend.colors import RGBA, parse_color
from gridlegend.errors import InvalidOption
from gridlegend.interpreter import INTERPRETERS


TRANSPARENT: RGBA = (0, 0, 0, 0)

DEFAULT_ITEM_LINE_LENGTH = 40
DEFAULT_MARGIN_HEIGHT = 2
DEFAULT_MARGIN_WIDTH = 10
DEFAULT_PADDING_HEIGHT = 2
DEFAULT_PADDING_WIDTH = 8
DEFAULT_OUTER_MARGIN = 10


@dataclass(frozen=True)
class GridLegendOptions:
    """Formatting options for a grid legend.

    ``None`` on a color or font field means "inherit from the host axes" at
    render time. Transparent colors (``"none"``) are stored as ``TRANSPARENT``.
    Spacing values are pixels.
    """

    alignment: str | tuple[str, ...] | None = None
    box: bool = True
    color: RGBA | None = None
    edge_color: RGBA | None = None
    line_width: int = 1
    font_name: str | None = None
    font_size: float | None = None
    font_weight: str = "normal"
    font_angle: str = "normal"
    interpreter: str = "tex"
    text_color: RGBA | None = None
    item_size: int = DEFAULT_ITEM_LINE_LENGTH
    location: str = "northeast"
    offset: tuple[float, float] = (0.0, 0.0)
    parent: Any = None
    visible: bool = True
    margin_height: int = DEFAULT_MARGIN_HEIGHT
    margin_width: int = DEFAULT_MARGIN_WIDTH
    padding_height: int = DEFAULT_PADDING_HEIGHT
    padding_width: int = DEFAULT_PADDING_WIDTH
    outer_margin: int = DEFAULT_OUTER_MARGIN

    @property
    def bold(self) -> bool:
        return self.font_weight == "bold"

    @property
    def italic(self) -> bool:
        return self.font_angle == "italic"


DEFAULT_OPTIONS = GridLegendOptions()

_OPTION_NAMES = frozenset(f.name for f in fields(GridLegendOptions))
_SPACING_NAMES = ("margin_height", "margin_width", "padding_height", "padding_width", "outer_margin")


def validate_options(overrides: Mapping[str, Any] | None = None) -> GridLegendOptions:
    """Validate keyword overrides and merge them onto the defaults."""
    raw: dict[str, Any] = {name: getattr(DEFAULT_OPTIONS, name) for name in _OPTION_NAMES}
    if overrides:
        for key, value in overrides.items():
            if key not in _OPTION_NAMES:
                raise InvalidOption(f"Unknown grid legend option: {key}")
            raw[key] = value

    raw["alignment"] = _validate_alignment_shape(raw["alignment"])
    raw["box"] = _on_off(raw["box"], name="box")
    raw["visible"] = _on_off(raw["visible"], name="visible")
    for key in ("color", "edge_color", "text_color"):
        raw[key] = _color_or_default(raw[key], name=key)

    if not isinstance(raw["line_width"], (int, float)) or raw["line_width"] <= 0:
        raise InvalidOption("Option `line_width` must be a positive number")
    raw["line_width"] = max(1, int(round(raw["line_width"])))

    if raw["font_name"] is not None and (not isinstance(raw["font_name"], str) or not raw["font_name"].strip()):
        raise InvalidOption("Option `font_name` must be a non-empty string")
    if raw["font_size"] is not None:
        if not isinstance(raw["font_size"], (int, float)) or raw["font_size"] <= 0:
            raise InvalidOption("Option `font_size` must be a positive number")
        raw["font_size"] = float(raw["font_size"])

    raw["font_weight"] = _choice(raw["font_weight"], ("normal", "bold"), name="font_weight")
    raw["font_angle"] = _choice(raw["font_angle"], ("normal", "italic"), name="font_angle")
    raw["interpreter"] = _choice(raw["interpreter"], INTERPRETERS, name="interpreter")

    if not isinstance(raw["item_size"], (int, float)) or raw["item_size"] <= 0:
        raise InvalidOption("Option `item_size` must be a positive number")
    raw["item_size"] = int(round(raw["item_size"]))

    if not isinstance(raw["location"], str):
        raise InvalidOption("Option `location` must be a string")

    offset = raw["offset"]
    try:
        dx, dy = (float(v) for v in offset)
    except (TypeError, ValueError) as exc:
        raise InvalidOption("Option `offset` must be an (x, y) pair of numbers") from exc
    raw["offset"] = (dx, dy)

    for key in _SPACING_NAMES:
        if not isinstance(raw[key], (int, float)) or raw[key] < 0:
            raise InvalidOption(f"Option `{key}` must be a number >= 0")
        raw[key] = int(round(raw[key]))

    return GridLegendOptions(**raw)


def _validate_alignment_shape(value: Any) -> str | tuple[str, ...] | None:
    if value is None or isinstance(value, str):
        return value
    try:
        items = tuple(value)
    except TypeError as exc:
        raise InvalidOption("Option `alignment` must be a string or a sequence of strings") from exc
    if not all(isinstance(item, str) for item in items):
        raise InvalidOption("Option `alignment` must be a string or a sequence of strings")
    return items


def _on_off(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in {"on", "off"}:
        return value.lower() == "on"
    raise InvalidOption(f"Option `{name}` must be 'on', 'off' or a bool")


def _color_or_default(value: Any, *, name: str) -> RGBA | None:
    if value is None:
        return None
    try:
        parsed = parse_color(value)
    except ValueError as exc:
        raise InvalidOption(f"Option `{name}`: {exc}") from exc
    return TRANSPARENT if parsed is None else parsed


def _choice(value: Any, allowed: tuple[str, ...], *, name: str) -> str:
    if not isinstance(value, str) or value.lower() not in allowed:
        raise InvalidOption(f"Option `{name}` must be one of {', '.join(allowed)}")
    return value.lower()
