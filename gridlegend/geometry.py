from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Extent:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    """Pixel rectangle with a bottom-left origin (y grows upward)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.bottom + self.top) / 2

    def to_canvas(self, canvas_height: int) -> tuple[int, int, int, int]:
        """Convert to an integer ``(x, y, width, height)`` rect with a top-left origin."""
        x0 = int(round(self.x))
        y0 = int(round(canvas_height - self.top))
        return (x0, y0, int(round(self.width)), int(round(self.height)))
