from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Insets:
    top: float = 24.0
    left: float = 48.0
    bottom: float = 32.0
    right: float = 16.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def has_area(self) -> bool:
        return self.width > 0 and self.height > 0

    def inset(self, insets: Insets) -> "Rect":
        return Rect(
            x=self.x + insets.left,
            y=self.y + insets.top,
            width=self.width - insets.left - insets.right,
            height=self.height - insets.top - insets.bottom,
        )


def plot_rect_for(bounds: Rect, insets: Insets) -> Rect:
    """Plot rectangle for a layout pass; may have no area."""
    return bounds.inset(insets)
