"""
geometry.py
-----------
Axis-aligned rectangle primitives used by every collision check.

Rectangles are float-valued (entities move in sub-pixel steps), so
pygame.Rect is only used by the renderer.
"""

from typing import NamedTuple


class Rect(NamedTuple):
    """Top-left anchored axis-aligned rectangle."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


def overlaps(a: Rect, b: Rect) -> bool:
    """Strict AABB overlap. Rectangles that only touch along an edge do not overlap."""
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def overlaps_horizontally(a: Rect, b: Rect) -> bool:
    return a.x < b.x + b.width and a.x + a.width > b.x
