"""
Collision geometry exports.

Provides the axis-aligned rectangle and its overlap tests.
"""

from dino_deputy.systems.collision.geometry import Rect, overlaps, overlaps_horizontally

__all__ = [
    'Rect',
    'overlaps',
    'overlaps_horizontally',
]
