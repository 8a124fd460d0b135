"""
Entity management exports.

Provides the ordered pool every entity collection lives in.
"""

from dino_deputy.systems.entity_management.entity_pool import EntityPool

__all__ = [
    'EntityPool',
]
