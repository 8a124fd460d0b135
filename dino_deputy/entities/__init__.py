"""
dino_deputy/entities/__init__.py
--------------------------------
Entity module exports.

Only the kind enum is exported here; it is a lightweight constant with no
dependencies and is shared by events, collisions and the renderer.

Exports:
    EntityKind - What a visible entity is (PLAYER, CACTUS, BANDIT, ...)
"""

from dino_deputy.entities.entity_types import EntityKind

__all__ = [
    'EntityKind',
]
