"""
entity_types.py
---------------
Entity kinds exposed to the renderer and used as collision tags.
"""

from enum import Enum


class EntityKind(Enum):
    """One value per entity record type."""
    PLAYER = "player"
    CACTUS = "cactus"
    PLAYER_BULLET = "player_bullet"
    BANDIT = "bandit"
    ENEMY_BULLET = "enemy_bullet"
    FLYING_THIEF = "flying_thief"
    PARTICLE = "particle"
    BONUS_TEXT = "bonus_text"
