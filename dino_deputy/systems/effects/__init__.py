"""
Visual effects system exports.

Provides screen-wide timers (shake, flashes) independent of entities.
"""

from dino_deputy.systems.effects.effects_manager import EffectsManager

__all__ = [
    'EffectsManager',
]
