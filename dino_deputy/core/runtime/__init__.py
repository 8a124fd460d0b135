"""
Runtime configuration exports.

Provides game-wide constants and the session state enum. All exports are
lightweight class constants with no initialization overhead.
"""

from dino_deputy.core.runtime.game_settings import (
    Display,
    Physics,
    Speed,
    PlayerDims,
    Bounds,
    Scoring,
    Timers,
    Colors,
    Debug,
)
from dino_deputy.core.runtime.game_state import GameState

__all__ = [
    # Settings
    'Display',
    'Physics',
    'Speed',
    'PlayerDims',
    'Bounds',
    'Scoring',
    'Timers',
    'Colors',
    'Debug',
    # States
    'GameState',
]
