"""
Level system exports.

Provides score progression, victory and the kill-combo window.
"""

from dino_deputy.systems.level.combo_tracker import ComboTracker
from dino_deputy.systems.level.level_manager import LevelManager, level_for

__all__ = [
    'ComboTracker',
    'LevelManager',
    'level_for',
]
