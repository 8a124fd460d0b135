"""
Core services exports.

Provides the event system and configuration loading.
"""

from dino_deputy.core.services.config_manager import load_config
from dino_deputy.core.services.event_manager import (
    EventManager,
    BaseEvent,
    GameStartedEvent,
    JumpEvent,
    ShotFiredEvent,
    EnemyFiredEvent,
    EnemyKilledEvent,
    NearMissEvent,
    LevelUpEvent,
    PlayerDiedEvent,
    GameOverEvent,
    VictoryEvent,
    HighScoreEvent,
    PauseToggledEvent,
)

__all__ = [
    # Config
    'load_config',
    # Events
    'EventManager',
    'BaseEvent',
    'GameStartedEvent',
    'JumpEvent',
    'ShotFiredEvent',
    'EnemyFiredEvent',
    'EnemyKilledEvent',
    'NearMissEvent',
    'LevelUpEvent',
    'PlayerDiedEvent',
    'GameOverEvent',
    'VictoryEvent',
    'HighScoreEvent',
    'PauseToggledEvent',
]
