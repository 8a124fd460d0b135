"""
game_state.py
-------------
Defines the top-level states a game session can be in.
"""

from enum import Enum


class GameState(Enum):
    """Session lifecycle states driven by GameWorld."""
    START = "start"             # Title screen, nothing simulated
    PLAYING = "playing"         # Simulation advancing every tick
    PAUSED = "paused"           # Frozen, last frame still rendered
    DYING = "dying"             # Fatal hit, flash/shake countdown before game over
    GAMEOVER = "gameover"       # Session ended, leaderboard entry
    VICTORY = "victory"         # Win score reached, restart or free play

    @property
    def is_terminal(self) -> bool:
        return self in (GameState.GAMEOVER, GameState.VICTORY)
