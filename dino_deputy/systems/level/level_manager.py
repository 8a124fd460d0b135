"""
level_manager.py
----------------
Score, level, high score and the win condition.

Responsibilities
----------------
- Award the passive point every FRAMES_PER_POINT playing frames.
- Accept bonus points from kills and near misses.
- Derive the level from the score and announce level ups.
- Fire victory exactly once per session, never in free play.
- Track the high score and announce every new best.
"""

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Scoring
from dino_deputy.core.services.event_manager import (
    HighScoreEvent,
    LevelUpEvent,
    VictoryEvent,
)


def level_for(score: int) -> int:
    """Saturating level for a score: min(MAX_LEVEL, score // POINTS_PER_LEVEL + 1)."""
    return min(Scoring.MAX_LEVEL, score // Scoring.POINTS_PER_LEVEL + 1)


class LevelManager:
    """Progression state for one session."""

    def __init__(self, events, high_score: int = 0):
        """
        Args:
            events: EventManager receiving level, victory and high-score events
            high_score: Best score loaded from persistence
        """
        self.events = events
        self.high_score = high_score
        self.reset()
        DebugLogger.init_entry("LevelManager")

    def reset(self):
        self.score = 0
        self.level = 1
        self.free_play = False
        self.victory_reached = False

    # ===========================================================
    # Scoring
    # ===========================================================

    def add_score(self, amount: int):
        """Add points and push the high score up if beaten."""
        self.score += amount
        if self.score > self.high_score:
            self.high_score = self.score
            self.events.dispatch(HighScoreEvent(self.high_score))

    def tick(self, frame: int) -> bool:
        """
        Run the per-frame progression step.

        Args:
            frame: Playing-frame counter, already advanced for this frame

        Returns:
            True if victory fired this frame
        """
        if frame % Scoring.FRAMES_PER_POINT == 0:
            self.add_score(1)
        return self.check_progress()

    def check_progress(self) -> bool:
        """Apply any level up and the win check for the current score."""
        new_level = level_for(self.score)
        if new_level > self.level:
            self.level = new_level
            DebugLogger.state(f"Level up -> {self.level}", category="level")
            self.events.dispatch(LevelUpEvent(self.level))

        if self.free_play or self.victory_reached:
            return False
        if self.score >= Scoring.WIN_SCORE:
            self.victory_reached = True
            DebugLogger.state(f"Victory at {self.score}", category="level")
            self.events.dispatch(VictoryEvent(self.score))
            return True
        return False

    def enter_free_play(self):
        self.free_play = True
        DebugLogger.state("Free play enabled", category="level")
