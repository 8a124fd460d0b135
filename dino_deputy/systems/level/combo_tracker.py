"""
combo_tracker.py
----------------
Kill-combo bookkeeping.

A kill inside the combo window raises the multiplier (capped at 5); the
window is re-opened by every kill and the combo drops to zero on the exact
frame the countdown reaches zero.
"""

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Scoring, Timers


class ComboTracker:
    """Kill counter plus its countdown window."""

    def __init__(self, window: int = Timers.COMBO_WINDOW,
                 max_multiplier: int = Scoring.MAX_COMBO_MULTIPLIER):
        self.window = window
        self.max_multiplier = max_multiplier
        self.reset()

    def reset(self):
        self.kill_combo = 0
        self.combo_timer = 0

    @property
    def multiplier(self) -> int:
        return min(self.kill_combo, self.max_multiplier)

    def register_kill(self, base_points: int) -> int:
        """
        Count a kill and return the points it is worth.

        Args:
            base_points: Value of the target at multiplier 1

        Returns:
            base_points x min(combo, max_multiplier)
        """
        self.kill_combo += 1
        self.combo_timer = self.window
        points = base_points * self.multiplier
        DebugLogger.trace(f"Combo x{self.kill_combo} -> +{points}", category="combo")
        return points

    def tick(self):
        """Count the window down one frame; expire the combo when it hits zero."""
        if self.combo_timer <= 0:
            return
        self.combo_timer -= 1
        if self.combo_timer == 0:
            if self.kill_combo > 1:
                DebugLogger.state(f"Combo x{self.kill_combo} expired", category="combo")
            self.kill_combo = 0
