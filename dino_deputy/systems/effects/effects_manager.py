"""
effects_manager.py
------------------
Screen-wide visual effects as plain countdown state.

The simulation only arms timers here; the renderer polls the offsets and
alphas each frame. Effects keep ticking while the world is frozen in the
dying state.
"""

import math

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Timers


class EffectsManager:
    """Shake, flashes and the level-up pulse for one world."""

    CLOSE_CALL_SHAKE = (3.0, 6)     # intensity px, frames
    DEATH_SHAKE = (10.0, 40)

    CLOSE_CALL_MAX_ALPHA = 0.4
    DEATH_FLASH_MAX_ALPHA = 0.6
    LEVEL_UP_MAX_ALPHA = 0.3

    def __init__(self):
        self.clear()
        DebugLogger.init_entry("EffectsManager")

    def clear(self):
        """Cancel every running effect."""
        self.shake_intensity = 0.0
        self.shake_frames = 0
        self._shake_total = 0
        self.close_call_frames = 0
        self.death_flash_frames = 0
        self.level_up_frames = 0

    # ===========================================================
    # Triggers
    # ===========================================================

    def shake(self, intensity: float, frames: int):
        """Start a shake, unless a stronger one is already running."""
        if self.shake_frames > 0 and self.shake_intensity > intensity:
            return
        self.shake_intensity = intensity
        self.shake_frames = frames
        self._shake_total = frames

    def close_call(self):
        self.close_call_frames = Timers.CLOSE_CALL_FLASH
        self.shake(*self.CLOSE_CALL_SHAKE)

    def death(self):
        self.death_flash_frames = Timers.DEATH_FLASH
        self.shake(*self.DEATH_SHAKE)
        DebugLogger.trace("Death flash armed", category="effects")

    def level_up(self):
        self.level_up_frames = Timers.LEVEL_UP_ANIM

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self):
        if self.shake_frames > 0:
            self.shake_frames -= 1
            if self.shake_frames == 0:
                self.shake_intensity = 0.0
        if self.close_call_frames > 0:
            self.close_call_frames -= 1
        if self.death_flash_frames > 0:
            self.death_flash_frames -= 1
        if self.level_up_frames > 0:
            self.level_up_frames -= 1

    # ===========================================================
    # Renderer Queries
    # ===========================================================

    def shake_offset(self) -> tuple:
        """Pixel offset for the whole frame; decays as the shake runs out."""
        if self.shake_frames <= 0:
            return 0, 0
        falloff = self.shake_frames / self._shake_total
        amplitude = self.shake_intensity * falloff
        return (
            round(math.sin(self.shake_frames * 2.7) * amplitude),
            round(math.cos(self.shake_frames * 3.1) * amplitude),
        )

    def close_call_alpha(self) -> float:
        return self.close_call_frames / Timers.CLOSE_CALL_FLASH * self.CLOSE_CALL_MAX_ALPHA

    def death_flash_alpha(self) -> float:
        return self.death_flash_frames / Timers.DEATH_FLASH * self.DEATH_FLASH_MAX_ALPHA

    def level_up_alpha(self) -> float:
        """Pulsing white flash while the level-up animation runs."""
        if self.level_up_frames <= 0:
            return 0.0
        return max(0.0, math.sin(self.level_up_frames * 0.2) * self.LEVEL_UP_MAX_ALPHA)
