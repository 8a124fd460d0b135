"""
test_effects_manager.py
-----------------------
Tests for shake priority, flash countdowns and renderer queries.
"""

import pytest

from dino_deputy.core.runtime.game_settings import Timers
from dino_deputy.systems.effects.effects_manager import EffectsManager


@pytest.fixture
def effects():
    return EffectsManager()


class TestEffectsManager:

    def test_idle_queries(self, effects):
        assert effects.shake_offset() == (0, 0)
        assert effects.close_call_alpha() == 0
        assert effects.death_flash_alpha() == 0
        assert effects.level_up_alpha() == 0.0

    def test_close_call_flash_counts_down(self, effects):
        effects.close_call()
        assert effects.close_call_alpha() == pytest.approx(0.4)

        for _ in range(Timers.CLOSE_CALL_FLASH):
            effects.update()
        assert effects.close_call_frames == 0
        assert effects.shake_frames == 0

    def test_weaker_shake_does_not_override(self, effects):
        effects.death()
        effects.close_call()
        assert effects.shake_intensity == 10.0
        assert effects.shake_frames == 40

    def test_stronger_shake_overrides(self, effects):
        effects.close_call()
        effects.death()
        assert effects.shake_intensity == 10.0

    def test_shake_ends_cleanly(self, effects):
        effects.shake(5.0, 3)
        for _ in range(3):
            effects.update()
        assert effects.shake_intensity == 0.0
        assert effects.shake_offset() == (0, 0)

    def test_shake_offset_bounded(self, effects):
        effects.death()
        for _ in range(40):
            dx, dy = effects.shake_offset()
            assert abs(dx) <= 10 and abs(dy) <= 10
            effects.update()

    def test_clear_cancels_everything(self, effects):
        effects.death()
        effects.level_up()
        effects.clear()
        assert effects.death_flash_frames == 0
        assert effects.level_up_frames == 0
        assert effects.shake_frames == 0
