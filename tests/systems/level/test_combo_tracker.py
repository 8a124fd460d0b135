"""
test_combo_tracker.py
---------------------
Tests for the kill-combo window and the capped multiplier.
"""

from dino_deputy.systems.level.combo_tracker import ComboTracker


class TestComboTracker:

    def test_points_scale_with_combo_up_to_cap(self):
        combo = ComboTracker()
        points = [combo.register_kill(5) for _ in range(7)]
        assert points == [5, 10, 15, 20, 25, 25, 25]
        assert combo.kill_combo == 7
        assert combo.multiplier == 5

    def test_window_expires_exactly_on_last_frame(self):
        combo = ComboTracker()
        combo.register_kill(5)

        for _ in range(179):
            combo.tick()
        assert combo.kill_combo == 1
        assert combo.combo_timer == 1

        combo.tick()
        assert combo.kill_combo == 0
        assert combo.register_kill(5) == 5

    def test_kill_reopens_window(self):
        combo = ComboTracker()
        combo.register_kill(5)
        for _ in range(100):
            combo.tick()

        assert combo.register_kill(10) == 20
        assert combo.combo_timer == 180

    def test_idle_tick_is_noop(self):
        combo = ComboTracker()
        combo.tick()
        assert (combo.kill_combo, combo.combo_timer) == (0, 0)
