"""
test_background_manager.py
--------------------------
Tests for the time-of-day sky, eras and scrolling scenery.
"""

import random

import pytest

from dino_deputy.core.runtime.game_settings import Display
from dino_deputy.graphics.background_manager import (
    ERAS,
    NOON_TOP,
    SUN_DUSK,
    BackgroundManager,
    era_for,
    lerp_color,
    sky_state,
)


@pytest.fixture
def background():
    return BackgroundManager(random.Random(3))


class TestSky:

    def test_dawn_and_dusk_sit_low(self):
        dawn, dusk = sky_state(1), sky_state(10)
        assert dawn.progress == 0 and dusk.progress == 1
        assert dawn.sun_x == 50
        assert dusk.sun_x == Display.WIDTH - 50
        assert dawn.sun_y == dusk.sun_y == 275
        assert dusk.sun_color == SUN_DUSK

    def test_sun_peaks_mid_run(self):
        assert sky_state(5).sun_y < sky_state(2).sun_y < sky_state(1).sun_y
        assert sky_state(5).sky_top == NOON_TOP

    def test_lerp_color(self):
        assert lerp_color((0, 0, 0), (100, 200, 50), 0.5) == (50, 100, 25)


class TestEras:

    @pytest.mark.parametrize("level, name", [
        (1, "dawn"), (3, "dawn"), (4, "noon"), (7, "dusk"), (10, "sunset"),
    ])
    def test_era_for(self, level, name):
        assert era_for(level).name == name

    def test_landmark_rises_half_pixel_per_frame(self, background):
        background.on_level(4)
        assert not background.landmark_settled

        background.update(9)
        assert background.landmark_height == 0.5

        for _ in range(100):
            background.update(9)
        assert background.landmark_height == ERAS[1].landmark_height
        assert background.landmark_settled

    def test_reset_returns_to_dawn(self, background):
        background.on_level(10)
        background.reset()
        assert background.era is ERAS[0]
        assert background.landmark_height == 0


class TestScenery:

    def test_clouds_scroll_at_parallax(self, background):
        before = [cloud.x for cloud in background.clouds]
        background.update(10)
        for x, cloud in zip(before, background.clouds):
            assert cloud.x == pytest.approx(x - 2) or cloud.x == Display.WIDTH + 50

    def test_ground_lines_wrap(self, background):
        for _ in range(200):
            background.update(18)
        for line in background.ground_lines:
            assert line.x + line.width >= 0
