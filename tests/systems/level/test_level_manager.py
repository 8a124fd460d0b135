"""
test_level_manager.py
---------------------
Tests for passive scoring, level derivation, victory and the high score.
"""

import pytest

from conftest import EventRecorder
from dino_deputy.core.runtime.game_settings import Scoring
from dino_deputy.core.services.event_manager import (
    EventManager,
    HighScoreEvent,
    LevelUpEvent,
    VictoryEvent,
)
from dino_deputy.systems.level.level_manager import LevelManager, level_for


@pytest.fixture
def events():
    return EventManager()


@pytest.fixture
def recorder(events):
    return EventRecorder(events, LevelUpEvent, VictoryEvent, HighScoreEvent)


class TestLevelFor:

    @pytest.mark.parametrize("score, level", [
        (0, 1), (249, 1), (250, 2), (499, 2), (2249, 9), (2250, 10), (99999, 10),
    ])
    def test_level_boundaries(self, score, level):
        assert level_for(score) == level


class TestLevelManager:

    def test_one_point_every_five_frames(self, events):
        levels = LevelManager(events)
        for frame in range(1, 26):
            levels.tick(frame)
        assert levels.score == 5

    def test_level_up_event(self, events, recorder):
        levels = LevelManager(events)
        levels.add_score(260)
        levels.check_progress()

        assert levels.level == 2
        assert recorder.of(LevelUpEvent) == [LevelUpEvent(2)]

    def test_skips_straight_to_higher_level(self, events, recorder):
        """A big bonus jump announces only the level actually reached."""
        levels = LevelManager(events)
        levels.add_score(760)
        levels.check_progress()
        assert recorder.of(LevelUpEvent) == [LevelUpEvent(4)]

    def test_victory_fires_once(self, events, recorder):
        levels = LevelManager(events)
        levels.add_score(Scoring.WIN_SCORE)

        assert levels.check_progress()
        assert not levels.check_progress()
        assert recorder.of(VictoryEvent) == [VictoryEvent(Scoring.WIN_SCORE)]
        assert levels.level == Scoring.MAX_LEVEL

    def test_free_play_never_wins(self, events, recorder):
        levels = LevelManager(events)
        levels.enter_free_play()
        levels.add_score(Scoring.WIN_SCORE * 2)

        assert not levels.check_progress()
        assert recorder.of(VictoryEvent) == []

    def test_high_score_event_only_when_beaten(self, events, recorder):
        levels = LevelManager(events, high_score=10)
        levels.add_score(10)
        assert recorder.of(HighScoreEvent) == []

        levels.add_score(1)
        assert recorder.of(HighScoreEvent) == [HighScoreEvent(11)]
        assert levels.high_score == 11

    def test_reset_keeps_high_score(self, events):
        levels = LevelManager(events)
        levels.add_score(300)
        levels.check_progress()
        levels.reset()

        assert (levels.score, levels.level, levels.free_play) == (0, 1, False)
        assert levels.high_score == 300
