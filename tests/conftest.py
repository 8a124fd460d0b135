"""
conftest.py
-----------
Shared pytest configuration and fixtures for Dino Deputy tests.

Contains:
- Headless SDL drivers so pygame-backed modules import and run anywhere
- World fixtures (seeded, spawner paused) for scenario tests
- Small helpers: frame runner, event recorder, scripted RNG
"""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from dino_deputy.core.runtime.game_world import GameWorld
from dino_deputy.core.runtime.presets import GamePreset, get_preset
from dino_deputy.entities.player import InputState


NO_INPUT = InputState()
JUMP = InputState(jump=True)
SHOOT = InputState(shoot=True)


# ===========================================================
# Helpers
# ===========================================================

class ScriptedRandom:
    """Stand-in for random.Random that always returns the same value."""

    def __init__(self, value=0.0):
        self.value = value

    def random(self):
        return self.value


class EventRecorder:
    """Collects every dispatched event of the given types, in order."""

    def __init__(self, events, *event_types):
        self.received = []
        for event_type in event_types:
            events.subscribe(event_type, self._record)

    def _record(self, event):
        self.received.append(event)

    def of(self, event_type):
        return [e for e in self.received if isinstance(e, event_type)]


def run_frames(world, count, input_state=NO_INPUT):
    """Tick a world `count` times with the same input; returns the last state."""
    state = world.state
    for _ in range(count):
        state = world.tick(input_state)
    return state


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture
def frontier():
    return GamePreset()


@pytest.fixture
def classic():
    return get_preset("classic")


@pytest.fixture
def world():
    """Seeded frontier world, already playing, with automatic spawns off."""
    w = GameWorld(seed=1234)
    w.spawner.paused = True
    w.start_game()
    return w


@pytest.fixture
def classic_world(classic):
    w = GameWorld(preset=classic, seed=1234)
    w.spawner.paused = True
    w.start_game()
    return w


# ===========================================================
# Pytest configuration
# ===========================================================

def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "regression: marks tests as regression tests")


def pytest_collection_modifyitems(config, items):
    """Tag scenario tests as integration and everything else as unit."""
    for item in items:
        if "scenario" in item.nodeid or "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
