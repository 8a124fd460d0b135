"""
test_player.py
--------------
Regression tests for the deputy's jump physics, shooting gates and hitbox.
"""

import pytest

from conftest import JUMP, NO_INPUT, SHOOT
from dino_deputy.core.runtime.game_settings import Physics
from dino_deputy.entities.player import InputState, Player
from dino_deputy.systems.collision.geometry import Rect


@pytest.fixture
def player(frontier):
    return Player(frontier)


@pytest.fixture
def classic_player(classic):
    return Player(classic)


# ===========================================================
# Jumping
# ===========================================================

class TestJump:
    """Jump impulse, double jump and the release latch."""

    def test_apex_and_landing_frames(self, player):
        """A held single jump peaks on frame 19 and lands on frame 37."""
        first_falling = None
        landed = None
        for frame in range(1, 60):
            player.update(JUMP)
            if first_falling is None and player.velocity_y > 0:
                first_falling = frame
            if player.y == Physics.GROUND_Y and not player.is_jumping:
                landed = frame
                break

        assert first_falling == 19
        # The per-frame Euler step lands one frame before the continuous
        # estimate round(-2 * JUMP_FORCE / GRAVITY) == 38
        assert landed == 37

    def test_holding_jump_does_not_chain(self, player):
        """Holding jump gives exactly one impulse."""
        actions = [player.update(JUMP).jump_number for _ in range(10)]
        assert actions[0] == 1
        assert actions[1:] == [0] * 9
        assert player.jump_count == 1

    def test_release_and_press_double_jumps(self, player):
        player.update(JUMP)
        player.update(NO_INPUT)
        second = player.update(JUMP)

        assert second.jump_number == 2
        assert player.jump_count == 2
        assert player.velocity_y == pytest.approx(Physics.JUMP_FORCE + Physics.GRAVITY)

    def test_no_third_jump_in_air(self, player):
        player.update(JUMP)
        player.update(NO_INPUT)
        player.update(JUMP)
        player.update(NO_INPUT)
        third = player.update(JUMP)

        assert third.jump_number == 0
        assert player.jump_count == 2

    def test_landing_resets_jump_count(self, player):
        player.update(JUMP)
        for _ in range(60):
            player.update(NO_INPUT)

        assert player.y == Physics.GROUND_Y
        assert player.jump_count == 0
        assert player.update(JUMP).jump_number == 1

    def test_never_sinks_below_ground(self, player):
        for _ in range(100):
            player.update(NO_INPUT)
            assert player.y <= Physics.GROUND_Y


# ===========================================================
# Shooting
# ===========================================================

class TestShooting:
    """Cooldown, release latch and the shooting pose."""

    def test_release_latch_fires_once_while_held(self, player):
        shots = [player.update(SHOOT).shot for _ in range(30)]
        assert shots.count(True) == 1
        assert shots[0]

    def test_tapping_fires_every_cooldown(self, player):
        """Pressing on odd frames with a 12-frame cooldown fires on frames 1, 13, 25."""
        fired = []
        for frame in range(1, 31):
            state = SHOOT if frame % 2 == 1 else NO_INPUT
            if player.update(state).shot:
                fired.append(frame)
        assert fired == [1, 13, 25]

    def test_classic_holds_to_autofire(self, classic_player):
        """Without a release latch a held trigger fires every 20 frames."""
        fired = [frame for frame in range(1, 42) if classic_player.update(SHOOT).shot]
        assert fired == [1, 21, 41]

    def test_shooting_pose_visible_for_fourteen_frames_after_shot(self, player):
        player.update(SHOOT)
        assert player.is_shooting
        for _ in range(13):
            player.update(NO_INPUT)
        assert player.is_shooting
        player.update(NO_INPUT)
        assert not player.is_shooting

    def test_jump_and_shoot_same_frame(self, player):
        actions = player.update(InputState(jump=True, shoot=True))
        assert actions.jump_number == 1
        assert actions.shot


# ===========================================================
# Geometry
# ===========================================================

class TestPlayerGeometry:

    def test_hitbox_on_ground(self, player):
        assert player.hitbox() == Rect(80, 285, 35, 40)

    def test_muzzle_position(self, player):
        assert player.muzzle() == (148, 294)

    def test_bounce_keeps_jump_count(self, player):
        player.update(JUMP)
        player.bounce(-10)
        assert player.velocity_y == -10
        assert player.jump_count == 1
