"""
test_world_scenarios.py
-----------------------
Multi-frame scenarios driven through GameWorld.tick().

Covers:
- Passive scoring over a long quiet run
- Death, the dying freeze and game over (both presets)
- Pause, victory, free play and restart transitions
- Combo expiry and bandit fire as seen from the world
- The render snapshot contract
"""

import pytest

from conftest import JUMP, EventRecorder, run_frames
from dino_deputy.core.runtime.game_settings import Scoring, Timers
from dino_deputy.core.runtime.game_state import GameState
from dino_deputy.core.runtime.game_world import GameWorld
from dino_deputy.core.services.event_manager import (
    EnemyFiredEvent,
    EnemyKilledEvent,
    GameOverEvent,
    GameStartedEvent,
    JumpEvent,
    LevelUpEvent,
    PlayerDiedEvent,
    VictoryEvent,
)
from dino_deputy.entities.bullets import PlayerBullet
from dino_deputy.entities.enemies import Bandit
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.entities.obstacles import Cactus
from dino_deputy.systems.collision.geometry import overlaps


def tick_until_not_playing(world, limit=200):
    for _ in range(limit):
        if world.tick() is not GameState.PLAYING:
            return
    pytest.fail("world never left PLAYING")


def place_kill(world, x=400):
    """Bandit and bullet positioned to meet on the next tick."""
    world.bandits.add(Bandit(world.next_id(), x, False, world.rng))
    world.bullets.add(PlayerBullet(x - 5, 290, world.preset.bullet_speed))


# ===========================================================
# Scoring
# ===========================================================

class TestQuietRun:

    def test_passive_points(self, world):
        run_frames(world, 1205)
        assert world.state is GameState.PLAYING
        assert world.frame == 1205
        assert world.score == 241
        assert world.level == 1

    def test_speed_ramp_caps(self, world):
        run_frames(world, 1)
        assert world.speed == pytest.approx(9.002)
        run_frames(world, 5000)
        assert world.speed == 18

    def test_level_up_triggers_effects(self, world):
        levels = EventRecorder(world.events, LevelUpEvent)
        world.level_manager.score = 249
        run_frames(world, 5)

        assert levels.received == [LevelUpEvent(2)]
        assert world.level == 2
        assert world.effects.level_up_frames == Timers.LEVEL_UP_ANIM
        assert any(t.text == "LEVEL 2" for t in world.particles.texts)


# ===========================================================
# Death
# ===========================================================

class TestDeath:

    def test_single_cactus_kills_once_on_first_overlap(self, world):
        deaths = EventRecorder(world.events, PlayerDiedEvent, GameOverEvent)
        cactus = world.cacti.add(Cactus(world.next_id(), 500, 20, 40))

        first_overlap = None
        for _ in range(200):
            state = world.tick()
            touching = overlaps(world.player.hitbox(), cactus.rect())
            if first_overlap is None and touching:
                first_overlap = world.frame
            if state is not GameState.PLAYING:
                break
            assert not touching

        assert world.state is GameState.DYING
        assert world.frame == first_overlap == 43
        assert world.death_cause is EntityKind.CACTUS
        assert [type(e) for e in deaths.received] == [PlayerDiedEvent]
        assert deaths.received[0].cause is EntityKind.CACTUS

        run_frames(world, 30)
        assert len(deaths.received) == 1

    def test_dying_freeze_then_game_over(self, world):
        deaths = EventRecorder(world.events, GameOverEvent)
        world.cacti.add(Cactus(world.next_id(), 500, 20, 40))
        tick_until_not_playing(world)
        frame, score = world.frame, world.score

        run_frames(world, 59)
        assert world.state is GameState.DYING
        assert (world.frame, world.score) == (frame, score)

        run_frames(world, 1)
        assert world.state is GameState.GAMEOVER
        assert deaths.received == [GameOverEvent(score, 1)]

    def test_classic_has_no_freeze(self, classic_world):
        classic_world.cacti.add(Cactus(classic_world.next_id(), 500, 20, 40))
        tick_until_not_playing(classic_world)
        assert classic_world.state is GameState.GAMEOVER

    def test_game_over_is_inert(self, classic_world):
        classic_world.cacti.add(Cactus(classic_world.next_id(), 500, 20, 40))
        tick_until_not_playing(classic_world)
        frame = classic_world.frame

        run_frames(classic_world, 30, JUMP)

        assert classic_world.frame == frame
        assert not classic_world.toggle_pause()

    def test_restart_resets_session(self, classic_world):
        started = EventRecorder(classic_world.events, GameStartedEvent)
        classic_world.cacti.add(Cactus(classic_world.next_id(), 500, 20, 40))
        tick_until_not_playing(classic_world)

        classic_world.start_game()

        assert classic_world.state is GameState.PLAYING
        assert (classic_world.frame, classic_world.score, classic_world.level) == (0, 0, 1)
        assert len(classic_world.cacti) == 0
        assert classic_world.death_cause is None
        assert started.received == [GameStartedEvent("classic")]


# ===========================================================
# Pause
# ===========================================================

class TestPause:

    def test_pause_freezes_world(self, world):
        run_frames(world, 10)
        assert world.toggle_pause()
        assert world.state is GameState.PAUSED

        run_frames(world, 50, JUMP)
        assert world.frame == 10
        assert world.player.jump_count == 0

        assert world.toggle_pause()
        run_frames(world, 1)
        assert world.frame == 11

    def test_cannot_pause_title_screen(self):
        fresh = GameWorld(seed=1)
        assert fresh.state is GameState.START
        assert not fresh.toggle_pause()
        run_frames(fresh, 10)
        assert fresh.frame == 0


# ===========================================================
# Victory and Free Play
# ===========================================================

class TestVictory:

    def test_win_score_ends_in_victory(self, world):
        wins = EventRecorder(world.events, VictoryEvent)
        world.level_manager.score = Scoring.WIN_SCORE - 1

        run_frames(world, 5)

        assert world.state is GameState.VICTORY
        assert wins.received == [VictoryEvent(Scoring.WIN_SCORE)]
        assert world.level == Scoring.MAX_LEVEL

    def test_free_play_keeps_scoring(self, world):
        wins = EventRecorder(world.events, VictoryEvent)
        world.level_manager.score = Scoring.WIN_SCORE - 1
        run_frames(world, 5)

        assert world.continue_free_play()
        assert world.free_play
        run_frames(world, 50)

        assert world.state is GameState.PLAYING
        assert world.score == Scoring.WIN_SCORE + 10
        assert len(wins.received) == 1

    def test_free_play_only_from_victory(self, world):
        assert not world.continue_free_play()
        assert not world.free_play


# ===========================================================
# World-level Events
# ===========================================================

class TestWorldEvents:

    def test_jump_event(self, world):
        jumps = EventRecorder(world.events, JumpEvent)
        world.tick(JUMP)
        assert jumps.received == [JumpEvent(1)]

    def test_bandit_fire_event(self, world):
        fired = EventRecorder(world.events, EnemyFiredEvent)
        bandit = world.bandits.add(Bandit(world.next_id(), 600, True, world.rng))
        bandit.shoot_timer = 1

        world.tick()

        assert len(world.enemy_bullets) == 1
        assert fired.received == [EnemyFiredEvent((bandit.x - 10, 300))]

    def test_combo_expires_after_window(self, world):
        kills = EventRecorder(world.events, EnemyKilledEvent)
        place_kill(world)
        world.tick()
        assert world.combo.kill_combo == 1

        run_frames(world, 179)
        assert world.combo.kill_combo == 1

        place_kill(world)
        world.tick()
        assert [e.combo for e in kills.received] == [1, 1]

    def test_combo_chains_inside_window(self, world):
        kills = EventRecorder(world.events, EnemyKilledEvent)
        place_kill(world)
        world.tick()
        run_frames(world, 178)

        place_kill(world)
        world.tick()
        assert [e.combo for e in kills.received] == [1, 2]
        assert kills.received[1].points == 10


# ===========================================================
# Render Snapshot
# ===========================================================

class TestVisibleEntities:

    def test_player_always_listed(self, world):
        kinds = [v.kind for v in world.visible_entities()]
        assert kinds == [EntityKind.PLAYER]

    def test_snapshot_geometry(self, world):
        world.cacti.add(Cactus(world.next_id(), 400, 25, 50))
        world.bandits.add(Bandit(world.next_id(), 600, False, world.rng))

        by_kind = {v.kind: v for v in world.visible_entities()}

        cactus = by_kind[EntityKind.CACTUS]
        assert (cactus.x, cactus.y, cactus.width, cactus.height) == (400, 275, 25, 50)
        bandit = by_kind[EntityKind.BANDIT]
        assert (bandit.y, bandit.height) == (280, 45)
        player = by_kind[EntityKind.PLAYER]
        assert player.y + player.height == 325
        assert player.attrs["dead"] is False
