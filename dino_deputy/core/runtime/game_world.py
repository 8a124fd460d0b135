"""
game_world.py
-------------
The simulation aggregate: one object owning every piece of session state.

Responsibilities
----------------
- Own the player, the entity pools, the managers, the RNGs and the event bus.
- Advance exactly one logical frame per tick() in a fixed order:
    frame counter and speed ramp -> player -> pools (move + cull) ->
    scenery and particles -> spawner -> combo window -> collisions ->
    progression
- Drive the session state machine (start, playing, paused, dying,
  game over, victory, free play).
- Expose the render snapshot: every visible entity and where it is.

Two RNGs are kept: `rng` feeds gameplay (spawns, bandit timers, thief
flight) and `cosmetic_rng` feeds particles and scenery, so visual noise never
shifts a seeded run.
"""

import random
from typing import List, NamedTuple, Optional

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Colors, Display, Speed
from dino_deputy.core.runtime.game_state import GameState
from dino_deputy.core.runtime.presets import GamePreset
from dino_deputy.core.services.event_manager import (
    EnemyFiredEvent,
    EventManager,
    GameOverEvent,
    GameStartedEvent,
    JumpEvent,
    LevelUpEvent,
    PauseToggledEvent,
    PlayerDiedEvent,
    ShotFiredEvent,
)
from dino_deputy.entities.bullets import EnemyBullet, PlayerBullet
from dino_deputy.entities.enemies import Bandit, FlyingThief
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.entities.obstacles import Cactus
from dino_deputy.entities.player import InputState, Player
from dino_deputy.graphics.background_manager import BackgroundManager
from dino_deputy.graphics.particles.particle_manager import ParticleManager
from dino_deputy.systems.collision.collision_manager import CollisionManager
from dino_deputy.systems.effects.effects_manager import EffectsManager
from dino_deputy.systems.entity_management.entity_pool import EntityPool
from dino_deputy.systems.entity_management.spawn_manager import SpawnManager
from dino_deputy.systems.level.combo_tracker import ComboTracker
from dino_deputy.systems.level.level_manager import LevelManager


NO_INPUT = InputState()


class VisibleEntity(NamedTuple):
    """Render contract: what exists and where (top-left anchored)."""
    kind: EntityKind
    x: float
    y: float
    width: float
    height: float
    attrs: dict


class GameWorld:
    """Single owner of all simulation state for one game session."""

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, preset: Optional[GamePreset] = None, seed: Optional[int] = None,
                 high_score: int = 0, events: Optional[EventManager] = None):
        """
        Args:
            preset: Gameplay variant (canonical frontier preset if None)
            seed: RNG seed; None for a fresh random run
            high_score: Best score loaded from persistence
            events: Event bus to publish on (a private one if None)
        """
        DebugLogger.section("Initializing GameWorld")

        self.preset = preset or GamePreset()
        self.seed = seed
        self.rng = random.Random(seed)
        self.cosmetic_rng = random.Random(seed)
        self.events = events or EventManager()
        self.state = GameState.START

        self.player = Player(self.preset)
        self.cacti = EntityPool("cacti")
        self.bullets = EntityPool("bullets")
        self.bandits = EntityPool("bandits")
        self.enemy_bullets = EntityPool("enemy_bullets")
        self.thieves = EntityPool("thieves")
        self.particles = ParticleManager(self.cosmetic_rng)

        self.combo = ComboTracker()
        self.level_manager = LevelManager(self.events, high_score)
        self.effects = EffectsManager()
        self.background = BackgroundManager(self.cosmetic_rng)
        self.spawner = SpawnManager(self)
        self.collisions = CollisionManager(self)

        self.events.subscribe(LevelUpEvent, self._on_level_up)
        self._reset_session()

        DebugLogger.init_entry("GameWorld")
        DebugLogger.init_sub(f"Preset: {self.preset.name}")
        DebugLogger.init_sub(f"Seed: {seed}")

    def _reset_session(self):
        self.frame = 0
        self.speed = Speed.BASE
        self.death_timer = 0
        self.death_cause = None
        self._next_id = 0

        for pool in (self.cacti, self.bullets, self.bandits, self.enemy_bullets, self.thieves):
            pool.clear()
        self.particles.clear()
        self.player.reset()
        self.combo.reset()
        self.level_manager.reset()
        self.effects.clear()
        self.background.reset()
        self.spawner.reset()
        self.collisions.reset()

    def next_id(self) -> int:
        """Allocate a session-unique entity id."""
        entity_id = self._next_id
        self._next_id += 1
        return entity_id

    # ===========================================================
    # Read-only Views
    # ===========================================================

    @property
    def score(self) -> int:
        return self.level_manager.score

    @property
    def level(self) -> int:
        return self.level_manager.level

    @property
    def high_score(self) -> int:
        return self.level_manager.high_score

    @property
    def free_play(self) -> bool:
        return self.level_manager.free_play

    # ===========================================================
    # Commands
    # ===========================================================

    def start_game(self):
        """Begin a fresh session from any state."""
        self._reset_session()
        self._set_state(GameState.PLAYING)
        self.events.dispatch(GameStartedEvent(self.preset.name))

    def toggle_pause(self) -> bool:
        """
        Pause a running game or resume a paused one.

        Returns:
            True if the state changed
        """
        if self.state is GameState.PLAYING:
            self._set_state(GameState.PAUSED)
        elif self.state is GameState.PAUSED:
            self._set_state(GameState.PLAYING)
        else:
            return False
        self.events.dispatch(PauseToggledEvent(self.state is GameState.PAUSED))
        return True

    def continue_free_play(self) -> bool:
        """Leave the victory screen and keep playing with no win check."""
        if self.state is not GameState.VICTORY:
            return False
        self.level_manager.enter_free_play()
        self._set_state(GameState.PLAYING)
        return True

    def _set_state(self, state: GameState):
        if state is not self.state:
            DebugLogger.state(f"{self.state.value} -> {state.value}")
            self.state = state

    # ===========================================================
    # Frame Update
    # ===========================================================

    def tick(self, input_state: InputState = NO_INPUT) -> GameState:
        """
        Advance one logical frame.

        Only PLAYING simulates; DYING runs the death countdown and effects;
        every other state leaves the world untouched.

        Args:
            input_state: Held jump/shoot buttons for this frame

        Returns:
            The state after the frame
        """
        if self.state is GameState.PLAYING:
            self._tick_playing(input_state)
        elif self.state is GameState.DYING:
            self._tick_dying()
        return self.state

    def _tick_playing(self, input_state: InputState):
        self.effects.update()

        self.frame += 1
        self.speed = min(Speed.MAX, Speed.BASE + self.frame * Speed.INCREMENT)

        self._update_player(input_state)
        self._advance_pools()
        self.background.update(self.speed)
        self.particles.update()
        self.spawner.update(self.frame)
        self.combo.tick()

        cause = self.collisions.update()
        if cause is not None:
            self._trigger_death(cause)
            return

        if self.level_manager.tick(self.frame):
            self._set_state(GameState.VICTORY)

    def _tick_dying(self):
        self.effects.update()
        self.death_timer -= 1
        if self.death_timer <= 0:
            self._game_over()

    def _update_player(self, input_state: InputState):
        actions = self.player.update(input_state)
        if actions.jump_number:
            self.events.dispatch(JumpEvent(actions.jump_number))
        if actions.shot:
            x, y = self.player.muzzle()
            self.bullets.add(PlayerBullet(x, y, self.preset.bullet_speed))
            self.events.dispatch(ShotFiredEvent((x, y)))

    def _advance_pools(self):
        forget = self.collisions.forget

        self.bullets.update_all()
        self.bullets.cull(PlayerBullet.is_offscreen)

        for bandit in self.bandits:
            if bandit.update(self.speed, self.rng):
                x, y = bandit.muzzle()
                self.enemy_bullets.add(
                    EnemyBullet(self.next_id(), x, y, self.preset.enemy_bullet_speed)
                )
                self.events.dispatch(EnemyFiredEvent((x, y)))
        self.bandits.cull(Bandit.is_offscreen)

        self.enemy_bullets.update_all()
        self.enemy_bullets.cull(EnemyBullet.is_offscreen, forget)

        self.thieves.update_all(self.speed)
        self.thieves.cull(FlyingThief.is_offscreen)

        self.cacti.update_all(self.speed)
        self.cacti.cull(Cactus.is_offscreen, forget)

    # ===========================================================
    # Session Transitions
    # ===========================================================

    def _trigger_death(self, cause: EntityKind):
        self.death_cause = cause
        self.effects.death()
        self.events.dispatch(PlayerDiedEvent(cause, self.score))

        if self.preset.death_freeze_frames > 0:
            self.death_timer = self.preset.death_freeze_frames
            self._set_state(GameState.DYING)
        else:
            self._game_over()

    def _game_over(self):
        self._set_state(GameState.GAMEOVER)
        DebugLogger.system(f"Game over: score {self.score}, level {self.level}")
        self.events.dispatch(GameOverEvent(self.score, self.level))

    def _on_level_up(self, event: LevelUpEvent):
        self.effects.level_up()
        self.background.on_level(event.level)
        self.particles.text(Display.WIDTH / 2, 80, f"LEVEL {event.level}", Colors.INK)

    # ===========================================================
    # Render Snapshot
    # ===========================================================

    def visible_entities(self) -> List[VisibleEntity]:
        """Every drawable entity this frame, back to front."""
        visible = []
        for cactus in self.cacti:
            visible.append(VisibleEntity(EntityKind.CACTUS, cactus.x, cactus.y,
                                         cactus.width, cactus.height, {"id": cactus.entity_id}))
        for bandit in self.bandits:
            visible.append(VisibleEntity(EntityKind.BANDIT, bandit.x, bandit.top,
                                         bandit.width, bandit.height, {"id": bandit.entity_id}))
        for thief in self.thieves:
            visible.append(VisibleEntity(EntityKind.FLYING_THIEF, thief.x, thief.y,
                                         thief.width, thief.height,
                                         {"id": thief.entity_id, "wings_up": thief.wings_up}))
        for bullet in self.bullets:
            visible.append(VisibleEntity(EntityKind.PLAYER_BULLET, bullet.x, bullet.y,
                                         bullet.width, bullet.height, {}))
        for bullet in self.enemy_bullets:
            visible.append(VisibleEntity(EntityKind.ENEMY_BULLET, bullet.x, bullet.y,
                                         bullet.width, bullet.height, {"id": bullet.entity_id}))

        player = self.player
        visible.append(VisibleEntity(
            EntityKind.PLAYER, player.x, player.y - player.height, player.width, player.height,
            {"is_shooting": player.is_shooting, "is_jumping": player.is_jumping,
             "jump_count": player.jump_count, "dead": self.death_cause is not None},
        ))

        for particle in self.particles.particles:
            visible.append(VisibleEntity(EntityKind.PARTICLE, particle.x, particle.y,
                                         particle.size, particle.size,
                                         {"color": particle.color, "life": particle.life}))
        for text in self.particles.texts:
            visible.append(VisibleEntity(EntityKind.BONUS_TEXT, text.x, text.y, 0, 0,
                                         {"text": text.text, "color": text.color,
                                          "alpha": text.alpha}))
        return visible
