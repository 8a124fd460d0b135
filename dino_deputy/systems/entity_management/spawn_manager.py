"""
spawn_manager.py
----------------
Policy-driven spawner for cacti, bandits and flying thieves.

Responsibilities
----------------
- Space cacti by an interval that shrinks as the world speeds up, padded
  during the opening grace window and jittered every frame.
- Unlock bandits once the score reaches 100; pace them with the preset's
  level tiers (interval, population cap, coin flip).
- Unlock flying thieves at level 5 when the preset has them.
- Draw every random number from the world's RNG so a seeded world replays.

Every bandit/thief attempt restarts its interval clock, whether or not the
coin flip or the population cap let anything through.
"""

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Bounds, Display, Scoring, Timers
from dino_deputy.entities.enemies import Bandit, FlyingThief
from dino_deputy.entities.obstacles import CACTUS_SIZES, Cactus


class SpawnManager:
    """Decides, once per playing frame, what enters from the right edge."""

    CACTUS_BASE_INTERVAL = 140
    CACTUS_MIN_INTERVAL = 50
    CACTUS_SPEED_FACTOR = 6
    CACTUS_GRACE_PADDING = 40
    CACTUS_JITTER = 80

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, world):
        """
        Args:
            world: GameWorld providing the pools, RNG, preset, speed and score
        """
        self.world = world
        self.paused = False
        self.reset()
        DebugLogger.init_entry("SpawnManager")
        DebugLogger.init_sub(f"Thieves: {'on' if world.preset.thieves_enabled else 'off'}")

    def reset(self):
        self.last_cactus_frame = 0
        self.last_bandit_frame = 0
        self.last_thief_frame = 0

    @property
    def spawn_x(self) -> float:
        return Display.WIDTH + Bounds.SPAWN_OFFSET

    # ===========================================================
    # Policy
    # ===========================================================

    def cactus_interval(self, speed: float, frame: int) -> float:
        """Minimum cactus spacing in frames before jitter."""
        interval = max(self.CACTUS_MIN_INTERVAL,
                       self.CACTUS_BASE_INTERVAL - speed * self.CACTUS_SPEED_FACTOR)
        if frame < Timers.OPENING_GRACE:
            interval += self.CACTUS_GRACE_PADDING
        return interval

    def update(self, frame: int):
        """
        Run every spawn rule for this frame.

        Args:
            frame: Playing-frame counter, already advanced for this frame
        """
        if self.paused:
            return

        self._try_cactus(frame)
        self._try_bandit(frame)
        if self.world.preset.thieves_enabled:
            self._try_thief(frame)

    def _try_cactus(self, frame: int):
        world = self.world
        interval = self.cactus_interval(world.speed, frame)
        if frame - self.last_cactus_frame > interval + world.rng.random() * self.CACTUS_JITTER:
            self.spawn_cactus()
            self.last_cactus_frame = frame

    def _try_bandit(self, frame: int):
        world = self.world
        progression = world.level_manager
        if progression.score < Scoring.BANDIT_UNLOCK_SCORE:
            return

        tier = world.preset.bandit_tier(progression.level)
        if frame - self.last_bandit_frame <= tier.interval:
            return

        if world.rng.random() < tier.chance and len(world.bandits) < tier.max_alive:
            self.spawn_bandit()
        self.last_bandit_frame = frame

    def _try_thief(self, frame: int):
        world = self.world
        level = world.level_manager.level
        if level < Scoring.THIEF_UNLOCK_LEVEL:
            return
        if frame - self.last_thief_frame <= world.preset.thief_interval:
            return

        tier = world.preset.thief_tier(level)
        if world.rng.random() < tier.chance and len(world.thieves) < tier.max_alive:
            self.spawn_thief()
        self.last_thief_frame = frame

    # ===========================================================
    # Spawning
    # ===========================================================

    def spawn_cactus(self, x: float = None, size: tuple = None) -> Cactus:
        """Add a cactus at the right edge (or at x), with a random or given size."""
        world = self.world
        if size is None:
            size = CACTUS_SIZES[int(world.rng.random() * len(CACTUS_SIZES))]
        width, height = size
        cactus = Cactus(world.next_id(), self.spawn_x if x is None else x, width, height)
        world.cacti.add(cactus)
        DebugLogger.trace(f"Cactus #{cactus.entity_id} {width}x{height}", category="entity_spawn")
        return cactus

    def spawn_bandit(self, x: float = None) -> Bandit:
        world = self.world
        can_shoot = world.level_manager.score >= Scoring.BANDIT_SHOOT_SCORE
        bandit = Bandit(world.next_id(), self.spawn_x if x is None else x, can_shoot, world.rng)
        world.bandits.add(bandit)
        DebugLogger.trace(f"Bandit #{bandit.entity_id}", category="entity_spawn")
        return bandit

    def spawn_thief(self, x: float = None) -> FlyingThief:
        world = self.world
        thief = FlyingThief(world.next_id(), self.spawn_x if x is None else x, world.rng)
        world.thieves.add(thief)
        DebugLogger.trace(f"Flying thief #{thief.entity_id}", category="entity_spawn")
        return thief
