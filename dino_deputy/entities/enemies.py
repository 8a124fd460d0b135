"""
enemies.py
----------
Hostile entities: bandit raptors on foot and flying thieves.

Responsibilities
----------------
- Bandit: walks toward the player while the world scrolls, fires on a
  countdown but only from the right two thirds of the screen.
- FlyingThief: pterodactyl carrying a money sack; flies faster than the
  scroll with a flapping wing phase that also bobs it vertically. Never shoots.
"""

import math

from dino_deputy.core.runtime.game_settings import Bounds, Display, Physics
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.systems.collision.geometry import Rect


# ===========================================================
# Bandit
# ===========================================================

class Bandit:
    """Feet-anchored gunslinger. `y` is the feet line, like the player's."""

    __slots__ = ("entity_id", "x", "y", "direction", "speed", "can_shoot", "shoot_timer")

    kind = EntityKind.BANDIT
    width = 35
    height = 45

    WALK_SPEED = 2
    FIRST_SHOT_DELAY = (10, 15)     # base, random spread
    RELOAD_DELAY = (25, 20)
    RETRY_DELAY = 5
    MUZZLE_OFFSET = (-10, 20)

    def __init__(self, entity_id: int, x: float, can_shoot: bool, rng):
        self.entity_id = entity_id
        self.x = x
        self.y = Physics.GROUND_Y
        self.direction = -1
        self.speed = self.WALK_SPEED
        self.can_shoot = can_shoot
        base, spread = self.FIRST_SHOT_DELAY
        self.shoot_timer = base + rng.random() * spread

    def update(self, world_speed: float, rng) -> bool:
        """
        Move one frame and run the shooting countdown.

        Returns:
            True if the bandit fires this frame
        """
        self.x -= world_speed
        self.x += self.direction * self.speed

        if not self.can_shoot:
            return False

        self.shoot_timer -= 1
        if self.shoot_timer > 0:
            return False

        if self.x > Display.WIDTH / 3:
            base, spread = self.RELOAD_DELAY
            self.shoot_timer = base + rng.random() * spread
            return True

        self.shoot_timer = self.RETRY_DELAY
        return False

    def muzzle(self) -> tuple:
        dx, dy = self.MUZZLE_OFFSET
        return self.x + dx, self.y - self.height + dy

    @property
    def top(self) -> float:
        return self.y - self.height

    def rect(self) -> Rect:
        return Rect(self.x, self.top, self.width, self.height)

    def is_offscreen(self) -> bool:
        return self.x < Bounds.BANDIT_CLEANUP_X


# ===========================================================
# Flying Thief
# ===========================================================

class FlyingThief:
    """Pterodactyl with a money sack hanging below and behind its body."""

    __slots__ = ("entity_id", "x", "y", "speed", "wing_phase")

    kind = EntityKind.FLYING_THIEF
    width = 60
    height = 35

    ALTITUDE_RANGE = (80, 60)       # base height above ground, random spread
    SPEED_RANGE = (3.5, 1.5)
    WING_RATE = 0.08
    BOB_AMPLITUDE = 0.3
    SCROLL_FACTOR = 0.5

    # Bullets also hit the sack, which hangs left of and below the body.
    SACK_REACH_X = 25
    SACK_REACH_Y = 15

    def __init__(self, entity_id: int, x: float, rng):
        self.entity_id = entity_id
        self.x = x
        base, spread = self.ALTITUDE_RANGE
        self.y = Physics.GROUND_Y - (base + rng.random() * spread)
        base, spread = self.SPEED_RANGE
        self.speed = base + rng.random() * spread
        self.wing_phase = rng.random() * math.pi * 2

    def update(self, world_speed: float):
        self.x -= self.speed + world_speed * self.SCROLL_FACTOR
        self.wing_phase += self.WING_RATE
        self.y += math.sin(self.wing_phase * 0.5) * self.BOB_AMPLITUDE

    @property
    def wings_up(self) -> bool:
        return math.sin(self.wing_phase) > 0

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def shot_rect(self) -> Rect:
        """Body plus money sack, the area a bullet can hit."""
        return Rect(
            self.x - self.SACK_REACH_X,
            self.y,
            self.width + self.SACK_REACH_X,
            self.height + self.SACK_REACH_Y,
        )

    def body_rect(self) -> Rect:
        """Slightly inset body used for fatal contact with the player."""
        return Rect(self.x + 5, self.y + 5, self.width - 10, self.height - 5)

    def is_offscreen(self) -> bool:
        return self.x < Bounds.THIEF_CLEANUP_X
