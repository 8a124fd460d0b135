"""
bullets.py
----------
Projectiles fired by the player (rightward) and by bandits (leftward).

Enemy bullets carry an id from construction so the dodge detector can
credit each one at most once.
"""

from dino_deputy.core.runtime.game_settings import Bounds, Display
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.systems.collision.geometry import Rect


BULLET_WIDTH = 10
BULLET_HEIGHT = 4


class PlayerBullet:
    """Straight-line shot from the deputy's revolver."""

    __slots__ = ("x", "y", "speed")

    kind = EntityKind.PLAYER_BULLET
    width = BULLET_WIDTH
    height = BULLET_HEIGHT

    def __init__(self, x: float, y: float, speed: float):
        self.x = x
        self.y = y
        self.speed = speed

    def update(self):
        self.x += self.speed

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def is_offscreen(self) -> bool:
        return self.x > Display.WIDTH + Bounds.PLAYER_BULLET_MARGIN


class EnemyBullet:
    """Shot fired by a bandit, travelling toward the player."""

    __slots__ = ("entity_id", "x", "y", "speed")

    kind = EntityKind.ENEMY_BULLET
    width = BULLET_WIDTH
    height = BULLET_HEIGHT

    def __init__(self, entity_id: int, x: float, y: float, speed: float):
        self.entity_id = entity_id
        self.x = x
        self.y = y
        self.speed = speed

    def update(self):
        self.x -= self.speed

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def is_offscreen(self) -> bool:
        return self.x < -Bounds.ENEMY_BULLET_MARGIN
