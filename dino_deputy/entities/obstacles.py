"""
obstacles.py
------------
Cacti: static hazards that scroll with the world.
"""

from dino_deputy.core.runtime.game_settings import Physics
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.systems.collision.geometry import Rect


CACTUS_SIZES = (
    (20, 40),
    (25, 50),
    (35, 45),
)


class Cactus:
    """Ground-anchored obstacle. Bullets stop on it; touching it is fatal."""

    __slots__ = ("entity_id", "x", "y", "width", "height")

    kind = EntityKind.CACTUS

    def __init__(self, entity_id: int, x: float, width: int, height: int):
        self.entity_id = entity_id
        self.x = x
        self.width = width
        self.height = height
        self.y = Physics.GROUND_Y - height

    def update(self, world_speed: float):
        self.x -= world_speed

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def is_offscreen(self) -> bool:
        return self.x + self.width < 0
