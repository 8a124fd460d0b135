"""
particle_manager.py
-------------------
Cosmetic particles and floating bonus texts.

Usage:
    particles = ParticleManager(rng)
    particles.burst(x, y, BURSTS["bandit_death"], count=14)
    particles.text(x, y, "STOMP! +5", Colors.BANDIT)
    particles.update()

Nothing in here collides with anything; the collision engine only asks the
manager to emit feedback.
"""

from typing import NamedTuple, Tuple

from dino_deputy.core.runtime.game_settings import Colors, Physics, Timers
from dino_deputy.entities.entity_types import EntityKind
from dino_deputy.systems.entity_management.entity_pool import EntityPool


# ===========================================================
# Burst Presets
# ===========================================================

class BurstStyle(NamedTuple):
    """How a burst scatters. Ranges are (base, random spread)."""
    vx: Tuple[float, float]
    vy: Tuple[float, float]
    life: Tuple[float, float]
    size: Tuple[float, float]
    color: tuple


BURSTS = {
    # Bullet hitting a cactus, debris kicked back toward the shooter
    "bullet_impact": BurstStyle((-4, 3), (-2, 4), (20, 10), (2, 2), Colors.CACTUS),
    "enemy_bullet_impact": BurstStyle((1, 3), (-2, 4), (15, 10), (2, 2), Colors.CACTUS),
    "bandit_death": BurstStyle((-3, 6), (-3, 6), (25, 15), (3, 3), Colors.BANDIT),
    "thief_shot": BurstStyle((-4, 8), (-4, 8), (20, 0), (3, 3), Colors.THIEF),
    "thief_stomp": BurstStyle((-3, 6), (-3, 6), (20, 0), (3, 2), Colors.THIEF),
}


# ===========================================================
# Records
# ===========================================================

class Particle:
    """Single gravity-affected speck."""

    __slots__ = ("x", "y", "vx", "vy", "life", "size", "color")

    kind = EntityKind.PARTICLE

    def __init__(self, x, y, vx, vy, life, size, color):
        self.x = x
        self.y = y
        self.vx = vx
        self.vy = vy
        self.life = life
        self.size = size
        self.color = color

    def update(self):
        self.x += self.vx
        self.y += self.vy
        self.life -= 1
        self.vy += Physics.PARTICLE_GRAVITY

    def is_dead(self) -> bool:
        return self.life <= 0


class BonusText:
    """Floating score popup that drifts up, slows, then fades."""

    __slots__ = ("x", "y", "text", "color", "life", "vy")

    kind = EntityKind.BONUS_TEXT

    RISE_SPEED = -2
    DAMPING = 0.95
    FADE_FRAMES = 30

    def __init__(self, x, y, text, color):
        self.x = x
        self.y = y
        self.text = text
        self.color = color
        self.life = Timers.BONUS_TEXT_LIFE
        self.vy = self.RISE_SPEED

    def update(self):
        self.y += self.vy
        self.vy *= self.DAMPING
        self.life -= 1

    @property
    def alpha(self) -> float:
        return min(1.0, self.life / self.FADE_FRAMES)

    def is_dead(self) -> bool:
        return self.life <= 0


# ===========================================================
# Manager
# ===========================================================

class ParticleManager:
    """Owns the particle and bonus-text pools for one world."""

    def __init__(self, rng):
        self.rng = rng
        self.particles = EntityPool("particles")
        self.texts = EntityPool("bonus_texts")

    def burst(self, x: float, y: float, style: BurstStyle, count: int):
        """Emit count particles from (x, y) using a burst style."""
        rand = self.rng.random
        for _ in range(count):
            self.particles.add(Particle(
                x,
                y,
                style.vx[0] + rand() * style.vx[1],
                style.vy[0] + rand() * style.vy[1],
                style.life[0] + rand() * style.life[1],
                style.size[0] + rand() * style.size[1],
                style.color,
            ))

    def text(self, x: float, y: float, text: str, color=Colors.INK) -> BonusText:
        return self.texts.add(BonusText(x, y, text, color))

    def update(self):
        self.particles.update_all()
        self.particles.cull(Particle.is_dead)
        self.texts.update_all()
        self.texts.cull(BonusText.is_dead)

    def clear(self):
        self.particles.clear()
        self.texts.clear()
