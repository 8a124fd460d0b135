"""
Particle system exports.

Provides burst particles and floating bonus text.
"""

from dino_deputy.graphics.particles.particle_manager import (
    BURSTS,
    BonusText,
    BurstStyle,
    Particle,
    ParticleManager,
)

__all__ = [
    'BURSTS',
    'BonusText',
    'BurstStyle',
    'Particle',
    'ParticleManager',
]
