"""
test_particle_manager.py
------------------------
Tests for particle bursts and floating bonus texts.
"""

import pytest

from conftest import ScriptedRandom
from dino_deputy.graphics.particles.particle_manager import (
    BURSTS,
    BonusText,
    Particle,
    ParticleManager,
)


@pytest.fixture
def particles():
    return ParticleManager(ScriptedRandom(0.5))


class TestBursts:

    def test_burst_uses_style_ranges(self, particles):
        particles.burst(100, 200, BURSTS["bandit_death"], 3)

        assert len(particles.particles) == 3
        speck = particles.particles[0]
        assert (speck.x, speck.y) == (100, 200)
        assert speck.vx == pytest.approx(0.0)     # -3 + 0.5 * 6
        assert speck.life == pytest.approx(32.5)
        assert speck.color == BURSTS["bandit_death"].color

    def test_particle_gravity_and_death(self):
        speck = Particle(0, 0, 1, -2, 2, 3, (0, 0, 0))
        speck.update()
        assert (speck.x, speck.y) == (1, -2)
        assert speck.vy == pytest.approx(-1.7)
        assert not speck.is_dead()
        speck.update()
        assert speck.is_dead()

    def test_dead_particles_are_culled(self, particles):
        particles.burst(0, 0, BURSTS["thief_shot"], 5)     # life is exactly 20
        for _ in range(19):
            particles.update()
        assert len(particles.particles) == 5
        particles.update()
        assert len(particles.particles) == 0


class TestBonusText:

    def test_rises_and_slows(self):
        text = BonusText(10, 100, "+5", (0, 0, 0))
        text.update()
        assert text.y == 98
        assert text.vy == pytest.approx(-1.9)

    def test_fades_over_last_thirty_frames(self):
        text = BonusText(0, 0, "+5", (0, 0, 0))
        assert text.alpha == 1.0
        for _ in range(45):
            text.update()
        assert text.alpha == pytest.approx(0.5)

    def test_text_lives_sixty_frames(self, particles):
        particles.text(0, 0, "DODGE! +15")
        for _ in range(59):
            particles.update()
        assert len(particles.texts) == 1
        particles.update()
        assert len(particles.texts) == 0

    def test_clear(self, particles):
        particles.text(0, 0, "x")
        particles.burst(0, 0, BURSTS["bullet_impact"], 2)
        particles.clear()
        assert not particles.particles and not particles.texts
