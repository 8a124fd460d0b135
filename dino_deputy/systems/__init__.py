"""Gameplay systems: collisions, spawning, progression and effects."""
