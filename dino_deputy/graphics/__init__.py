"""Scenery state, particles and the pygame renderer."""
