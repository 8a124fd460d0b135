"""
game_settings.py
----------------
Centralized constants for all game systems.

Physics and scoring values are tuned for one logical tick per rendered frame
at a nominal 60 Hz; they are expressed per frame, not per second.
"""


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Screen and window configuration."""
    WIDTH: int = 800
    HEIGHT: int = 375
    FPS: int = 60
    CAPTION: str = "Dino Deputy"


# ===========================================================
# Physics
# ===========================================================

class Physics:
    """Per-frame physics constants."""
    GROUND_Y: int = 325
    GRAVITY: float = 0.8
    JUMP_FORCE: float = -15
    MAX_JUMPS: int = 2
    PARTICLE_GRAVITY: float = 0.3


class Speed:
    """World scroll speed ramp."""
    BASE: float = 9
    MAX: float = 18
    INCREMENT: float = 0.002


# ===========================================================
# Entity Dimensions
# ===========================================================

class PlayerDims:
    """Player placement and hitbox inset."""
    X: int = 80
    WIDTH: int = 40
    HEIGHT: int = 50
    HITBOX_TOP_INSET: int = 10
    HITBOX_RIGHT_INSET: int = 5
    SHOOT_ANIM_FRAMES: int = 15
    MUZZLE_OFFSET_X: int = 68
    MUZZLE_OFFSET_Y: int = 19


class Bounds:
    """Cull margins for entity lifecycle management."""
    PLAYER_BULLET_MARGIN: int = 20
    ENEMY_BULLET_MARGIN: int = 20
    SPAWN_OFFSET: int = 50
    BANDIT_CLEANUP_X: int = -50
    THIEF_CLEANUP_X: int = -80


# ===========================================================
# Scoring & Progression
# ===========================================================

class Scoring:
    """Score, level and bonus values."""
    FRAMES_PER_POINT: int = 5
    POINTS_PER_LEVEL: int = 250
    MAX_LEVEL: int = 10
    WIN_SCORE: int = (MAX_LEVEL + 1) * POINTS_PER_LEVEL

    BANDIT_BASE: int = 5
    THIEF_BASE: int = 10
    MAX_COMBO_MULTIPLIER: int = 5

    CLOSE_CALL_BONUS: int = 25
    CLOSE_CALL_CLEARANCE: int = 40
    DODGE_BONUS: int = 15
    DODGE_BAND: int = 30
    DODGE_ID_CAP: int = 50

    BANDIT_UNLOCK_SCORE: int = 100
    BANDIT_SHOOT_SCORE: int = 100
    THIEF_UNLOCK_LEVEL: int = 5


# ===========================================================
# Timers (frames)
# ===========================================================

class Timers:
    """Countdown lengths in frames."""
    COMBO_WINDOW: int = 180
    LEVEL_UP_ANIM: int = 120
    CLOSE_CALL_FLASH: int = 8
    DEATH_FLASH: int = 15
    OPENING_GRACE: int = 1200
    BONUS_TEXT_LIFE: int = 60


# ===========================================================
# Colors
# ===========================================================

class Colors:
    """Palette shared by the simulation (bonus text) and the renderer."""
    INK = (34, 34, 34)
    DARK = (51, 51, 51)
    BANDIT = (107, 143, 163)
    THIEF = (155, 89, 182)
    CACTUS = (83, 125, 67)
    SAND = (222, 196, 150)
    GOLD = (230, 170, 40)
    CLOSE_CALL = (255, 140, 0)
    DODGE = (70, 160, 220)
    PARTICLE = (90, 90, 90)
    WHITE = (255, 255, 255)


# ===========================================================
# Debug Display
# ===========================================================

class Debug:
    """Visual debug toggles, not related to logging."""
    HITBOX_VISIBLE: bool = False
    SHOW_FPS: bool = False
