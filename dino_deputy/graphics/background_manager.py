"""
background_manager.py
---------------------
Scrolling desert scenery and the level-driven time of day.

Provides:
- Clouds drifting at a fifth of the world speed
- Ground texture lines scrolling at world speed
- Sky palette and sun arc from dawn (level 1) to dusk (level 10)
- Eras: a water tower landmark that rises toward a per-era height

Everything here is plain state; DrawManager turns it into pixels.
"""

from typing import NamedTuple, Tuple

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.runtime.game_settings import Display, Physics, Scoring


# ===========================================================
# Scenery Records
# ===========================================================

class Cloud:
    __slots__ = ("x", "y", "width")

    def __init__(self, x, y, width):
        self.x = x
        self.y = y
        self.width = width


class GroundLine:
    __slots__ = ("x", "width")

    def __init__(self, x, width):
        self.x = x
        self.width = width


class SkyState(NamedTuple):
    """Everything the renderer needs to paint the sky for a level."""
    sun_x: float
    sun_y: float
    sun_radius: float
    sky_top: Tuple[int, int, int]
    sky_bottom: Tuple[int, int, int]
    sun_color: Tuple[int, int, int]
    progress: float


class Era(NamedTuple):
    name: str
    min_level: int
    landmark_height: float


ERAS = (
    Era("dawn", 1, 0),
    Era("noon", 4, 40),
    Era("dusk", 7, 80),
    Era("sunset", 10, 120),
)


# ===========================================================
# Palette Helpers
# ===========================================================

DAWN_TOP = (74, 63, 107)
DAWN_BOTTOM = (255, 153, 102)
NOON_TOP = (135, 206, 235)
NOON_BOTTOM = (232, 244, 248)
DUSK_TOP = (74, 63, 107)
DUSK_BOTTOM = (255, 119, 68)
MORNING_BOTTOM = (255, 228, 181)
SUN_DAWN = (255, 204, 68)
SUN_NOON = (255, 238, 136)
SUN_DUSK = (255, 102, 51)


def lerp_color(a, b, t):
    """Linear blend between two RGB tuples, rounded to ints."""
    return tuple(round(a[i] + (b[i] - a[i]) * t) for i in range(3))


def sky_state(level: int) -> SkyState:
    """
    Sky palette and sun placement for a level.

    Args:
        level: Current level, 1..MAX_LEVEL

    Returns:
        SkyState
    """
    progress = min((level - 1) / (Scoring.MAX_LEVEL - 1), 1.0)

    sun_x = 50 + progress * (Display.WIDTH - 100)
    arc = -4 * progress * (progress - 1)    # 0 at either end, 1 at noon
    sun_y = Physics.GROUND_Y - 50 - arc * 200
    sun_radius = 30 + (1 - arc) * 10

    if progress < 0.3:
        t = progress / 0.3
        top = lerp_color(DAWN_TOP, NOON_TOP, t)
        bottom = lerp_color(DAWN_BOTTOM, MORNING_BOTTOM, t)
        sun = SUN_DAWN
    elif progress < 0.7:
        top, bottom, sun = NOON_TOP, NOON_BOTTOM, SUN_NOON
    else:
        t = (progress - 0.7) / 0.3
        top = lerp_color(NOON_TOP, DUSK_TOP, t)
        bottom = lerp_color(MORNING_BOTTOM, DUSK_BOTTOM, t)
        sun = lerp_color(SUN_NOON, SUN_DUSK, t)

    return SkyState(sun_x, sun_y, sun_radius, top, bottom, sun, progress)


def era_for(level: int) -> Era:
    chosen = ERAS[0]
    for era in ERAS:
        if level >= era.min_level:
            chosen = era
    return chosen


# ===========================================================
# Background Manager
# ===========================================================

class BackgroundManager:
    """Clouds, ground texture and the era landmark for one world."""

    CLOUD_COUNT = 5
    GROUND_LINE_COUNT = 20
    CLOUD_PARALLAX = 0.2
    LANDMARK_RISE_SPEED = 0.5   # px per frame

    def __init__(self, rng):
        self.rng = rng
        self.reset()
        DebugLogger.init_entry("BackgroundManager")

    def reset(self):
        rand = self.rng.random
        self.clouds = [
            Cloud(rand() * Display.WIDTH, 30 + rand() * 50, 40 + rand() * 30)
            for _ in range(self.CLOUD_COUNT)
        ]
        self.ground_lines = [
            GroundLine(rand() * Display.WIDTH, 10 + rand() * 30)
            for _ in range(self.GROUND_LINE_COUNT)
        ]
        self.era = ERAS[0]
        self.landmark_height = self.era.landmark_height

    # ===========================================================
    # Frame Update
    # ===========================================================

    def update(self, world_speed: float):
        rand = self.rng.random
        for cloud in self.clouds:
            cloud.x -= world_speed * self.CLOUD_PARALLAX
            if cloud.x + cloud.width < 0:
                cloud.x = Display.WIDTH + 50
                cloud.y = 30 + rand() * 50

        for line in self.ground_lines:
            line.x -= world_speed
            if line.x + line.width < 0:
                line.x = Display.WIDTH + rand() * 100

        target = self.era.landmark_height
        if self.landmark_height < target:
            self.landmark_height = min(target, self.landmark_height + self.LANDMARK_RISE_SPEED)
        elif self.landmark_height > target:
            self.landmark_height = max(target, self.landmark_height - self.LANDMARK_RISE_SPEED)

    def on_level(self, level: int):
        """Switch era when the level crosses an era threshold."""
        era = era_for(level)
        if era is not self.era:
            self.era = era
            DebugLogger.state(f"Era -> {era.name}", category="level")

    @property
    def landmark_settled(self) -> bool:
        return self.landmark_height == self.era.landmark_height
