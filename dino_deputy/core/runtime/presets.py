"""
presets.py
----------
Named gameplay variants.

Responsibilities
----------------
- Describe everything that differs between the two ways the game is played
  (shooting rules, projectile speeds, enemy tiers, flying thieves, the
  dying freeze) as one frozen GamePreset.
- Load presets.json through the config manager and merge it over the
  built-in canonical values.

The dataclass defaults ARE the canonical "frontier" preset; presets.json only
lists what each named preset overrides.
"""

from dataclasses import dataclass, field, fields
from typing import Dict, NamedTuple, Tuple

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.services.config_manager import load_config


DEFAULT_PRESET = "frontier"


# ===========================================================
# Spawn Tiers
# ===========================================================

class BanditTier(NamedTuple):
    """Bandit spawn pacing, active from min_level upward."""
    min_level: int
    interval: int
    max_alive: int
    chance: float


class ThiefTier(NamedTuple):
    """Flying thief spawn odds, active from min_level upward."""
    min_level: int
    chance: float
    max_alive: int


def _default_bandit_tiers():
    return (
        BanditTier(1, 120, 4, 0.75),
        BanditTier(3, 100, 5, 0.8),
        BanditTier(6, 80, 6, 0.85),
    )


def _default_thief_tiers():
    return (
        ThiefTier(5, 0.6, 2),
        ThiefTier(7, 0.75, 3),
        ThiefTier(9, 0.85, 4),
    )


# ===========================================================
# Preset
# ===========================================================

@dataclass(frozen=True)
class GamePreset:
    """Immutable set of variant-specific tunables."""
    name: str = DEFAULT_PRESET
    shoot_cooldown: int = 12
    bullet_speed: float = 22
    shoot_requires_release: bool = True
    enemy_bullet_speed: float = 14
    bandit_tiers: Tuple[BanditTier, ...] = field(default_factory=_default_bandit_tiers)
    thieves_enabled: bool = True
    thief_interval: int = 200
    thief_tiers: Tuple[ThiefTier, ...] = field(default_factory=_default_thief_tiers)
    death_freeze_frames: int = 60

    # ===========================================================
    # Tier Lookup
    # ===========================================================

    def bandit_tier(self, level: int) -> BanditTier:
        """Highest bandit tier whose min_level the level has reached."""
        return _pick_tier(self.bandit_tiers, level)

    def thief_tier(self, level: int) -> ThiefTier:
        return _pick_tier(self.thief_tiers, level)

    # ===========================================================
    # Construction
    # ===========================================================

    @classmethod
    def from_dict(cls, name: str, data: dict) -> "GamePreset":
        """
        Build a preset from a (JSON-shaped) dict.

        Args:
            name: Preset name
            data: Overrides; unknown keys are ignored with a warning

        Returns:
            GamePreset
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known or key == "name":
                DebugLogger.warn(f"Preset '{name}': ignoring unknown key '{key}'", category="loading")
                continue
            if key == "bandit_tiers":
                value = tuple(sorted((BanditTier(**tier) for tier in value), key=lambda t: t.min_level))
            elif key == "thief_tiers":
                value = tuple(sorted((ThiefTier(**tier) for tier in value), key=lambda t: t.min_level))
            kwargs[key] = value
        return cls(name=name, **kwargs)


def _pick_tier(tiers, level):
    chosen = tiers[0]
    for tier in tiers:
        if level >= tier.min_level:
            chosen = tier
    return chosen


# ===========================================================
# Loading
# ===========================================================

DEFAULT_PRESETS = {
    DEFAULT_PRESET: {},
}


def load_presets() -> Dict[str, GamePreset]:
    """Load every named preset from presets.json merged over the defaults."""
    data = load_config("presets.json", default_dict=DEFAULT_PRESETS)
    presets = {name: GamePreset.from_dict(name, values) for name, values in data.items()}
    DebugLogger.system(f"Presets available: {', '.join(sorted(presets))}", category="loading")
    return presets


def get_preset(name: str = DEFAULT_PRESET) -> GamePreset:
    """
    Look up a preset by name.

    Raises:
        ValueError: If no preset has that name
    """
    presets = load_presets()
    if name not in presets:
        raise ValueError(f"Unknown preset '{name}'. Choose from: {', '.join(sorted(presets))}")
    return presets[name]
