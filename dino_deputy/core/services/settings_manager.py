"""
settings_manager.py
-------------------
Manages persistent user settings (audio, last initials, preferred preset).
"""

import copy
import json
import os
from dino_deputy.core.debug.debug_logger import DebugLogger


# ===========================================================
# Settings Manager
# ===========================================================

class SettingsManager:
    """Manages persistent user settings with safe defaults."""

    SETTINGS_FILE = "settings.json"

    DEFAULTS = {
        "audio": {
            "muted": False,
            "volume": 100,
        },
        "player": {
            "initials": "",
        },
        "game": {
            "preset": "frontier",
        },
    }

    def __init__(self, settings_file=None):
        """
        Initialize settings manager.

        Args:
            settings_file: Optional custom path for settings file
        """
        self.settings_file = settings_file or self.SETTINGS_FILE
        self.settings = self._load()

    # ===========================================================
    # Public API
    # ===========================================================

    def get(self, category, key, default=None):
        """
        Get a setting value.

        Args:
            category: Settings category (audio, player, game)
            key: Setting key
            default: Fallback if not found

        Returns:
            Setting value or default
        """
        return self.settings.get(category, {}).get(key, default)

    def set(self, category, key, value):
        self.settings.setdefault(category, {})[key] = value

    def save(self):
        """Save current settings to file."""
        try:
            with open(self.settings_file, 'w', encoding="utf-8") as f:
                json.dump(self.settings, f, indent=2)
            DebugLogger.system(f"Saved settings to {self.settings_file}", category="persistence")
        except (IOError, OSError, TypeError) as e:
            DebugLogger.warn(f"Failed to save settings: {e}", category="persistence")

    # ===========================================================
    # Loading & Merging
    # ===========================================================

    def _load(self):
        """Load settings from file or use defaults."""
        merged_settings = copy.deepcopy(self.DEFAULTS)

        if not os.path.exists(self.settings_file):
            DebugLogger.system("Using default settings", category="persistence")
            return merged_settings

        try:
            with open(self.settings_file, 'r', encoding="utf-8") as f:
                loaded = json.load(f)
            if not isinstance(loaded, dict):
                raise TypeError(f"expected an object, got {type(loaded).__name__}")
            self._merge_recursive(merged_settings, loaded)
            DebugLogger.system(f"Loaded user settings from {self.settings_file}", category="persistence")

        except (json.JSONDecodeError, IOError, OSError, TypeError) as e:
            DebugLogger.warn(f"Failed to load settings: {e}", category="persistence")
            return copy.deepcopy(self.DEFAULTS)

        return merged_settings

    def _merge_recursive(self, base, update):
        """
        Recursively merge 'update' dict into 'base' dict.
        Allows partial files (e.g. only the mute flag).
        """
        for key, value in update.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._merge_recursive(base[key], value)
            else:
                base[key] = value
