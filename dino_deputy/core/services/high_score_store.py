"""
high_score_store.py
-------------------
Persists the best score ever reached as a single JSON value.

A missing, unreadable or malformed file reads as 0. The file is only
rewritten when a score beats the stored value.
"""

import json
import os

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.core.services.event_manager import HighScoreEvent


class HighScoreStore:
    """Single-integer high score persisted to disk."""

    FILENAME = "highscore.json"
    KEY = "high_score"

    def __init__(self, path=None):
        """
        Args:
            path: File to read and write (FILENAME in the working dir if None)
        """
        self.path = path or self.FILENAME
        self.value = self._load()

    # ===========================================================
    # Public API
    # ===========================================================

    def submit(self, score: int) -> bool:
        """
        Record a score if it beats the stored best.

        Returns:
            True if the stored value changed
        """
        if score <= self.value:
            return False
        self.value = score
        self._save()
        return True

    def attach(self, events):
        """Follow the live high score published by a world."""
        events.subscribe(HighScoreEvent, self._on_high_score)

    def _on_high_score(self, event: HighScoreEvent):
        self.submit(event.high_score)

    # ===========================================================
    # Loading & Saving
    # ===========================================================

    def _load(self) -> int:
        if not os.path.exists(self.path):
            DebugLogger.system("No stored high score, starting at 0", category="persistence")
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                value = json.load(f).get(self.KEY, 0)
        except (json.JSONDecodeError, AttributeError, IOError, OSError) as e:
            DebugLogger.warn(f"Unreadable high score file, using 0: {e}", category="persistence")
            return 0

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            DebugLogger.warn(f"Invalid stored high score {value!r}, using 0", category="persistence")
            return 0

        DebugLogger.system(f"Loaded high score {value}", category="persistence")
        return value

    def _save(self):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.KEY: self.value}, f)
        except (IOError, OSError, TypeError) as e:
            DebugLogger.warn(f"Failed to save high score: {e}", category="persistence")
