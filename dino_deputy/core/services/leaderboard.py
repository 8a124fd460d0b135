"""
leaderboard.py
--------------
Score board shared between sessions: submit, query, rank.

Responsibilities
----------------
- LeaderboardService: the key-value contract the game talks to. Every
  failure is caught, logged and turned into None (writes) or [] (reads).
- JsonLeaderboardStore: the backend, one JSON document of score records.
- LeaderboardClient: fire-and-forget front for the game loop. Requests run
  on a single daemon worker thread; finished results are queued until the
  UI polls them. Nothing here ever touches GameWorld.

Dates are calendar days in America/Los_Angeles, so "today" rolls over at
Pacific midnight for every player.
"""

import json
import os
import queue
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional
from zoneinfo import ZoneInfo

from dino_deputy.core.debug.debug_logger import DebugLogger


LEADERBOARD_TZ = ZoneInfo("America/Los_Angeles")
SCOPE_TODAY = "today"
SCOPE_ALL_TIME = "all-time"
SCOPES = (SCOPE_TODAY, SCOPE_ALL_TIME)
QUERY_WINDOW = 100
MAX_INITIALS = 3


class LeaderboardError(Exception):
    """Raised by the backend when a record cannot be read or written."""


# ===========================================================
# Records & Helpers
# ===========================================================

@dataclass(frozen=True)
class LeaderboardEntry:
    record_id: str
    initials: str
    score: int
    date: str
    victory: bool = False


def today_string(now: Optional[datetime] = None) -> str:
    """YYYY-MM-DD of `now` (default: current time) in Pacific time."""
    if now is None:
        now = datetime.now(LEADERBOARD_TZ)
    elif now.tzinfo is None:
        raise ValueError("today_string needs a timezone-aware datetime")
    return now.astimezone(LEADERBOARD_TZ).strftime("%Y-%m-%d")


def normalize_initials(name: str) -> str:
    """
    Trim, upper-case and truncate initials to 3 characters.

    Raises:
        ValueError: If nothing is left after trimming
    """
    initials = (name or "").strip().upper()[:MAX_INITIALS]
    if not initials:
        raise ValueError("initials must have 1-3 characters")
    return initials


def _to_entry(record: dict) -> LeaderboardEntry:
    try:
        return LeaderboardEntry(**record)
    except TypeError as e:
        raise LeaderboardError(f"corrupt score record: {e}") from e


# ===========================================================
# Backend
# ===========================================================

class JsonLeaderboardStore:
    """All score records in one JSON file, loaded lazily and rewritten on add."""

    def __init__(self, path: str):
        self.path = path
        self._records = None
        self._lock = threading.Lock()

    def add(self, record: dict) -> str:
        with self._lock:
            record_id = uuid.uuid4().hex
            records = self._load() + [{"record_id": record_id, **record}]
            self._write(records)
            # Cache only what reached disk
            self._records = records
        return record_id

    def top(self, limit: int) -> List[LeaderboardEntry]:
        """Best `limit` records, highest score first; ties keep submission order."""
        with self._lock:
            records = list(self._load())
        try:
            ordered = sorted(records, key=lambda r: r["score"], reverse=True)
        except (KeyError, TypeError) as e:
            raise LeaderboardError(f"corrupt score record: {e}") from e
        return [_to_entry(r) for r in ordered[:limit]]

    def higher_than(self, score: int) -> List[LeaderboardEntry]:
        with self._lock:
            records = list(self._load())
        try:
            return [_to_entry(r) for r in records if r["score"] > score]
        except (KeyError, TypeError) as e:
            raise LeaderboardError(f"corrupt score record: {e}") from e

    def _load(self) -> list:
        if self._records is not None:
            return self._records
        if not os.path.exists(self.path):
            self._records = []
            return self._records
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self._records = list(data["scores"])
        except (json.JSONDecodeError, KeyError, TypeError, IOError, OSError) as e:
            raise LeaderboardError(f"cannot read {self.path}: {e}") from e
        return self._records

    def _write(self, records: list):
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"scores": records}, f, indent=1)
        except (IOError, OSError, TypeError) as e:
            raise LeaderboardError(f"cannot write {self.path}: {e}") from e


# ===========================================================
# Service
# ===========================================================

class LeaderboardService:
    """Submit/query/rank over a backend, with every failure isolated."""

    def __init__(self, store, clock: Callable[[], datetime] = None):
        """
        Args:
            store: Backend with add/top/higher_than
            clock: Returns the current aware datetime (for tests)
        """
        self.store = store
        self.clock = clock or (lambda: datetime.now(LEADERBOARD_TZ))

    def _today(self) -> str:
        return today_string(self.clock())

    def submit(self, initials: str, score: int, victory: bool = False) -> Optional[str]:
        """
        Store a score.

        Returns:
            The new record id, or None on failure
        """
        try:
            record = {
                "initials": normalize_initials(initials),
                "score": int(score),
                "date": self._today(),
                "victory": bool(victory),
            }
            record_id = self.store.add(record)
        except (LeaderboardError, ValueError) as e:
            DebugLogger.warn(f"Score submit failed: {e}", category="leaderboard")
            return None

        DebugLogger.action(f"Submitted {record['initials']} {record['score']}", category="leaderboard")
        return record_id

    def query(self, scope: str = SCOPE_TODAY, limit: int = 10) -> List[LeaderboardEntry]:
        """
        Best scores for a scope, highest first.

        Only the top QUERY_WINDOW scores overall are considered, then filtered
        by scope, then cut to `limit`.

        Returns:
            Entries, or [] on failure
        """
        try:
            self._check_scope(scope)
            entries = self.store.top(QUERY_WINDOW)
            if scope == SCOPE_TODAY:
                today = self._today()
                entries = [e for e in entries if e.date == today]
        except (LeaderboardError, ValueError) as e:
            DebugLogger.warn(f"Leaderboard query failed: {e}", category="leaderboard")
            return []
        return entries[:limit]

    def rank(self, score: int, scope: str = SCOPE_TODAY) -> Optional[int]:
        """
        1-based rank a score would take: strictly higher scores + 1.

        Returns:
            Rank, or None on failure
        """
        try:
            self._check_scope(scope)
            higher = self.store.higher_than(score)
            if scope == SCOPE_TODAY:
                today = self._today()
                higher = [e for e in higher if e.date == today]
        except (LeaderboardError, ValueError) as e:
            DebugLogger.warn(f"Rank lookup failed: {e}", category="leaderboard")
            return None
        return len(higher) + 1

    @staticmethod
    def _check_scope(scope: str):
        if scope not in SCOPES:
            raise ValueError(f"unknown scope '{scope}'")


# ===========================================================
# Fire-and-forget Client
# ===========================================================

@dataclass(frozen=True)
class LeaderboardResult:
    """A finished request: which call, its tag, and what it returned."""
    operation: str
    tag: str
    value: object


class LeaderboardClient:
    """
    Runs LeaderboardService calls off the game loop.

    Usage:
        client.submit("ABC", 420, tag="final")
        client.query("today", 5, tag="board")
        ...
        for result in client.poll():   # once per frame
            ui.show(result)
    """

    def __init__(self, service: LeaderboardService):
        self.service = service
        self._requests = queue.Queue()
        self._results = queue.Queue()
        self._worker = threading.Thread(target=self._run, name="leaderboard", daemon=True)
        self._worker.start()
        DebugLogger.init_entry("LeaderboardClient")

    # ===========================================================
    # Requests (never block)
    # ===========================================================

    def submit(self, initials: str, score: int, victory: bool = False, tag: str = ""):
        self._requests.put(("submit", tag, (initials, score, victory)))

    def query(self, scope: str = SCOPE_TODAY, limit: int = 10, tag: str = ""):
        self._requests.put(("query", tag, (scope, limit)))

    def rank(self, score: int, scope: str = SCOPE_TODAY, tag: str = ""):
        self._requests.put(("rank", tag, (score, scope)))

    def poll(self) -> List[LeaderboardResult]:
        """Drain every result finished since the last poll."""
        results = []
        while True:
            try:
                results.append(self._results.get_nowait())
            except queue.Empty:
                return results

    def close(self, timeout: float = 1.0):
        """Stop the worker after pending requests finish."""
        self._requests.put(None)
        self._worker.join(timeout)

    def wait_idle(self):
        """Block until every queued request has been processed."""
        self._requests.join()

    # ===========================================================
    # Worker Thread
    # ===========================================================

    def _run(self):
        while True:
            request = self._requests.get()
            try:
                if request is None:
                    return
                operation, tag, args = request
                value = self._call(operation, args)
                self._results.put(LeaderboardResult(operation, tag, value))
            finally:
                self._requests.task_done()

    def _call(self, operation, args):
        fallback = [] if operation == "query" else None
        try:
            return getattr(self.service, operation)(*args)
        except Exception as e:
            DebugLogger.warn(f"Leaderboard {operation} crashed: {e}", category="leaderboard")
            return fallback
