"""
event_manager.py
----------------
Publish/subscribe bus between the simulation and its adapters.

The world dispatches frozen event records (kills, near misses, level ups,
deaths); audio, persistence and the leaderboard subscribe without the core
knowing they exist. Each GameWorld owns its own EventManager instance.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Type

from dino_deputy.core.debug.debug_logger import DebugLogger
from dino_deputy.entities.entity_types import EntityKind


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class GameStartedEvent(BaseEvent):
    """Dispatched when a fresh session begins."""
    preset: str


@dataclass(frozen=True)
class JumpEvent(BaseEvent):
    """Dispatched on every jump impulse (1 = ground jump, 2 = double jump)."""
    jump_number: int


@dataclass(frozen=True)
class ShotFiredEvent(BaseEvent):
    """Dispatched when the player fires a bullet."""
    position: tuple


@dataclass(frozen=True)
class EnemyFiredEvent(BaseEvent):
    """Dispatched when a bandit fires at the player."""
    position: tuple


@dataclass(frozen=True)
class EnemyKilledEvent(BaseEvent):
    """Dispatched when a bandit or flying thief is shot or stomped."""
    kind: EntityKind
    position: tuple
    combo: int
    points: int
    stomped: bool = False


@dataclass(frozen=True)
class NearMissEvent(BaseEvent):
    """Dispatched when a cactus or enemy bullet is narrowly avoided."""
    kind: EntityKind
    entity_id: int
    points: int


@dataclass(frozen=True)
class LevelUpEvent(BaseEvent):
    """Dispatched when the level rises below the cap."""
    level: int


@dataclass(frozen=True)
class PlayerDiedEvent(BaseEvent):
    """Dispatched on the frame of a fatal collision."""
    cause: EntityKind
    score: int


@dataclass(frozen=True)
class GameOverEvent(BaseEvent):
    """Dispatched when the session formally ends."""
    score: int
    level: int


@dataclass(frozen=True)
class VictoryEvent(BaseEvent):
    """Dispatched once when the win score is reached outside free play."""
    score: int


@dataclass(frozen=True)
class HighScoreEvent(BaseEvent):
    """Dispatched whenever the live score pushes the high score up."""
    high_score: int


@dataclass(frozen=True)
class PauseToggledEvent(BaseEvent):
    paused: bool


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Central event dispatcher using pub-sub pattern."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.init_entry("EventManager")

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Register a callback for an event type.

        Args:
            event_type: Event class to listen for
            callback: Function to call when event fires
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback in callbacks:
            return

        callbacks.append(callback)
        callback_name = getattr(callback, '__name__', repr(callback))
        DebugLogger.system(
            f"Subscribed '{callback_name}' to '{event_type.__name__}'",
            category="event_manager"
        )

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> None:
        """
        Send event to all registered callbacks.

        A failing callback is logged and skipped; the remaining callbacks
        still receive the event.

        Args:
            event: Event instance to dispatch
        """
        callbacks = self._subscribers.get(type(event))
        if not callbacks:
            return

        for callback in list(callbacks):
            try:
                callback(event)
            except Exception as e:
                callback_name = getattr(callback, '__name__', repr(callback))
                DebugLogger.warn(f"Error in event callback {callback_name}: {e}")

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """
        Get count of subscribers.

        Args:
            event_type: Specific event type, or None for total

        Returns:
            Number of subscribers
        """
        if event_type:
            return len(self._subscribers.get(event_type, []))
        return sum(len(subs) for subs in self._subscribers.values())
