"""
entity_pool.py
--------------
Ordered, growable collection for one entity record type.

Responsibilities
----------------
- Keep spawn order (collision tie-breaks depend on it).
- Advance every member once per frame.
- Cull members back-to-front so removal mid-scan never skips a neighbour.
"""

from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from dino_deputy.core.debug.debug_logger import DebugLogger


T = TypeVar("T")


class EntityPool(Generic[T]):
    """Spawn-ordered list of live entities of a single kind."""

    def __init__(self, name: str):
        self.name = name
        self._entities: List[T] = []

    # ===========================================================
    # Collection Protocol
    # ===========================================================

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[T]:
        return iter(self._entities)

    def __getitem__(self, index: int) -> T:
        return self._entities[index]

    def __bool__(self) -> bool:
        return bool(self._entities)

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def add(self, entity: T) -> T:
        self._entities.append(entity)
        DebugLogger.trace(f"{self.name}: spawned {type(entity).__name__}", category="entity_spawn")
        return entity

    def remove_at(self, index: int) -> T:
        """Remove by index. Callers scanning the pool must scan in reverse."""
        return self._entities.pop(index)

    def clear(self):
        self._entities.clear()

    def update_all(self, *args):
        """Call update(*args) on every member in spawn order."""
        for entity in self._entities:
            entity.update(*args)

    def cull(self, predicate: Callable[[T], bool],
             on_remove: Optional[Callable[[T], None]] = None) -> int:
        """
        Remove every member matching predicate.

        Args:
            predicate: Returns True for members to drop
            on_remove: Optional hook called with each removed member

        Returns:
            Number of members removed
        """
        removed = 0
        for index in range(len(self._entities) - 1, -1, -1):
            entity = self._entities[index]
            if predicate(entity):
                del self._entities[index]
                removed += 1
                if on_remove is not None:
                    on_remove(entity)

        if removed:
            DebugLogger.trace(f"{self.name}: culled {removed}", category="entity_cleanup")
        return removed

    def indices_reversed(self) -> range:
        """Indices from last to first, for scans that remove as they go."""
        return range(len(self._entities) - 1, -1, -1)
