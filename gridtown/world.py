"""Entity storage and the ordering of update stages."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from enum import Enum, auto
from typing import TypeVar

T = TypeVar("T")


class UpdateStage(Enum):
    """Stages of one update, in the order they run.

    UPDATE_VIEW and AI_BEHAVIOR share the first slot and may run in either order.
    """

    UPDATE_VIEW = auto()
    AI_BEHAVIOR = auto()
    USER_INPUT = auto()
    HIGH_LEVEL_SIDE_EFFECTS = auto()
    SOFT_DESTROY = auto()
    SPAWNING = auto()
    AFTER_SPAWNING = auto()
    ANALYZE = auto()
    UPDATE_PATHING = auto()
    DESTROY_ENTITIES = auto()
    VISUALIZE = auto()


class World:
    """Holds the components of the city, one per entity, keyed by integer ids."""

    def __init__(self) -> None:
        self._components: dict[int, object] = {}
        self._ids = itertools.count()

    def spawn(self, component: object) -> int:
        """Add ``component`` as a new entity and return its id."""
        entity = next(self._ids)
        self._components[entity] = component
        return entity

    def despawn(self, entity: int) -> object | None:
        """Remove ``entity``; returns its component, or None if it was not present."""
        return self._components.pop(entity, None)

    def get(self, entity: int, kind: type[T]) -> T | None:
        """The component of ``entity`` if it is a ``kind``, else None."""
        component = self._components.get(entity)
        return component if isinstance(component, kind) else None

    def contains(self, entity: int, kind: type) -> bool:
        return isinstance(self._components.get(entity), kind)

    def of_type(self, kind: type[T]) -> Iterator[tuple[int, T]]:
        """Pairs of entity and component for every component of ``kind``, oldest first."""
        for entity, component in list(self._components.items()):
            if isinstance(component, kind):
                yield entity, component

    def count(self, kind: type) -> int:
        return sum(1 for _ in self.of_type(kind))

    def __contains__(self, entity: object) -> bool:
        return entity in self._components

    def __len__(self) -> int:
        return len(self._components)