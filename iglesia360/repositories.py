"""
Repository interface and its in-memory implementation.

Services only depend on the ``Repository`` protocol, so a table- or
database-backed implementation can replace ``InMemoryRepository`` without
touching workflow code. Entities are copied on the way in and out: callers
mutate their own copy and persist it with ``replace``.
"""

import copy
from typing import Callable, Generic, Iterable, Optional, Protocol, TypeVar

EntityType = TypeVar("EntityType")


class Repository(Protocol[EntityType]):
    def insert(self, entity: EntityType) -> EntityType: ...

    def get(self, entity_id: int) -> Optional[EntityType]: ...

    def list(
        self, predicate: Optional[Callable[[EntityType], bool]] = None
    ) -> list[EntityType]: ...

    def replace(self, entity: EntityType) -> EntityType: ...

    def delete(self, entity_id: int) -> bool: ...

    def next_id(self) -> int: ...

    def count(self) -> int: ...


class InMemoryRepository(Generic[EntityType]):
    """Insertion-ordered dict keyed by the entity's ``id`` attribute."""

    def __init__(self, entities: Iterable[EntityType] = ()):
        self._rows: dict[int, EntityType] = {}
        # Highest id ever stored; deleted ids are never handed out again
        self._last_id = 0
        for entity in entities:
            self.insert(entity)

    def insert(self, entity: EntityType) -> EntityType:
        entity_id = entity.id
        if entity_id in self._rows:
            raise ValueError(f"Duplicate id {entity_id}")
        self._rows[entity_id] = copy.deepcopy(entity)
        self._last_id = max(self._last_id, entity_id)
        return copy.deepcopy(entity)

    def get(self, entity_id: int) -> Optional[EntityType]:
        row = self._rows.get(entity_id)
        return copy.deepcopy(row) if row is not None else None

    def list(
        self, predicate: Optional[Callable[[EntityType], bool]] = None
    ) -> list[EntityType]:
        return [
            copy.deepcopy(row)
            for row in self._rows.values()
            if predicate is None or predicate(row)
        ]

    def replace(self, entity: EntityType) -> EntityType:
        if entity.id not in self._rows:
            raise KeyError(entity.id)
        self._rows[entity.id] = copy.deepcopy(entity)
        return copy.deepcopy(entity)

    def delete(self, entity_id: int) -> bool:
        return self._rows.pop(entity_id, None) is not None

    def next_id(self) -> int:
        return self._last_id + 1

    def count(self) -> int:
        return len(self._rows)
