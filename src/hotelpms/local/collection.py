"""LocalCollection: ordered in-memory entity list keyed by id (no external I/O)."""

from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, Protocol, TypeVar

from .validators import validate_has_id, validate_not_present, validate_unique_ids


class Identifiable(Protocol):
    @property
    def id(self) -> str: ...


E = TypeVar("E", bound=Identifiable)


class LocalCollection(Generic[E]):
    """
    Local, in-memory list of entities in display order.

    Invariants:
        - At most one entry per id.
        - Order is insertion order; replacing an entry keeps its position.

    Lookups by id are served from an index; positions are resolved by scanning
    the ordered list, which stays small (one hotel's rooms).
    """

    def __init__(self, entities: Optional[Iterable[E]] = None) -> None:
        self._items: list[E] = []
        self._by_id: dict[str, E] = {}
        if entities is not None:
            self.reset(entities)

    # ----------------------------
    # Read APIs
    # ----------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items))

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def to_list(self) -> list[E]:
        return list(self._items)

    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def get(self, entity_id: str) -> Optional[E]:
        return self._by_id.get(entity_id)

    def index_of(self, entity_id: str) -> Optional[int]:
        if entity_id not in self._by_id:
            return None
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        return None

    # ----------------------------
    # Mutation APIs (keep index consistent)
    # ----------------------------
    def reset(self, entities: Iterable[E]) -> None:
        """Replace the whole content (e.g., after a remote load)."""
        items = list(entities)
        validate_unique_ids(items)
        self._items = items
        self._by_id = {item.id: item for item in items}

    def append(self, entity: E) -> None:
        validate_has_id(entity)
        validate_not_present(self._by_id, entity.id)
        self._items.append(entity)
        self._by_id[entity.id] = entity

    def insert(self, index: int, entity: E) -> int:
        """
        Insert entity at index if it is within bounds, otherwise append.

        Returns:
            The position the entity ended up at.
        """
        validate_has_id(entity)
        validate_not_present(self._by_id, entity.id)
        if 0 <= index <= len(self._items):
            self._items.insert(index, entity)
        else:
            self._items.append(entity)
            index = len(self._items) - 1
        self._by_id[entity.id] = entity
        return index

    def replace(self, entity_id: str, entity: E) -> bool:
        """
        Replace the entry for entity_id in place.

        The replacement may carry a different id (placeholder -> server row).
        Returns False (and changes nothing) if entity_id is not present.
        """
        index = self.index_of(entity_id)
        if index is None:
            return False
        validate_has_id(entity)
        if entity.id != entity_id:
            validate_not_present(self._by_id, entity.id)
            del self._by_id[entity_id]

        self._items[index] = entity
        self._by_id[entity.id] = entity
        return True

    def remove(self, entity_id: str) -> Optional[tuple[int, E]]:
        """Remove the entry; returns (former index, entity) or None if absent."""
        index = self.index_of(entity_id)
        if index is None:
            return None
        entity = self._items.pop(index)
        del self._by_id[entity_id]
        return index, entity

    def clear(self) -> None:
        self._items.clear()
        self._by_id.clear()
