"""RecordStore interface: the remote CRUD collaborator."""

from __future__ import annotations

from typing import Protocol, TypeVar

E = TypeVar("E", covariant=True)
P = TypeVar("P", contravariant=True)
C = TypeVar("C", contravariant=True)


class RecordStore(Protocol[E, P, C]):
    """
    Remote CRUD for one entity type.

    Every call either succeeds or raises a RemoteOperationFailedError.
    """

    async def get(self, parent_id: str) -> list[E]: ...

    async def update(self, entity_id: str, patch: P) -> None: ...

    async def create(self, fields: C) -> E: ...

    async def delete(self, entity_id: str) -> None: ...
