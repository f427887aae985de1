"""Mutation intent model (explicit fields; no args dict)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

RemoteCall = Callable[[], Awaitable[Any]]
Compensation = Callable[[Any], Awaitable[Any]]


class MutationAction(str, Enum):
    """Supported optimistic mutation shapes."""

    UPDATE = "update"
    INSERT = "insert"
    DELETE = "delete"


@dataclass(slots=True)
class MutationIntent:
    """
    A pending change: what to do locally and which remote call confirms it.

    Notes:
        - transform is used by UPDATE only and must be pure (old -> new).
        - entity is the placeholder for INSERT and the removed row for DELETE.
        - undo_remote_call, when set, is sent after a confirmed INSERT/DELETE
          is undone; it receives the server-side entity.
    """

    intent_id: str
    action: MutationAction
    entity_id: str
    remote_call: RemoteCall
    label: str

    transform: Optional[Callable[[Any], Any]] = None
    entity: Any = None
    undo_remote_call: Optional[Compensation] = None

    def validate_required_fields(self) -> None:
        """Validate required fields according to action. Raises ValueError."""
        _require(self.entity_id, "entity_id")
        if not callable(self.remote_call):
            raise ValueError("remote_call must be callable")

        if self.action is MutationAction.UPDATE:
            if not callable(self.transform):
                raise ValueError("transform must be callable for UPDATE")
            return

        if self.action is MutationAction.INSERT:
            _require(self.entity, "entity")
            return

        if self.action is MutationAction.DELETE:
            return

        raise ValueError(f"Unsupported action: {self.action}")


def _require(value: object, field_name: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {field_name}")
