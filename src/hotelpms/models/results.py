"""Result models for optimistic mutations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


MutationKind = Literal["update", "insert", "delete"]
MutationStatus = Literal["confirmed", "reverted", "skipped"]


@dataclass(slots=True)
class MutationResult:
    """Outcome of a single optimistic mutation once its remote call settled."""

    intent_id: str
    kind: MutationKind
    entity_id: str
    status: MutationStatus

    error_type: Optional[str] = None
    error_message: Optional[str] = None

    result_entity_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "confirmed"
