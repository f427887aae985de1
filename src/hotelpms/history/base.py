"""History logger interface used by the mutation layer."""

from __future__ import annotations

from typing import Optional, Protocol

from hotelpms.models import AuditEventType


class HistoryLogger(Protocol):
    """Anything that can append an audit record for an entity."""

    async def record(
        self,
        event_type: AuditEventType,
        entity_id: str,
        actor_id: str,
        *,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None,
        note: Optional[str] = None,
    ) -> None: ...
