"""Strict validation helpers for LocalCollection."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from hotelpms.errors import LocalValidationError


def validate_has_id(entity: Any) -> None:
    entity_id = getattr(entity, "id", None)
    if not isinstance(entity_id, str) or not entity_id.strip():
        raise LocalValidationError(f"Entity must have a non-empty string id: {entity!r}")


def validate_not_present(index: Mapping[str, Any], entity_id: str) -> None:
    if entity_id in index:
        raise LocalValidationError(f"Entity already present: {entity_id}")


def validate_unique_ids(entities: Iterable[Any]) -> None:
    seen: set[str] = set()
    for entity in entities:
        validate_has_id(entity)
        if entity.id in seen:
            raise LocalValidationError(f"Duplicate entity id: {entity.id}")
        seen.add(entity.id)
