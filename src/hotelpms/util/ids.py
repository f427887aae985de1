from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_intent_id() -> str:
    """Generate a new MutationIntent ID."""
    return new_uuid()


def new_local_id() -> str:
    """Generate a placeholder id for entities the server has not assigned one yet."""
    return new_uuid()

