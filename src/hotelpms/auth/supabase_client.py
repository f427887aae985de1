"""Async Supabase client construction."""

from __future__ import annotations

import logging
from typing import Any

from hotelpms.errors import ConfigurationError

from .settings import SupabaseSettings

logger = logging.getLogger(__name__)


async def create_supabase_client(settings: SupabaseSettings) -> Any:
    """
    Build an async Supabase client.

    Returns:
        supabase.AsyncClient

    Raises:
        ConfigurationError: if the client cannot be created from the settings.
    """
    from supabase import acreate_client

    try:
        client = await acreate_client(settings.url, settings.key)
    except Exception as exc:
        raise ConfigurationError(
            "Failed to create Supabase client",
            details={"url": settings.url},
            cause=exc,
        ) from exc

    logger.info("Supabase client created for %s", settings.url)
    return client
