"""Public auth exports for hotelpms."""

from __future__ import annotations

from .session import Session
from .settings import SupabaseSettings
from .supabase_client import create_supabase_client

__all__ = ["Session", "SupabaseSettings", "create_supabase_client"]
