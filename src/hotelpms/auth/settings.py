"""Connection settings for the Supabase backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from hotelpms.errors import ConfigurationError


@dataclass(slots=True, frozen=True)
class SupabaseSettings:
    """
    Supabase project URL and API key.

    Environment variables (see from_env):
        - SUPABASE_URL
        - SUPABASE_KEY
    """

    url: str
    key: str

    def __post_init__(self) -> None:
        for name in ("url", "key"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"SupabaseSettings.{name} must be a non-empty string")

        if not self.url.startswith(("http://", "https://")):
            raise ConfigurationError(
                "SupabaseSettings.url must be an http(s) URL",
                details={"url": self.url},
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SupabaseSettings":
        env = os.environ if environ is None else environ
        missing = [name for name in ("SUPABASE_URL", "SUPABASE_KEY") if not env.get(name, "").strip()]
        if missing:
            raise ConfigurationError(
                "Missing Supabase environment variables",
                details={"missing": missing},
            )
        return cls(url=env["SUPABASE_URL"].strip(), key=env["SUPABASE_KEY"].strip())

    def __repr__(self) -> str:
        return f"SupabaseSettings(url={self.url!r}, key='***')"
