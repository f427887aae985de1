"""Timing settings for the optimistic mutation layer."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from hotelpms.errors import ConfigurationError

DEFAULT_UNDO_WINDOW_SEC = 3.0
DEFAULT_TOAST_DURATION_SEC = 2.0


@dataclass(slots=True, frozen=True)
class CoordinatorSettings:
    """
    Timings for undo and toast feedback.

    Environment variables (see from_env):
        - HOTELPMS_UNDO_WINDOW_SEC
        - HOTELPMS_TOAST_SEC
    """

    undo_window_sec: float = DEFAULT_UNDO_WINDOW_SEC
    toast_duration_sec: float = DEFAULT_TOAST_DURATION_SEC

    def __post_init__(self) -> None:
        for name in ("undo_window_sec", "toast_duration_sec"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(
                    f"CoordinatorSettings.{name} must be a positive number",
                    details={name: value},
                )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CoordinatorSettings":
        env = os.environ if environ is None else environ
        return cls(
            undo_window_sec=_float_env(env, "HOTELPMS_UNDO_WINDOW_SEC", DEFAULT_UNDO_WINDOW_SEC),
            toast_duration_sec=_float_env(env, "HOTELPMS_TOAST_SEC", DEFAULT_TOAST_DURATION_SEC),
        )


def _float_env(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a number",
            details={name: raw},
            cause=exc,
        ) from exc
