"""Local state container exports for hotelpms."""

from __future__ import annotations

from .collection import Identifiable, LocalCollection

__all__ = ["Identifiable", "LocalCollection"]
