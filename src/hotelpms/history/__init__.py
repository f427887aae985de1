"""Public history exports for hotelpms."""

from __future__ import annotations

from .base import HistoryLogger
from .service import RoomHistoryService

__all__ = ["HistoryLogger", "RoomHistoryService"]
