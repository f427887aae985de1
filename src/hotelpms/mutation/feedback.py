"""User-visible feedback state: error alert and transient toast."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


class FeedbackState:
    """
    Error channel plus success toast, read by whatever renders the board.

    An error stays until clear_error(); a toast hides itself after
    toast_duration_sec.
    """

    def __init__(self, *, toast_duration_sec: float = 2.0) -> None:
        self.toast_duration_sec = toast_duration_sec

        self.error_message: Optional[str] = None
        self.showing_error = False

        self.toast_message: Optional[str] = None
        self.showing_toast = False
        self._toast_handle: Optional[asyncio.TimerHandle] = None

    def report_error(self, message: str) -> None:
        logger.debug("Error surfaced: %s", message)
        self.error_message = message
        self.showing_error = True

    def clear_error(self) -> None:
        self.error_message = None
        self.showing_error = False

    def show_toast(self, message: str) -> None:
        self._cancel_toast_timer()
        self.toast_message = message
        self.showing_toast = True
        loop = asyncio.get_running_loop()
        self._toast_handle = loop.call_later(self.toast_duration_sec, self.hide_toast)

    def hide_toast(self) -> None:
        self._cancel_toast_timer()
        self.showing_toast = False

    def _cancel_toast_timer(self) -> None:
        if self._toast_handle is not None:
            self._toast_handle.cancel()
            self._toast_handle = None
