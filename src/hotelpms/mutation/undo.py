"""Single-shot, auto-expiring undo handle."""

from __future__ import annotations

import asyncio
from typing import Callable, Optional


class UndoAffordance:
    """
    A time-limited action reversing a locally-applied mutation.

    The action runs at most once. After window_sec, or after expire() is
    called, invoke() does nothing.
    """

    def __init__(
        self,
        message: str,
        action: Callable[[], None],
        *,
        window_sec: float,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.message = message
        self._action = action
        self._used = False
        self._expired = False

        use_loop = loop if loop is not None else asyncio.get_running_loop()
        self._deadline = use_loop.time() + window_sec
        self._loop = use_loop
        self._handle: Optional[asyncio.TimerHandle] = use_loop.call_later(
            window_sec, self.expire
        )

    @property
    def is_active(self) -> bool:
        if self._used or self._expired:
            return False
        # The timer may not have fired yet if the loop was busy.
        return self._loop.time() < self._deadline

    @property
    def used(self) -> bool:
        return self._used

    def invoke(self) -> bool:
        """Run the undo action. Returns False if it was used or expired."""
        if not self.is_active:
            return False
        self._used = True
        self._cancel_timer()
        self._action()
        return True

    def expire(self) -> None:
        self._expired = True
        self._cancel_timer()

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
