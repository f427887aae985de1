"""Acting-user context."""

from __future__ import annotations

import logging
from typing import Any, Optional

from hotelpms.errors import AuthenticationMissingError

logger = logging.getLogger(__name__)


class Session:
    """
    Holds the id of the signed-in user.

    Signing in is handled elsewhere; this only carries the result so that
    writes can be attributed.
    """

    def __init__(self, user_id: Optional[str] = None) -> None:
        self._user_id = user_id or None

    @property
    def current_user_id(self) -> Optional[str]:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._user_id is not None

    def set_current_user(self, user_id: Optional[str]) -> None:
        self._user_id = user_id or None

    def clear(self) -> None:
        self._user_id = None

    def require_user(self) -> str:
        if self._user_id is None:
            raise AuthenticationMissingError("User not authenticated")
        return self._user_id

    async def sync_from_client(self, client: Any) -> Optional[str]:
        """Take the user id from the Supabase client's current auth session."""
        auth_session = await client.auth.get_session()
        user = getattr(auth_session, "user", None) if auth_session is not None else None
        self.set_current_user(getattr(user, "id", None))
        logger.debug("Session user: %s", self._user_id)
        return self._user_id
