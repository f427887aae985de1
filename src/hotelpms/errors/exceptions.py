"""Exception hierarchy and remote error mapping for hotelpms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class HotelPmsError(Exception):
    """
    Base exception for hotelpms.

    Attributes:
        details: Optional structured information (e.g., PostgREST code, hint).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class LocalValidationError(HotelPmsError):
    """Raised when a LocalCollection invariant would be violated."""


class ConfigurationError(HotelPmsError):
    """Raised when settings are missing or invalid."""


class AuthenticationMissingError(HotelPmsError):
    """Raised when a create/delete is attempted without an acting user."""


class RemoteOperationFailedError(HotelPmsError):
    """Base for every failure of a remote record-store call."""


class AuthError(RemoteOperationFailedError):
    """Raised when the Supabase session is missing or expired (HTTP 401)."""


class PermissionDeniedError(RemoteOperationFailedError):
    """Raised when row-level security or grants reject the request (HTTP 403)."""


class InvalidArgumentError(RemoteOperationFailedError):
    """Raised when the request payload is rejected (HTTP 400, constraint errors)."""


class NotFoundError(RemoteOperationFailedError):
    """Raised when a remote row or table does not exist (HTTP 404)."""


class ConflictError(RemoteOperationFailedError):
    """Raised on unique/foreign-key conflicts (HTTP 409)."""


class RateLimitError(RemoteOperationFailedError):
    """Raised when rate-limited (HTTP 429)."""


class NetworkError(RemoteOperationFailedError):
    """Raised when network/timeout issues prevent the request."""


class RecordValidationError(RemoteOperationFailedError):
    """Raised when a remote response does not have the expected shape."""


class ApiError(RemoteOperationFailedError):
    """Raised for unclassified API errors (5xx, unknown codes, etc.)."""


@dataclass(frozen=True)
class ApiErrorInfo:
    """Lightweight PostgREST error information for mapping to hotelpms exceptions."""

    code: str | None = None
    message: str | None = None
    hint: str | None = None
    details: str | None = None
    status_code: int | None = None


_AUTH_CODES: frozenset[str] = frozenset({"PGRST301", "PGRST302", "28000", "28P01"})
_PERMISSION_CODES: frozenset[str] = frozenset({"42501"})
_NOT_FOUND_CODES: frozenset[str] = frozenset({"PGRST116", "PGRST205", "42P01"})
_CONFLICT_CODES: frozenset[str] = frozenset({"23505", "23503", "PGRST409"})
_INVALID_CODES: frozenset[str] = frozenset(
    {"22P02", "23502", "23514", "PGRST100", "PGRST102", "PGRST204"}
)


def map_api_error(
    info: ApiErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> RemoteOperationFailedError:
    """
    Map a PostgREST/HTTP error to a hotelpms exception.

    The PostgREST/Postgres code wins when it is known; otherwise the HTTP
    status decides:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionDeniedError
        - 404 -> NotFoundError
        - 409 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "code": info.code,
        "status_code": info.status_code,
    }
    if info.hint:
        details["hint"] = info.hint
    if info.details:
        details["details"] = info.details

    message = info.message or _default_message(info)
    code = info.code or ""

    if code in _AUTH_CODES:
        return AuthError(message, details=details, cause=cause)
    if code in _PERMISSION_CODES:
        return PermissionDeniedError(message, details=details, cause=cause)
    if code in _NOT_FOUND_CODES:
        return NotFoundError(message, details=details, cause=cause)
    if code in _CONFLICT_CODES:
        return ConflictError(message, details=details, cause=cause)
    if code in _INVALID_CODES:
        return InvalidArgumentError(message, details=details, cause=cause)

    status = info.status_code
    if status == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if status == 401:
        return AuthError(message, details=details, cause=cause)
    if status == 403:
        return PermissionDeniedError(message, details=details, cause=cause)
    if status == 404:
        return NotFoundError(message, details=details, cause=cause)
    if status == 409:
        return ConflictError(message, details=details, cause=cause)
    if status == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)


def _default_message(info: ApiErrorInfo) -> str:
    if info.status_code:
        return f"Request failed with HTTP {info.status_code}"
    if info.code:
        return f"Request failed ({info.code})"
    return "Request failed"
