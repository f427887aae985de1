"""Query execution with error mapping and read retries."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

import httpx
from postgrest.exceptions import APIError

from hotelpms.errors import (
    ApiError,
    ApiErrorInfo,
    HotelPmsError,
    NetworkError,
    RateLimitError,
    RecordValidationError,
    map_api_error,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 0.5


NO_RETRY = RetryPolicy(max_retries=0)


async def execute(
    query: Callable[[], Awaitable[T]],
    *,
    retry: Optional[RetryPolicy] = None,
) -> T:
    """
    Run `query()` and map any failure to a hotelpms exception.

    Only pass a retry policy for reads; a write that timed out may still have
    been applied.
    """
    policy = retry or NO_RETRY
    delay = policy.initial_delay_sec
    for attempt in range(policy.max_retries + 1):
        try:
            return await query()
        except Exception as exc:
            mapped = map_exception(exc)
            if should_retry(mapped) and attempt < policy.max_retries:
                logger.debug("Retrying after %s (attempt %d)", type(mapped).__name__, attempt + 1)
                await asyncio.sleep(delay)
                delay *= 2
                continue
            if mapped is exc:
                raise
            raise mapped from exc

    raise ApiError("Unexpected retry loop termination")


def should_retry(exc: Exception) -> bool:
    if isinstance(exc, RateLimitError):
        return True
    if isinstance(exc, NetworkError):
        return True
    if isinstance(exc, ApiError):
        status_code = exc.details.get("status_code")
        return isinstance(status_code, int) and 500 <= status_code <= 599
    return False


def map_exception(exc: Exception) -> Exception:
    if isinstance(exc, HotelPmsError):
        return exc

    if isinstance(exc, APIError):
        return map_api_error(_api_error_to_info(exc), cause=exc)

    if isinstance(exc, (httpx.TimeoutException, httpx.TransportError)):
        return NetworkError("Network error", cause=exc)

    if isinstance(exc, (OSError, TimeoutError)):
        return NetworkError("Network error", cause=exc)

    return ApiError("Supabase request failed", cause=exc)


def _api_error_to_info(exc: APIError) -> ApiErrorInfo:
    code = _as_text(getattr(exc, "code", None))
    status_code: Optional[int] = None
    # PostgREST reports plain HTTP failures with the status as the code.
    if code is not None and code.isdigit() and len(code) == 3:
        status_code = int(code)

    return ApiErrorInfo(
        code=code,
        message=_as_text(getattr(exc, "message", None)),
        hint=_as_text(getattr(exc, "hint", None)),
        details=_as_text(getattr(exc, "details", None)),
        status_code=status_code,
    )


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text or None


def response_rows(response: Any) -> list[Any]:
    """The `data` list of a PostgREST response."""
    data = getattr(response, "data", None) if response is not None else None
    if not isinstance(data, list):
        raise RecordValidationError(
            "Unexpected response from Supabase",
            details={"type": type(data).__name__},
        )
    return data
