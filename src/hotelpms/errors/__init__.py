"""Public error exports for hotelpms."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    ApiErrorInfo,
    AuthenticationMissingError,
    AuthError,
    ConfigurationError,
    ConflictError,
    HotelPmsError,
    InvalidArgumentError,
    LocalValidationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    RecordValidationError,
    RemoteOperationFailedError,
    map_api_error,
)

__all__ = [
    "HotelPmsError",
    "LocalValidationError",
    "ConfigurationError",
    "AuthenticationMissingError",
    "RemoteOperationFailedError",
    "AuthError",
    "PermissionDeniedError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "RecordValidationError",
    "ApiError",
    "ApiErrorInfo",
    "map_api_error",
]
