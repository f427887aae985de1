"""hotelpms public API."""

from __future__ import annotations

from hotelpms.auth import Session, SupabaseSettings, create_supabase_client
from hotelpms.errors import (
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
from hotelpms.history import HistoryLogger, RoomHistoryService
from hotelpms.local import LocalCollection
from hotelpms.models import (
    AuditEventType,
    CleaningPriority,
    CleaningStatus,
    MutationResult,
    OccupancyStatus,
    Room,
    RoomFlag,
    RoomHistoryEntry,
    RoomRange,
)
from hotelpms.mutation import (
    CoordinatorSettings,
    FeedbackState,
    OptimisticMutationCoordinator,
    UndoAffordance,
)
from hotelpms.room_store import RoomStore
from hotelpms.store import (
    CreateAuditRequest,
    CreateRoomRequest,
    RecordStore,
    RetryPolicy,
    RoomPatch,
    SupabaseRoomStore,
)
from hotelpms.util import setup_logging

__all__ = [
    # High-level
    "RoomStore",
    "OptimisticMutationCoordinator",
    "LocalCollection",
    "FeedbackState",
    "UndoAffordance",
    "CoordinatorSettings",
    # Backend
    "RecordStore",
    "SupabaseRoomStore",
    "RoomHistoryService",
    "HistoryLogger",
    "RetryPolicy",
    "RoomPatch",
    "CreateRoomRequest",
    "CreateAuditRequest",
    # Auth / config
    "Session",
    "SupabaseSettings",
    "create_supabase_client",
    "setup_logging",
    # Models
    "Room",
    "RoomRange",
    "OccupancyStatus",
    "CleaningStatus",
    "RoomFlag",
    "CleaningPriority",
    "RoomHistoryEntry",
    "AuditEventType",
    "MutationResult",
    # Errors
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
