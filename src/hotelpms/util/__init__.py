from .ids import new_intent_id, new_local_id, new_uuid
from .log_config import setup_logging
from .time import normalize_dt, now_utc, parse_timestamp, to_timestamp

__all__ = [
    "new_uuid",
    "new_intent_id",
    "new_local_id",
    "now_utc",
    "parse_timestamp",
    "to_timestamp",
    "normalize_dt",
    "setup_logging",
]
