from __future__ import annotations

import re
from datetime import datetime, timezone

# PostgREST trims trailing zeros from fractional seconds ("...:56.12+00:00").
_FRACTION = re.compile(r"\.(\d+)")


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse a Postgres timestamptz as returned by PostgREST into a UTC datetime.

    Handles the 'Z' suffix, a space instead of 'T', and 1-9 fractional
    digits (anything past microseconds is truncated). Naive values are
    rejected.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError("timestamp value must be a non-empty string")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)

    parsed = normalize_dt(datetime.fromisoformat(text))
    return parsed.astimezone(timezone.utc)


def to_timestamp(dt: datetime) -> str:
    """UTC ISO-8601 with microseconds and a 'Z' suffix, as sent in patches."""
    utc = normalize_dt(dt).astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def normalize_dt(dt: datetime) -> datetime:
    """Return dt unchanged if it is tz-aware; raise otherwise."""
    if not isinstance(dt, datetime):
        raise TypeError("dt must be a datetime")
    if dt.tzinfo is None:
        raise ValueError("naive datetime is not allowed; timezone-aware required")
    return dt
