"""Timestamp helpers shared by the engine and the stores."""

import time
from datetime import UTC, datetime, timedelta

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000


def now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


def iso_to_ms(value: str) -> int:
    """
    Convert an ISO-8601 timestamp to epoch milliseconds.

    Naive timestamps are read as UTC. A trailing "Z" is accepted.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return (parsed - _EPOCH) // timedelta(milliseconds=1)


def ms_to_iso(value: int) -> str:
    """Convert epoch milliseconds to a UTC ISO-8601 string."""
    return (_EPOCH + timedelta(milliseconds=value)).isoformat()
