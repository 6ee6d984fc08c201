from __future__ import annotations

import time
from datetime import UTC, datetime

# Anything above this is milliseconds (1e12 s is the year 33658)
_MS_THRESHOLD = 1_000_000_000_000


def to_seconds(value: object, now: float | None = None) -> float:
    """
    Creation instant in unix seconds.

    Numbers above the threshold are milliseconds. Naive datetimes are UTC,
    as the document store returns them. Unparseable values fall back to now.
    """
    fallback = time.time() if now is None else now
    match value:
        case bool() | None:
            return fallback
        case int() | float():
            return value / 1000 if value > _MS_THRESHOLD else float(value)
        case datetime():
            aware = value if value.tzinfo else value.replace(tzinfo=UTC)
            return aware.timestamp()
        case str():
            try:
                parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                return fallback
            return to_seconds(parsed, fallback)
        case _:
            return fallback


__all__ = ("to_seconds",)
