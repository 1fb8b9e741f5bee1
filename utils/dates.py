from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    # Stored timestamps are naive UTC (SQLite drops tzinfo anyway)
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_left(deadline: Optional[datetime], now: Optional[datetime] = None) -> Optional[int]:
    """Whole days until the deadline, rounded up. None when there is no deadline."""
    if deadline is None:
        return None
    now = now or utcnow()
    return math.ceil((deadline - now).total_seconds() / 86400)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat() + "Z"
