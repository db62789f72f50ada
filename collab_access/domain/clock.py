from datetime import UTC, datetime
from typing import Optional


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, matching the stored columns"""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)
