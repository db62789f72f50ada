"""
Cursor helpers shared by the audit log repositories.

Cursor format: base64-encoded ISO timestamp of the last row returned.
"""

import base64
from datetime import datetime
from typing import Any, List, Optional, Tuple


def encode_cursor(timestamp: datetime) -> str:
    return base64.b64encode(timestamp.isoformat().encode("utf-8")).decode("utf-8")


def decode_cursor(cursor: str) -> datetime:
    """
    Raises:
        ValueError: cursor is not a base64-encoded ISO timestamp
    """
    try:
        raw = base64.b64decode(cursor.encode("utf-8"), validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError) as exc:
        raise ValueError(f"Malformed cursor: {cursor!r}") from exc
    return datetime.fromisoformat(raw)


def split_page(
    rows: List[Any], limit: int, timestamp_attr: str
) -> Tuple[List[Any], Optional[str]]:
    """Trim a limit+1 fetch to one page and build the next cursor"""
    has_more = len(rows) > limit
    if has_more:
        rows = rows[:limit]

    next_cursor = None
    if has_more and rows:
        next_cursor = encode_cursor(getattr(rows[-1], timestamp_attr))

    return rows, next_cursor
