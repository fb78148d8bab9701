"""Clock helpers.

Timestamps are stored as naive UTC datetimes so that they compare the same way
on PostgreSQL and SQLite.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
