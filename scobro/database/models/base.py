"""
Base Classes and Column Types
------------------------------

Foundational ORM pieces for the logbook database.

Classes:
    - Base: Declarative base for all SQLAlchemy models
    - UTCDateTime: DateTime column that always round-trips as aware UTC

Helpers:
    - utc_now: Current instant, timezone-aware (UTC)
    - new_id: Fresh opaque identifier (UUID4 string)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# --- Third party ---
from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

DEFAULT_COLOR = "#6c757d"


_clock_lock = threading.Lock()
_last_now: Optional[datetime] = None


def utc_now() -> datetime:
    """
    Return the current instant as an aware UTC datetime.

    Values are strictly increasing within the process, so rows created
    back to back (items of one entry) keep a stable creation order even
    when the system clock does not advance between calls.
    """
    global _last_now
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if _last_now is not None and now <= _last_now:
            now = _last_now + timedelta(microseconds=1)
        _last_now = now
        return now


def new_id() -> str:
    """Generate a fresh opaque identifier."""
    return str(uuid.uuid4())


class UTCDateTime(TypeDecorator):
    """
    DateTime column type that stores UTC and returns aware datetimes.

    SQLite has no native timezone support: values are normalized to UTC
    before binding and tagged with timezone.utc when read back.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("UTCDateTime requires timezone-aware datetimes")
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


# --- Base ORM class ---
class Base(DeclarativeBase):
    """
    Base class for all ORM models.

    Serves as the declarative base and provides access to the metadata
    object used for idempotent table creation.
    """

    pass
