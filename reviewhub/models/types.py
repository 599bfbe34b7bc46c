"""
Custom column types
Reference: https://docs.sqlalchemy.org/en/20/core/custom_types.html#augmenting-existing-types
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert to UTC, treating a naive datetime as UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime stored and returned in UTC

    SQLite keeps no offset, so values read back naive; they are tagged as UTC
    on the way out. Naive values written in are taken to be UTC already.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return as_utc(value)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return as_utc(value)
