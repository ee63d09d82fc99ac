from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC timestamps on every dialect.

    PostgreSQL stores `timestamptz` natively. SQLite has no timezone support,
    so values are stored as naive UTC and get `tzinfo=UTC` back on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if not isinstance(value, dt.datetime):
            return value
        if value.tzinfo is not None:
            value = value.astimezone(dt.UTC)
        if dialect.name == "postgresql":
            return value if value.tzinfo is not None else value.replace(tzinfo=dt.UTC)
        return value.replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if not isinstance(value, dt.datetime):
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


__all__ = ["UTCDateTime", "utcnow"]
