from .session import (
    SessionLocal,
    create_db_engine,
    create_session_factory,
    enable_sqlite_foreign_keys,
    engine,
)
from .types import UTCDateTime, utcnow

__all__ = [
    "SessionLocal",
    "UTCDateTime",
    "create_db_engine",
    "create_session_factory",
    "enable_sqlite_foreign_keys",
    "engine",
    "utcnow",
]
