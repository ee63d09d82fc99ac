from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from permission_store.logging_config import logger
from permission_store.settings import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless enabled per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()


def create_db_engine(database_url: str | None = None, **kwargs: Any) -> Engine:
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
    kwargs.setdefault("echo", settings.database_echo)

    engine = create_engine(url, future=True, **kwargs)
    enable_sqlite_foreign_keys(engine)
    logger.debug("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


engine = create_db_engine()
SessionLocal: sessionmaker[Session] = create_session_factory(engine)


__all__ = [
    "SessionLocal",
    "create_db_engine",
    "create_session_factory",
    "enable_sqlite_foreign_keys",
    "engine",
]
