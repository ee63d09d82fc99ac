from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from permission_store.db import create_db_engine, create_session_factory
from permission_store.models import Base, User


def create_inmemory_session_factory() -> tuple[sessionmaker[Session], Engine]:
    """Fresh in-memory SQLite database with foreign keys enforced."""
    engine = create_db_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    Base.metadata.create_all(bind=engine)
    return create_session_factory(engine), engine


def create_test_user(session: Session, username: str) -> User:
    user = User(username=username, email=f"{username}@example.com", is_active=True)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
