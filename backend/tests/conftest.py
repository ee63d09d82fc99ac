from __future__ import annotations

"""
Shared pytest configuration.

Puts the backend directory on sys.path so that `import permission_store`
works without an editable install, and provides in-memory database fixtures.
"""

import sys
from pathlib import Path

# This MUST be done before importing project modules.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

import pytest
from sqlalchemy.orm import Session, sessionmaker

from permission_store.services.permission_service import PermissionStore
from tests.utils import create_inmemory_session_factory, create_test_user


@pytest.fixture()
def session_factory():
    SessionLocal, engine = create_inmemory_session_factory()
    yield SessionLocal
    engine.dispose()


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]):
    with session_factory() as session:
        yield session


@pytest.fixture()
def store(db_session: Session) -> PermissionStore:
    return PermissionStore(db_session)


@pytest.fixture()
def make_user(db_session: Session):
    def _make(username: str):
        return create_test_user(db_session, username)

    return _make
