from __future__ import annotations

import uuid
from pathlib import Path

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

from permission_store.db import create_db_engine
from permission_store.models import Base
from permission_store.settings import settings

BACKEND_DIR = Path(__file__).resolve().parents[1]

HEAD = "0001_create_permission_tables"
TABLES = {"users", "permissions", "permission_user"}


@pytest.fixture()
def database_url(tmp_path, monkeypatch) -> str:
    url = f"sqlite+pysqlite:///{tmp_path / 'migrations.db'}"
    monkeypatch.setattr(settings, "database_url", url)
    return url


@pytest.fixture()
def alembic_config() -> Config:
    cfg = Config(str(BACKEND_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    return cfg


@pytest.fixture()
def engine(database_url):
    engine = create_db_engine(database_url, echo=False)
    yield engine
    engine.dispose()


def _versions(engine) -> list[str]:
    with engine.connect() as conn:
        return list(conn.execute(text("SELECT version_num FROM alembic_version")).scalars())


def test_upgrade_creates_tables_and_records_version(alembic_config, engine):
    command.upgrade(alembic_config, "head")

    assert TABLES <= set(inspect(engine).get_table_names())
    assert _versions(engine) == [HEAD]

    # already at head: nothing to do
    command.upgrade(alembic_config, "head")
    assert _versions(engine) == [HEAD]


def test_migrated_schema_matches_models(alembic_config, engine):
    command.upgrade(alembic_config, "head")

    with engine.connect() as conn:
        diffs = compare_metadata(MigrationContext.configure(conn), Base.metadata)

    schema_diffs = [
        diff
        for diff in diffs
        if isinstance(diff, tuple)
        and diff[0] in {"add_index", "remove_index", "add_constraint", "remove_constraint", "add_table", "remove_table"}
    ]
    assert schema_diffs == []

    indexes = {ix["name"]: ix for ix in inspect(engine).get_indexes("permissions")}
    assert indexes["ix_permissions_name"]["unique"]


def test_migrated_foreign_keys_cascade_deletes(alembic_config, engine):
    command.upgrade(alembic_config, "head")
    alice, bob = uuid.uuid4().hex, uuid.uuid4().hex
    edit, read = uuid.uuid4().hex, uuid.uuid4().hex

    with engine.begin() as conn:
        conn.execute(
            text("INSERT INTO users (id, username) VALUES (:id, :name)"),
            [{"id": alice, "name": "alice"}, {"id": bob, "name": "bob"}],
        )
        conn.execute(
            text("INSERT INTO permissions (id, name) VALUES (:id, :name)"),
            [{"id": edit, "name": "edit_posts"}, {"id": read, "name": "read_posts"}],
        )
        conn.execute(
            text("INSERT INTO permission_user (permission_id, user_id) VALUES (:p, :u)"),
            [{"p": edit, "u": alice}, {"p": edit, "u": bob}, {"p": read, "u": bob}],
        )

    with engine.begin() as conn:
        conn.execute(text("DELETE FROM permissions WHERE id = :id"), {"id": edit})
        remaining = conn.execute(text("SELECT permission_id, user_id FROM permission_user")).all()
    assert remaining == [(read, bob)]

    with engine.begin() as conn:
        conn.execute(text("DELETE FROM users WHERE id = :id"), {"id": bob})
        assert conn.execute(text("SELECT COUNT(*) FROM permission_user")).scalar_one() == 0


def test_migrated_foreign_keys_reject_dangling_grants(alembic_config, engine):
    command.upgrade(alembic_config, "head")

    with pytest.raises(IntegrityError) as exc_info:
        with engine.begin() as conn:
            conn.execute(
                text("INSERT INTO permission_user (permission_id, user_id) VALUES (:p, :u)"),
                {"p": uuid.uuid4().hex, "u": uuid.uuid4().hex},
            )
    assert "FOREIGN KEY" in str(exc_info.value)


def test_downgrade_drops_tables(alembic_config, engine):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    assert not TABLES & set(inspect(engine).get_table_names())
    assert _versions(engine) == []
