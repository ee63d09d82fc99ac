from __future__ import annotations

import pathlib
import sys

import sqlalchemy as sa
from sqlalchemy import engine_from_config, pool

from alembic import context

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from permission_store.db import enable_sqlite_foreign_keys  # noqa: E402
from permission_store.models import Base  # noqa: E402
from permission_store.settings import settings  # noqa: E402

target_metadata = Base.metadata


def _database_url() -> str:
    """
    The URL from settings (DATABASE_URL / .env) wins over alembic.ini so that
    migrations and the application always target the same database.
    """
    context.config.set_main_option("sqlalchemy.url", settings.database_url)
    return settings.database_url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""

    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        version_column_type=sa.String(length=128),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""

    _database_url()
    cfg = context.config
    connectable = engine_from_config(
        cfg.get_section(cfg.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    enable_sqlite_foreign_keys(connectable)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
            version_column_type=sa.String(length=128),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
