# File: backend/alembic/env.py
# Version: v0.1.0
"""
Alembic environment for the LambdaGuide scan-run store.

The target database is the one the app uses (`settings.DB_URL`, i.e. the
`DB_URL` env var or .env); `DATABASE_URL` overrides it for one-off
migrations. The tracked schema is `scan_runs` / `scan_candidates` from
backend.app.db.models. SQLite migrations run in batch mode so column
changes work on the dev database.

Usage:
    alembic -c backend/alembic.ini upgrade head
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

import backend.app.db.models  # noqa: F401  (registers the scan tables)
from backend.app.core.config import settings
from backend.app.db.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

config.set_main_option("sqlalchemy.url", os.getenv("DATABASE_URL") or settings.DB_URL)
target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    """Emit SQL for the scan tables without a live connection."""
    _configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True,
               dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations against the configured scan-run database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
