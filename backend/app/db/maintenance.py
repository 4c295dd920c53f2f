# File: backend/app/db/maintenance.py
# Version: v0.1.0
"""
SQLite schema maintenance helpers (dev-only, non-destructive).

- ensure_schema_sqlite(engine): creates only tables that are missing.
- Imports `backend.app.db.models` so every ORM model is registered on
  Base.metadata before inspection.

Usage:
  Set env var SCHEMA_AUTOHEAL=true and keep the DB backend on sqlite.
  Use Alembic migrations for anything else.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

import backend.app.db.models  # noqa: F401
from backend.app.db.base import Base

logger = logging.getLogger(__name__)


def ensure_schema_sqlite(engine: Engine) -> List[str]:
    """
    Create any missing tables declared on Base.metadata.

    Returns a list of human-readable action strings (e.g., "created table scan_runs").
    """
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())
    actions: List[str] = []
    # sorted_tables: parents before children (FK order)
    for table in Base.metadata.sorted_tables:
        name = table.name
        if name in existing:
            continue
        table.create(bind=engine, checkfirst=True)
        actions.append(f"created table {name}")
        logger.info("schema-autoheal: created table %s", name)

    if not actions:
        actions.append("all tables present")
    return actions
