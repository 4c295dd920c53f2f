# File: backend/app/db/session.py
# Version: v0.1.0
"""
Engine and session factory for the scan-run store.

`settings.DB_URL` selects the database (a SQLite file under backend/app/data
by default; tests point it at a temp file). Routers obtain a session through
`get_db()`; a `/scan` or `/score-table` call writes one `scan_runs` row plus
its `scan_candidates` in a single commit.
"""
from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from backend.app.core.config import settings


def _prepare_sqlite_dir(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).resolve().parent.mkdir(parents=True, exist_ok=True)


_prepare_sqlite_dir(settings.DB_URL)

engine = create_engine(settings.DB_URL)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, closed afterwards."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
