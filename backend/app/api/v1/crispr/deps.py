# File: backend/app/api/v1/crispr/deps.py
# Version: v0.1.0
"""
Dependency providers for scan endpoints.
"""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.orm import Session

from backend.app.db.session import get_db


def db_session(db: Session = Depends(get_db)) -> Session:
    """Return an active SQLAlchemy session."""
    return db
