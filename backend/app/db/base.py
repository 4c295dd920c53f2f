# File: backend/app/db/base.py
# Version: v0.1.0
"""
Declarative Base for LambdaGuide.

Model modules import Base from here:

    from backend.app.db.base import Base

Model modules are NOT imported here to avoid circular imports; alembic/env.py
and db/maintenance.py import backend.app.db.models for registration.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
