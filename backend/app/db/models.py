# File: backend/app/db/models.py
# Version: v0.1.0
"""
ORM models for LambdaGuide.

Tables:
- ScanRun:       one scan (FASTA or candidate table) with its parameters.
- ScanCandidate: one scored candidate of a run, in export shape, with the
                 per-window factorization records as JSON.

JSON columns use the cross-dialect SQLAlchemy JSON type (SQLite in dev).
"""
from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from backend.app.db.base import Base


class RunStatus(str, PyEnum):
    COMPLETED = "completed"
    EMPTY = "empty"          # valid input, no candidates found


class ScanRun(Base):
    __tablename__ = "scan_runs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    mode: Mapped[str] = mapped_column(String(16), nullable=False, default="fasta")  # fasta | table (score-table)
    motif_pattern: Mapped[str] = mapped_column(String(32), nullable=False)
    step: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    sequence_len: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    source_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    candidate_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parameters_json: Mapped[dict] = mapped_column(JSON, nullable=False)
    summary_json: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    status: Mapped[RunStatus] = mapped_column(Enum(RunStatus), default=RunStatus.COMPLETED, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    candidates: Mapped[List["ScanCandidate"]] = relationship(
        back_populates="run",
        cascade="all, delete-orphan",
        order_by="ScanCandidate.rank",
    )


class ScanCandidate(Base):
    __tablename__ = "scan_candidates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    run_id: Mapped[str] = mapped_column(ForeignKey("scan_runs.id", ondelete="CASCADE"), nullable=False, index=True)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)  # order within the run

    source: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    sequence_location: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    protospacer: Mapped[str] = mapped_column(Text, nullable=False)
    pam: Mapped[str] = mapped_column(String(32), nullable=False)
    lambda_score: Mapped[float] = mapped_column(Float, nullable=False)
    factorizations_json: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)

    run: Mapped[ScanRun] = relationship(back_populates="candidates")

    def to_export_row(self, include_factorizations: bool = False) -> dict:
        row = {
            "protospacer": self.protospacer,
            "PAM": self.pam,
            "sequence_location": self.sequence_location,
            "source": self.source,
            "lambda_score": self.lambda_score,
        }
        if include_factorizations:
            row["factorization_details"] = list(self.factorizations_json or [])
        return row
