# File: backend/app/services/scan_store.py
# Version: v0.1.0
"""
Scan persistence helpers (service layer).

These functions encapsulate the DB logic so callers (routers, CLI) don't
need to import SQLAlchemy session management details.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from backend.app.core.crispr.constants import SCORE_DECIMALS
from backend.app.core.crispr.models import ScoredCandidate
from backend.app.core.crispr.parameters import ScanParameters
from backend.app.db.models import RunStatus, ScanCandidate, ScanRun


def record_scan(
    db: Session,
    *,
    scored: Sequence[ScoredCandidate],
    params: ScanParameters,
    summary: Optional[Mapping[str, Any]] = None,
    mode: str = "fasta",
    sequence_len: Optional[int] = None,
    source_count: int = 0,
    note: Optional[str] = None,
) -> ScanRun:
    """Persist a finished scan and its candidates in one transaction."""
    run = ScanRun(
        mode=mode,
        motif_pattern=params.motifPattern,
        step=params.step,
        sequence_len=sequence_len,
        source_count=source_count,
        candidate_count=len(scored),
        parameters_json=params.model_dump(),
        summary_json=dict(summary) if summary is not None else None,
        status=RunStatus.COMPLETED if scored else RunStatus.EMPTY,
        note=note,
    )
    for rank, c in enumerate(scored):
        run.candidates.append(
            ScanCandidate(
                rank=rank,
                source=c.source_id,
                sequence_location=c.position,
                protospacer=c.protospacer,
                pam=c.motif,
                lambda_score=c.lambda_score(SCORE_DECIMALS),
                factorizations_json=[r.to_dict() for r in c.factorization_records]
                if params.includeFactorizations else None,
            )
        )
    db.add(run)
    db.commit()
    db.refresh(run)
    return run


def record_table(
    db: Session,
    *,
    rows: Sequence[Mapping[str, Any]],
    params: ScanParameters,
    note: Optional[str] = None,
) -> ScanRun:
    """Persist a scored candidate table (rows from `score_table`) as a `table` run."""
    run = ScanRun(
        mode="table",
        motif_pattern=params.motifPattern,
        step=params.step,
        source_count=0,
        candidate_count=len(rows),
        parameters_json=params.model_dump(),
        status=RunStatus.COMPLETED if rows else RunStatus.EMPTY,
        note=note,
    )
    for rank, row in enumerate(rows):
        source = row.get("source") or row.get("id")
        run.candidates.append(
            ScanCandidate(
                rank=rank,
                source=str(source) if source else None,
                protospacer=str(row.get("protospacer") or ""),
                pam=str(row.get("PAM") or ""),
                lambda_score=float(row.get("lambda_score") or 0.0),
                factorizations_json=row.get("factorization_details"),
            )
        )
    db.add(run)
    db.commit()
    db.refresh(run)
    return run


def list_scans(db: Session, *, q: Optional[str] = None, limit: int = 50, offset: int = 0) -> tuple[int, list[ScanRun]]:
    """Return (total, items) filtered by optional free-text q against note or motif."""
    stmt = select(ScanRun).order_by(ScanRun.created_at.desc(), ScanRun.id.desc()).limit(limit).offset(offset)
    count_stmt = select(func.count()).select_from(ScanRun)
    if q:
        like = f"%{q}%"
        predicate = ScanRun.note.ilike(like) | ScanRun.motif_pattern.ilike(like)
        stmt = stmt.where(predicate)
        count_stmt = count_stmt.where(predicate)
    total = db.execute(count_stmt).scalar_one()
    items = list(db.execute(stmt).scalars())
    return total, items


def get_scan(db: Session, run_id: str) -> ScanRun | None:
    return db.get(ScanRun, run_id)


def delete_scan(db: Session, run_id: str) -> bool:
    db.execute(delete(ScanCandidate).where(ScanCandidate.run_id == run_id))
    res = db.execute(delete(ScanRun).where(ScanRun.id == run_id))
    db.commit()
    return res.rowcount > 0


def export_rows(run: ScanRun, include_factorizations: bool = False) -> list[Dict[str, Any]]:
    return [c.to_export_row(include_factorizations) for c in run.candidates]
