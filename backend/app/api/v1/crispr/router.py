# File: backend/app/api/v1/crispr/router.py
# Version: v0.1.0
"""
CRISPR candidate scan endpoints (mounted under /api/v1/crispr):
- GET  /parameters          ← current scan parameters
- PUT  /parameters          ← validates & persists new parameters
- POST /discover            ← candidate sites only
- POST /score               ← score one protospacer + PAM
- POST /scan                ← FASTA → scored candidates (+ persisted run)
- POST /score-table         ← CSV candidate table → scored rows (+ persisted run)
- GET  /runs
- GET  /runs/{run_id}
- GET  /runs/{run_id}/export.csv
- DELETE /runs/{run_id}
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from backend.app.config.config_scan import ensure_current_exists, load_current_params, save_current_params
from backend.app.core.crispr.errors import CrisprError
from backend.app.core.crispr.motif import discover_candidates, normalize_sequence
from backend.app.core.crispr.parameters import ScanParameters
from backend.app.core.crispr.pipeline import scan_records, score_table, to_export_row
from backend.app.core.crispr.schemas import (
    CandidateSiteOut,
    DiscoverRequest,
    DiscoverResponse,
    ScanRequest,
    ScanResponse,
    ScanRunList,
    ScanRunRecord,
    ScoreRequest,
    ScoreResponse,
    ScoreTableRequest,
    ScoreTableResponse,
)
from backend.app.core.crispr.scorer import score_candidate
from backend.app.core.crispr.summary import summarize
from backend.app.core.dna.fasta import FastaParser
from backend.app.core.export.csv_exporter import read_candidate_table, scores_to_csv
from backend.app.db.models import ScanRun
from backend.app.services import scan_store

from .deps import db_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/crispr", tags=["crispr"])


def _bad_request(e: Exception) -> HTTPException:
    logger.info("Rejected input: %s", e)
    return HTTPException(status_code=400, detail=str(e))


def _run_record(run: ScanRun, with_candidates: bool = False) -> ScanRunRecord:
    return ScanRunRecord(
        id=run.id,
        createdAt=run.created_at.isoformat() if run.created_at else "",
        mode=run.mode,
        motifPattern=run.motif_pattern,
        step=run.step,
        status=run.status.value,
        candidateCount=run.candidate_count,
        sourceCount=run.source_count,
        sequenceLength=run.sequence_len,
        note=run.note,
        summary=run.summary_json,
        candidates=scan_store.export_rows(run, include_factorizations=True) if with_candidates else None,
    )


@router.get("/parameters", response_model=ScanParameters)
def get_parameters():
    """
    Return the current editable scan parameters.
    If not initialized, create scan_param.json from defaults and return it.
    """
    _, params = ensure_current_exists()
    return params


@router.put("/parameters", response_model=ScanParameters)
def update_parameters(payload: ScanParameters):
    save_current_params(payload)
    return payload


@router.post("/discover", response_model=DiscoverResponse)
def discover(payload: DiscoverRequest):
    """List candidate sites (protospacer + PAM) without scoring them."""
    try:
        sites = list(discover_candidates(normalize_sequence(payload.sequence), payload.motifPattern, payload.sourceId))
    except CrisprError as e:
        raise _bad_request(e)
    return DiscoverResponse(
        count=len(sites),
        candidates=[
            CandidateSiteOut(protospacer=s.protospacer, PAM=s.motif, sequence_location=s.position, source=s.source_id)
            for s in sites
        ],
    )


@router.post("/score", response_model=ScoreResponse)
def score(payload: ScoreRequest):
    """Score one `protospacer + PAM` string."""
    try:
        res = score_candidate(normalize_sequence(payload.combinedSequence), payload.motifPattern, payload.step)
    except CrisprError as e:
        raise _bad_request(e)
    return ScoreResponse(
        totalScore=res.total_score,
        lambdaScore=res.lambda_score(),
        factorizationRecords=[r.to_dict() for r in res.factorization_records],
    )


@router.post("/scan", response_model=ScanResponse)
def scan(payload: ScanRequest, db: Session = Depends(db_session)):
    """
    Discover and score every candidate in the FASTA payload.
    If `parameters` is omitted, the stored parameters are used.
    """
    params = payload.parameters or load_current_params()
    try:
        records = FastaParser.parse_text(payload.fasta)
        scored = scan_records(records, params)
    except CrisprError as e:
        raise _bad_request(e)

    summary = summarize(scored).to_dict()
    sources = [r.source_id for r in records]
    run_id: Optional[str] = None
    if payload.persist:
        run = scan_store.record_scan(
            db,
            scored=scored,
            params=params,
            summary=summary,
            mode="fasta",
            sequence_len=sum(len(r.sequence) for r in records),
            source_count=len(records),
            note=payload.note,
        )
        run_id = run.id

    message = None
    if not scored:
        message = f"No gRNA candidates found with PAM '{params.motifPattern}' in the provided FASTA sequence."

    return ScanResponse(
        runId=run_id,
        motifPattern=params.motifPattern,
        step=params.step,
        sources=sources,
        count=len(scored),
        summary=summary,
        candidates=[to_export_row(c, params.includeFactorizations) for c in scored],
        message=message,
    )


@router.post("/score-table", response_model=ScoreTableResponse)
def score_table_endpoint(payload: ScoreTableRequest, db: Session = Depends(db_session)):
    """Score a CSV candidate table; returns scored rows and a CSV rendition (persisted as a `table` run)."""
    params = payload.parameters or load_current_params()
    rows = read_candidate_table(payload.csv)
    if not rows:
        raise HTTPException(status_code=400, detail="CSV file is empty or contains no data rows.")
    try:
        scored = score_table(rows, params)
    except CrisprError as e:
        raise _bad_request(e)

    run_id: Optional[str] = None
    if payload.persist:
        run_id = scan_store.record_table(db, rows=scored, params=params, note=payload.note).id
    return ScoreTableResponse(runId=run_id, count=len(scored), rows=scored, csv=scores_to_csv(scored))


@router.get("/runs", response_model=ScanRunList)
def list_runs(
    response: Response,
    db: Session = Depends(db_session),
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    q: Optional[str] = Query(None, description="Filter by note or motif substring"),
):
    total, items = scan_store.list_scans(db, q=q, limit=limit, offset=offset)
    response.headers["Cache-Control"] = "no-store"
    return ScanRunList(total=total, items=[_run_record(r) for r in items])


@router.get("/runs/{run_id}", response_model=ScanRunRecord)
def get_run(run_id: str, db: Session = Depends(db_session)):
    run = scan_store.get_scan(db, run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Run not found.")
    return _run_record(run, with_candidates=True)


@router.get("/runs/{run_id}/export.csv")
def export_run_csv(run_id: str, db: Session = Depends(db_session)):
    run = scan_store.get_scan(db, run_id)
    if not run:
        raise HTTPException(status_code=404, detail="Run not found.")
    body = scores_to_csv(scan_store.export_rows(run))
    return Response(
        content=body,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="fasta_lambda_scores.csv"'},
    )


@router.delete("/runs/{run_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_run(run_id: str, db: Session = Depends(db_session)):
    if not scan_store.delete_scan(db, run_id):
        raise HTTPException(status_code=404, detail="Run not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
