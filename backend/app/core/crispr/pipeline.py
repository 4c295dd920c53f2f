# File: backend/app/core/crispr/pipeline.py
# Version: v0.1.0
"""
Caller-level drivers around the scanner and scorer.

- scan_sequence: one sequence -> scored candidates
- scan_records:  many FASTA records; any invalid record aborts the whole scan
- score_table:   CSV mode, rows with `protospacer` + `PAM` columns
- to_export_row: ScoredCandidate -> export shape

"No candidates found" is reported here (WARNING), not by the scanner.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from backend.app.core.dna.fasta import FastaRecord

from .batch import BatchOptions, score_sites
from .constants import SCORE_DECIMALS
from .models import CandidateSite, ScoredCandidate
from .motif import compile_motif, discover_candidates
from .parameters import ScanParameters
from .scorer import score_with_matcher

logger = logging.getLogger(__name__)

MISSING_COLUMNS_ERROR = "Missing protospacer or PAM"


def _options(params: ScanParameters) -> BatchOptions:
    return BatchOptions(workers=params.workers)


def scan_sequence(sequence: str, source_id: str, params: Optional[ScanParameters] = None) -> List[ScoredCandidate]:
    p = params or ScanParameters()
    t0 = time.perf_counter()
    sites = list(discover_candidates(sequence, p.motifPattern, source_id))
    scored = score_sites(sites, p.motifPattern, p.step, options=_options(p))
    logger.info(
        "Scanned %s: %d candidates with PAM %s in %.2f ms",
        source_id, len(scored), p.motifPattern, (time.perf_counter() - t0) * 1000.0,
    )
    return scored


def scan_records(records: Sequence[FastaRecord], params: Optional[ScanParameters] = None) -> List[ScoredCandidate]:
    """
    Discover candidates in every record, then score them as one batch.

    Discovery of all records completes before scoring starts, so an invalid
    record raises before any result is produced.
    """
    p = params or ScanParameters()
    sites: List[CandidateSite] = []
    for rec in records:
        sites.extend(discover_candidates(rec.sequence, p.motifPattern, rec.source_id))

    if not sites:
        logger.warning("No candidates found with PAM '%s' in %d sequence(s).", p.motifPattern, len(records))
        return []

    t0 = time.perf_counter()
    scored = score_sites(sites, p.motifPattern, p.step, options=_options(p))
    logger.info("Scored %d candidates in %.2f ms", len(scored), (time.perf_counter() - t0) * 1000.0)
    return scored


def score_table(rows: Iterable[Mapping[str, Any]], params: Optional[ScanParameters] = None) -> List[Dict[str, Any]]:
    """
    Score pre-built candidate rows (e.g. a published guide set).

    Columns are passed through; `lambda_score` is added, plus `error` for rows
    without a protospacer or PAM.
    """
    p = params or ScanParameters()
    matcher = compile_motif(p.motifPattern)
    out: List[Dict[str, Any]] = []
    for row in rows:
        new_row = dict(row)
        protospacer = str(row.get("protospacer") or "").strip()
        pam = str(row.get("PAM") or "").strip()
        if not protospacer or not pam:
            new_row["lambda_score"] = 0.0
            new_row["error"] = MISSING_COLUMNS_ERROR
            out.append(new_row)
            continue
        scored = score_with_matcher(protospacer + pam, matcher, p.step)
        new_row["lambda_score"] = scored.lambda_score(SCORE_DECIMALS)
        if p.includeFactorizations:
            new_row["factorization_details"] = [r.to_dict() for r in scored.factorization_records]
        out.append(new_row)
    logger.info("Scored %d table rows", len(out))
    return out


def to_export_row(scored: ScoredCandidate, include_factorizations: bool = False) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        "protospacer": scored.protospacer,
        "PAM": scored.motif,
        "sequence_location": scored.position,
        "source": scored.source_id,
        "lambda_score": scored.lambda_score(SCORE_DECIMALS),
    }
    if include_factorizations:
        row["factorization_details"] = [r.to_dict() for r in scored.factorization_records]
    return row
