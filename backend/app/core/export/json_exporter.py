# File: backend/app/core/export/json_exporter.py
# Version: v0.1.0

"""
Export scored candidates to a JSON file, including per-window factorization
records and the batch summary.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from backend.app.core.crispr.models import ScoredCandidate
from backend.app.core.crispr.pipeline import to_export_row
from backend.app.core.crispr.summary import summarize


def build_scores_payload(scored: Sequence[ScoredCandidate],
                         *,
                         motif_pattern: str,
                         step: int,
                         include_factorizations: bool = True,
                         sources: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    return {
        "motif_pattern": motif_pattern,
        "step": step,
        "sources": list(sources or sorted({c.source_id for c in scored if c.source_id})),
        "summary": summarize(scored).to_dict(),
        "candidates": [to_export_row(c, include_factorizations) for c in scored],
    }


def export_scores_json(scored: Sequence[ScoredCandidate],
                       json_path: Path,
                       *,
                       motif_pattern: str,
                       step: int,
                       include_factorizations: bool = True) -> Dict[str, Any]:
    """
    Write the scores payload to `json_path` and return it.
    """
    payload = build_scores_payload(scored, motif_pattern=motif_pattern, step=step,
                                   include_factorizations=include_factorizations)
    json_path.parent.mkdir(parents=True, exist_ok=True)
    json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return payload
