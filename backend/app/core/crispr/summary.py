# File: backend/app/core/crispr/summary.py
# Version: v0.1.0
"""
Aggregate view of a scored batch: basic stats, the landscape peak and a
fixed-bin histogram of lambda scores.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .constants import HISTOGRAM_BINS, SCORE_DECIMALS
from .models import ScoredCandidate


@dataclass
class HistogramBin:
    start: float
    end: float
    count: int


@dataclass
class ScanSummary:
    count: int = 0
    scored: int = 0                    # candidates with at least one semiprime window
    min_score: Optional[float] = None
    max_score: Optional[float] = None
    mean_score: Optional[float] = None
    best_protospacer: Optional[str] = None
    best_location: Optional[int] = None
    best_source: Optional[str] = None
    histogram: List[HistogramBin] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def histogram(scores: Sequence[float], bins: int = HISTOGRAM_BINS) -> List[HistogramBin]:
    """Equal-width bins over [min, max]; the max value falls in the last bin."""
    if not scores:
        return []
    lo = min(scores)
    hi = max(scores)
    width = (hi - lo) / bins or 1.0
    counts = [0] * bins
    for s in scores:
        idx = min(bins - 1, int(math.floor((s - lo) / width)))
        counts[idx] += 1
    return [
        HistogramBin(round(lo + i * width, 6), round(lo + (i + 1) * width, 6), c)
        for i, c in enumerate(counts)
        if c
    ]


def summarize(scored: Sequence[ScoredCandidate], bins: int = HISTOGRAM_BINS) -> ScanSummary:
    out = ScanSummary(count=len(scored))
    if not scored:
        return out
    scores = [c.lambda_score(SCORE_DECIMALS) for c in scored]
    out.scored = sum(1 for c in scored if c.factorization_records)
    out.min_score = min(scores)
    out.max_score = max(scores)
    out.mean_score = round(sum(scores) / len(scores), SCORE_DECIMALS)

    # first candidate wins ties
    best = max(range(len(scored)), key=lambda i: (scores[i], -i))
    out.best_protospacer = scored[best].protospacer
    out.best_location = scored[best].position
    out.best_source = scored[best].source_id
    out.histogram = histogram(scores, bins)
    return out
