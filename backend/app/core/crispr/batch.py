# File: backend/app/core/crispr/batch.py
# Version: v0.1.0
"""
Batch scoring of candidate sites.

Candidates are independent, so a batch can be split across a thread pool.
Results always come back in input order. The pattern is compiled once per
batch.
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .constants import DEFAULT_MOTIF, DEFAULT_STEP
from .models import CandidateSite, ScoredCandidate
from .motif import MotifMatcher, compile_motif
from .scorer import score_with_matcher


@dataclass(slots=True)
class BatchOptions:
    """Controls parallelism and chunking."""
    workers: int = 1           # 0 → auto = min(32, os.cpu_count() or 1)
    chunk_size: int = 256


def _auto_workers(workers: int | None) -> int:
    if workers and workers > 0:
        return workers
    return max(1, min(32, os.cpu_count() or 1))


def _chunks(seq: Sequence, n: int) -> Iterable[Sequence]:
    if n <= 0:
        n = len(seq) or 1
    for i in range(0, len(seq), n):
        yield seq[i : i + n]


def _eval_chunk(chunk: Sequence[CandidateSite], matcher: MotifMatcher, step: int) -> List[ScoredCandidate]:
    return [score_with_matcher(s.combined_sequence, matcher, step, s) for s in chunk]


def score_sites(
    sites: Iterable[CandidateSite],
    motif_pattern: str = DEFAULT_MOTIF,
    step: int = DEFAULT_STEP,
    *,
    options: BatchOptions | None = None,
) -> List[ScoredCandidate]:
    """Score every site; output order matches input order."""
    opts = options or BatchOptions()
    matcher = compile_motif(motif_pattern)
    if step < 1:
        raise ValueError(f"step must be >= 1 (got {step})")
    items = list(sites)

    workers = _auto_workers(opts.workers)
    if workers == 1 or len(items) <= opts.chunk_size:
        return _eval_chunk(items, matcher, step)

    results: List[ScoredCandidate] = []
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(_eval_chunk, chunk, matcher, step) for chunk in _chunks(items, opts.chunk_size)]
        for f in futures:
            results.extend(f.result())
    return results
