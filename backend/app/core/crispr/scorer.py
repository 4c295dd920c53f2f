# File: backend/app/core/crispr/scorer.py
# Version: v0.1.0
"""
Window scorer.

For a protospacer + motif sequence:
- re-check the motif portion against the pattern,
- slide a two-codon (6 nt) window over the 20 nt protospacer with `step`,
- encode each window into an integer in [0, 4095],
- decompose it into two primes and add its lambda fingerprint.

Failures are handled at two levels:
- per candidate (short input, motif mismatch) -> total 0.0, no records;
- per window (invalid codon, not a semiprime)  -> window contributes 0.0
  and is left out of the records.
Only a malformed pattern or step raise, since those are batch-wide inputs.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .codon import encode_codon, window_integer
from .constants import CODON_LENGTH, DEFAULT_MOTIF, DEFAULT_STEP, PROTOSPACER_LENGTH, WINDOW_LENGTH
from .fingerprint import fingerprint
from .models import CandidateSite, FactorizationRecord, Outcome, ScoredCandidate
from .motif import MotifMatcher, compile_motif
from .semiprime import decompose

logger = logging.getLogger(__name__)


def score_window(protospacer: str, offset: int) -> Outcome[FactorizationRecord]:
    """Score the two codons starting at `offset`."""
    first = encode_codon(protospacer[offset : offset + CODON_LENGTH])
    if not first.ok:
        return Outcome.failure(first.error)
    second = encode_codon(protospacer[offset + CODON_LENGTH : offset + WINDOW_LENGTH])
    if not second.ok:
        return Outcome.failure(second.error)

    n = window_integer(first.value, second.value)
    factors = decompose(n)
    if not factors.ok:
        return Outcome.failure(factors.error)

    p, q = factors.value
    return Outcome.success(FactorizationRecord(offset, n, p, q, fingerprint(p, q)))


def _empty(protospacer: str, motif: str, site: Optional[CandidateSite]) -> ScoredCandidate:
    return ScoredCandidate(
        protospacer=protospacer,
        motif=motif,
        total_score=0.0,
        factorization_records=(),
        position=site.position if site else None,
        source_id=site.source_id if site else None,
    )


def _score(
    combined_sequence: str,
    matcher: MotifMatcher,
    step: int,
    site: Optional[CandidateSite] = None,
) -> ScoredCandidate:
    if step < 1:
        raise ValueError(f"step must be >= 1 (got {step})")

    seq = (combined_sequence or "").upper()
    protospacer = seq[:PROTOSPACER_LENGTH]
    motif = seq[PROTOSPACER_LENGTH : PROTOSPACER_LENGTH + matcher.length]

    if len(seq) < PROTOSPACER_LENGTH + matcher.length:
        logger.debug("Skipping %r: shorter than %d nt", seq, PROTOSPACER_LENGTH + matcher.length)
        return _empty(protospacer, motif, site)
    if not matcher.matches(motif):
        logger.debug("Skipping %r: motif %r does not match %s", seq, motif, matcher.pattern)
        return _empty(protospacer, motif, site)

    total = 0.0
    records: List[FactorizationRecord] = []
    for offset in range(0, PROTOSPACER_LENGTH - WINDOW_LENGTH + 1, step):
        outcome = score_window(protospacer, offset)
        if not outcome.ok:
            continue
        records.append(outcome.value)
        total += outcome.value.lambda_value

    return ScoredCandidate(
        protospacer=protospacer,
        motif=motif,
        total_score=total,
        factorization_records=tuple(records),
        position=site.position if site else None,
        source_id=site.source_id if site else None,
    )


def score_candidate(combined_sequence: str, motif_pattern: str = DEFAULT_MOTIF, step: int = DEFAULT_STEP) -> ScoredCandidate:
    """Score a raw `protospacer + motif` string."""
    return _score(combined_sequence, compile_motif(motif_pattern), step)


def score_site(site: CandidateSite, motif_pattern: str = DEFAULT_MOTIF, step: int = DEFAULT_STEP) -> ScoredCandidate:
    """Score a discovered site, keeping its position and source."""
    return _score(site.combined_sequence, compile_motif(motif_pattern), step, site)


def score_with_matcher(
    combined_sequence: str,
    matcher: MotifMatcher,
    step: int = DEFAULT_STEP,
    site: Optional[CandidateSite] = None,
) -> ScoredCandidate:
    """Variant for batch callers that compile the pattern once."""
    return _score(combined_sequence, matcher, step, site)
