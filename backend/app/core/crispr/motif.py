# File: backend/app/core/crispr/motif.py
# Version: v0.1.0
"""
Motif (PAM) scanner.

The pattern is compiled into a fixed-length comparator: each position is
either a literal base or the wildcard `N`. Every offset of the sequence is
tested, so overlapping matches are all reported. A match yields a candidate
only when a full 20 nt protospacer fits upstream of it.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Tuple

from .constants import BASES, MOTIF_ALPHABET, PROTOSPACER_LENGTH, WILDCARD
from .errors import InvalidInputError, InvalidPatternError
from .models import CandidateSite

logger = logging.getLogger(__name__)


class MotifMatcher:
    """Fixed-length matcher; `None` slots accept any base."""

    def __init__(self, pattern: str):
        if not isinstance(pattern, str) or not pattern.strip():
            raise InvalidPatternError(str(pattern), "pattern is empty")
        p = pattern.strip().upper()
        for i, c in enumerate(p):
            if c not in MOTIF_ALPHABET:
                raise InvalidPatternError(pattern, f"symbol '{c}' at position {i} is not one of {MOTIF_ALPHABET}")
        self.pattern = p
        self._slots: Tuple[Optional[str], ...] = tuple(None if c == WILDCARD else c for c in p)

    @property
    def length(self) -> int:
        return len(self._slots)

    def matches(self, text: str) -> bool:
        """True when `text` has the pattern's length and fits every slot."""
        if len(text) != len(self._slots):
            return False
        for slot, c in zip(self._slots, text.upper()):
            if slot is None:
                if c not in BASES:
                    return False
            elif c != slot:
                return False
        return True

    def matches_at(self, sequence: str, offset: int) -> bool:
        return self.matches(sequence[offset : offset + len(self._slots)])

    def __repr__(self) -> str:
        return f"MotifMatcher({self.pattern!r})"


def compile_motif(pattern: str) -> MotifMatcher:
    return MotifMatcher(pattern)


def normalize_sequence(sequence: str) -> str:
    """Uppercase and drop whitespace (line breaks from FASTA bodies etc.)."""
    return "".join(sequence.split()).upper()


def validate_sequence(sequence: str, source_id: Optional[str] = None) -> None:
    """Raise InvalidInputError at the first symbol outside A/C/G/T."""
    for i, c in enumerate(sequence):
        if c not in BASES:
            raise InvalidInputError(c, i, source_id)


def _iter_candidates(seq: str, matcher: MotifMatcher, source_id: str) -> Iterator[CandidateSite]:
    k = matcher.length
    for pos in range(PROTOSPACER_LENGTH, len(seq) - k + 1):
        if matcher.matches_at(seq, pos):
            yield CandidateSite(
                protospacer=seq[pos - PROTOSPACER_LENGTH : pos],
                motif=seq[pos : pos + k],
                position=pos - PROTOSPACER_LENGTH,
                source_id=source_id,
            )


def discover_candidates(sequence: str, motif_pattern: str, source_id: str = "sequence") -> Iterator[CandidateSite]:
    """
    Return a lazy iterator of candidate sites, in sequence order.

    The pattern and the whole sequence are validated before the iterator is
    returned, so an invalid input fails here and not on first `next()`.
    Matches starting before offset 20 are skipped (no room for a protospacer).
    Input is case-insensitive; callers strip layout whitespace beforehand
    (see `normalize_sequence`).
    """
    matcher = compile_motif(motif_pattern)
    seq = sequence.upper()
    validate_sequence(seq, source_id)
    logger.debug("Scanning %s (%d nt) for %s", source_id, len(seq), matcher.pattern)
    return _iter_candidates(seq, matcher, source_id)
