# File: backend/app/core/crispr/errors.py
# Version: v0.1.0
"""
Error types for the scanning and scoring core.

- InvalidInputError / InvalidPatternError are fatal for a scan and propagate.
- InvalidCodonError / NotASemiprimeError are local to one window; the scorer
  receives them wrapped in an `Outcome` and never lets them escape.
"""

from __future__ import annotations

from typing import Optional


class CrisprError(ValueError):
    """Base class for all scanning/scoring errors."""


class InvalidInputError(CrisprError):
    def __init__(self, symbol: str, position: int, source_id: Optional[str] = None):
        self.symbol = symbol
        self.position = position
        self.source_id = source_id
        where = f"sequence '{source_id}'" if source_id else "sequence"
        super().__init__(
            f"{where} contains an invalid DNA character ('{symbol}' at position {position}). "
            "Only A, C, G, T are supported for candidate discovery and scoring."
        )


class InvalidPatternError(CrisprError):
    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid motif pattern {pattern!r}: {reason}")


class InvalidCodonError(CrisprError):
    def __init__(self, codon: object):
        self.codon = codon
        super().__init__(
            f"Invalid codon: {codon!r}. Codon must be 3 bases long and contain only A, C, G, T."
        )


class NotASemiprimeError(CrisprError):
    def __init__(self, n: int):
        self.n = n
        super().__init__(f"Number {n} is not a semiprime (product of exactly two primes).")
