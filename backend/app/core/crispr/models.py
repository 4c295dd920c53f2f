# File: backend/app/core/crispr/models.py
# Version: v0.1.0
"""
Value objects shared by the scanner, the scorer and the export layer.

All records are frozen: a CandidateSite lives for one scan, a ScoredCandidate
for one scoring pass, and neither keeps a reference to the source sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar

from .errors import CrisprError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Tagged success/failure result for expected, recoverable failures."""
    value: Optional[T] = None
    error: Optional[CrisprError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: CrisprError) -> "Outcome[T]":
        return cls(error=error)


@dataclass(frozen=True)
class CandidateSite:
    protospacer: str         # 20 nt immediately upstream of the motif
    motif: str               # literal bases matched by the motif pattern
    position: int            # 0-based start of the protospacer in the source
    source_id: str

    @property
    def combined_sequence(self) -> str:
        return self.protospacer + self.motif


@dataclass(frozen=True)
class FactorizationRecord:
    offset: int
    window_integer: int
    p: int
    q: int
    lambda_value: float

    @property
    def additive_complexity(self) -> float:
        return (self.p + self.q) / 2.0

    @property
    def multiplicative_resistance(self) -> int:
        return self.p * self.q

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offset": self.offset,
            "window_integer": self.window_integer,
            "p": self.p,
            "q": self.q,
            "additive_complexity": self.additive_complexity,
            "multiplicative_resistance": self.multiplicative_resistance,
            "lambda_value": self.lambda_value,
        }


@dataclass(frozen=True)
class ScoredCandidate:
    protospacer: str
    motif: str
    total_score: float
    factorization_records: Tuple[FactorizationRecord, ...] = field(default_factory=tuple)
    position: Optional[int] = None
    source_id: Optional[str] = None

    def lambda_score(self, decimals: int = 4) -> float:
        return round(self.total_score, decimals)
