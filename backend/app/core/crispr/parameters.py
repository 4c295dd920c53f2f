# File: backend/app/core/crispr/parameters.py
# Version: v0.1.0
"""
Pydantic model for scan parameters.

Usage:
    from backend.app.core.crispr.parameters import ScanParameters
"""

from __future__ import annotations

from pydantic import BaseModel, Field, conint, field_validator

from .constants import DEFAULT_MOTIF, DEFAULT_STEP
from .errors import InvalidPatternError
from .motif import compile_motif


class ScanParameters(BaseModel):
    motifPattern: str = Field(DEFAULT_MOTIF, description="PAM pattern over A/C/G/T/N (N = any base)")
    step: conint(ge=1) = Field(DEFAULT_STEP, description="Window step along the protospacer (nt)")
    includeFactorizations: bool = Field(True, description="Attach per-window factorization records to results")
    workers: conint(ge=0) = Field(1, description="Scoring threads (0 = auto)")

    @field_validator("motifPattern")
    @classmethod
    def _check_pattern(cls, v: str) -> str:
        try:
            return compile_motif(v).pattern
        except InvalidPatternError as e:
            raise ValueError(str(e)) from e
