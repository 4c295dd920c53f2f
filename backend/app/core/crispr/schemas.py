# File: backend/app/core/crispr/schemas.py
# Version: v0.1.0
"""
DTOs for requests and responses used by the CRISPR scan endpoints.

Request fields are camelCase (UI convention). Candidate rows keep the export
shape (`protospacer`, `PAM`, `sequence_location`, `source`, `lambda_score`)
so the UI can feed them straight into its CSV download.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, conint

from .constants import DEFAULT_MOTIF, DEFAULT_STEP
from .parameters import ScanParameters


class FactorizationRecordOut(BaseModel):
    offset: int
    window_integer: int
    p: int
    q: int
    additive_complexity: float
    multiplicative_resistance: int
    lambda_value: float


class CandidateSiteOut(BaseModel):
    protospacer: str
    PAM: str
    sequence_location: int
    source: str


class DiscoverRequest(BaseModel):
    sequence: str = Field(..., description="Raw nucleotide sequence (A/C/G/T, any case).")
    motifPattern: str = Field(DEFAULT_MOTIF, description="PAM pattern, N = any base.")
    sourceId: str = Field("sequence", description="Label carried into each candidate.")


class DiscoverResponse(BaseModel):
    count: int
    candidates: List[CandidateSiteOut]


class ScoreRequest(BaseModel):
    combinedSequence: str = Field(..., description="20 nt protospacer followed by the PAM.")
    motifPattern: str = DEFAULT_MOTIF
    step: conint(ge=1) = DEFAULT_STEP


class ScoreResponse(BaseModel):
    totalScore: float
    lambdaScore: float
    factorizationRecords: List[FactorizationRecordOut]


class ScoredCandidateOut(BaseModel):
    protospacer: str
    PAM: str
    sequence_location: Optional[int] = None
    source: Optional[str] = None
    lambda_score: float
    factorization_details: Optional[List[FactorizationRecordOut]] = None


class ScanRequest(BaseModel):
    fasta: str = Field(..., description="FASTA text (one or more records) or a raw sequence.")
    parameters: Optional[ScanParameters] = None
    note: Optional[str] = Field(None, max_length=255)
    persist: bool = True


class ScanResponse(BaseModel):
    runId: Optional[str] = None
    motifPattern: str
    step: int
    sources: List[str]
    count: int
    summary: Dict[str, Any]
    candidates: List[ScoredCandidateOut]
    message: Optional[str] = None


class ScoreTableRequest(BaseModel):
    csv: str = Field(..., description="CSV text with at least `protospacer` and `PAM` columns.")
    parameters: Optional[ScanParameters] = None
    note: Optional[str] = Field(None, max_length=255)
    persist: bool = True


class ScoreTableResponse(BaseModel):
    runId: Optional[str] = None
    count: int
    rows: List[Dict[str, Any]]
    csv: str


class ScanRunRecord(BaseModel):
    """For GET /runs and GET /runs/{run_id}."""
    id: str
    createdAt: str
    mode: str
    motifPattern: str
    step: int
    status: str
    candidateCount: int
    sourceCount: int
    sequenceLength: Optional[int] = None
    note: Optional[str] = None
    summary: Optional[Dict[str, Any]] = None
    candidates: Optional[List[ScoredCandidateOut]] = None


class ScanRunList(BaseModel):
    total: int
    items: List[ScanRunRecord]
