# File: backend/app/core/dna/fasta.py
# Version: v0.1.0
"""
FASTA input for candidate discovery.

- Parses uploaded text or files with Biopython's SeqIO.
- Keeps the full header (record description) as the source identifier.
- Accepts headerless text as a single raw sequence named "sequence".
- Sequences are only uppercased and de-whitespaced here; alphabet checks
  happen in the scanner so the error can name the offending position.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from Bio import SeqIO

from backend.app.core.crispr.errors import CrisprError
from backend.app.core.crispr.motif import normalize_sequence

DEFAULT_SOURCE_ID = "sequence"


class FastaFormatError(CrisprError):
    """Input could not be read as FASTA or holds no sequences."""


@dataclass(frozen=True)
class FastaRecord:
    source_id: str
    sequence: str


class FastaParser:
    """Utility class to parse FASTA text and files."""

    @staticmethod
    def parse_text(text: str) -> List[FastaRecord]:
        body = (text or "").strip()
        if not body:
            raise FastaFormatError("FASTA input is empty or contains no sequences.")

        if not body.startswith(">"):
            return [FastaRecord(DEFAULT_SOURCE_ID, normalize_sequence(body))]

        records: List[FastaRecord] = []
        for rec in SeqIO.parse(io.StringIO(body), "fasta"):
            source = (rec.description or rec.id or DEFAULT_SOURCE_ID).strip()
            records.append(FastaRecord(source, normalize_sequence(str(rec.seq))))
        if not records:
            raise FastaFormatError("FASTA input is empty or contains no sequences.")
        return records

    @staticmethod
    def parse_file(path: Union[str, Path]) -> List[FastaRecord]:
        p = Path(path)
        return FastaParser.parse_text(p.read_text(encoding="utf-8"))


def read_fasta(source: Union[str, Path]) -> List[FastaRecord]:
    """Parse a `Path` from disk, or a `str` holding FASTA (or raw sequence) text."""
    if isinstance(source, Path):
        return FastaParser.parse_file(source)
    return FastaParser.parse_text(source)
