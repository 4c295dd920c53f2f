# File: backend/app/core/crispr/codon.py
# Version: v0.1.0
"""
Codon encoder.

A codon (3 nt over A/C/G/T) maps bijectively onto [0, 63] with positional
base-4 weights 16/4/1 and A=0, C=1, G=2, T=3. The lookup tables are built
once at import and exposed read-only.
"""

from __future__ import annotations

from itertools import product
from types import MappingProxyType
from typing import Mapping

from .constants import BASES, BASE_VALUES, CODON_LENGTH, CODON_SPACE
from .errors import InvalidCodonError
from .models import Outcome


def _weight(codon: str) -> int:
    value = 0
    for base in codon:
        value = value * 4 + BASE_VALUES[base]
    return value


CODON_TO_INT: Mapping[str, int] = MappingProxyType(
    {"".join(c): _weight("".join(c)) for c in product(BASES, repeat=CODON_LENGTH)}
)
INT_TO_CODON: Mapping[int, str] = MappingProxyType({v: k for k, v in CODON_TO_INT.items()})


def codon_to_int(codon: str) -> int:
    """Return the integer code of `codon` (case-insensitive)."""
    if not isinstance(codon, str):
        raise InvalidCodonError(codon)
    key = codon.upper()
    try:
        return CODON_TO_INT[key]
    except KeyError:
        raise InvalidCodonError(key) from None


def encode_codon(codon: str) -> Outcome[int]:
    """Same as `codon_to_int` but reports failure as a value."""
    try:
        return Outcome.success(codon_to_int(codon))
    except InvalidCodonError as e:
        return Outcome.failure(e)


def int_to_codon(value: int) -> str:
    try:
        return INT_TO_CODON[value]
    except KeyError:
        raise InvalidCodonError(value) from None


def window_integer(first: int, second: int) -> int:
    """Combine two codon codes into one integer in [0, 4095]."""
    return first * CODON_SPACE + second
