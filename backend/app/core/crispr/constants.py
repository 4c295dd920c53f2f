# File: backend/app/core/crispr/constants.py
# Version: v0.1.0
"""
Constants for candidate-site discovery and lambda scoring.

Protospacer geometry follows the SpCas9 convention: a 20 nt upstream region
immediately 5' of the PAM. Windows are two adjacent codons (6 nt).
"""

from __future__ import annotations

BASES = "ACGT"
WILDCARD = "N"
MOTIF_ALPHABET = BASES + WILDCARD

# Positional base-4 weights: A=0, C=1, G=2, T=3
BASE_VALUES = {"A": 0, "C": 1, "G": 2, "T": 3}

PROTOSPACER_LENGTH = 20
CODON_LENGTH = 3
WINDOW_CODONS = 2
WINDOW_LENGTH = CODON_LENGTH * WINDOW_CODONS

# 4 ** CODON_LENGTH
CODON_SPACE = 64

DEFAULT_MOTIF = "NGG"
DEFAULT_STEP = 1

# Rounding applied to the exported lambda_score
SCORE_DECIMALS = 4

HISTOGRAM_BINS = 20
