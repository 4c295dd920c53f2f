# File: backend/app/core/crispr/fingerprint.py
# Version: v0.1.0
"""
Lambda fingerprint of a factor pair.

    lambda = (p - q)^2 / (N * ln(a)),   N = p * q,  a = (p + q) / 2

Symmetric in p and q. Degenerate inputs (N == 0 or a <= 1) score 0.0.
"""

from __future__ import annotations

import math


def fingerprint(p: int, q: int) -> float:
    a = (p + q) / 2.0
    m = p * q
    if m == 0 or a <= 1:
        return 0.0
    delta = p - q
    return (delta * delta) / (m * math.log(a))
