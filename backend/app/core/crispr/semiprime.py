# File: backend/app/core/crispr/semiprime.py
# Version: v0.1.0
"""
Semiprime decomposition by trial division.

Window integers never exceed 4095, so plain trial division is exact and cheap
(at most ~64 divisions per window).
"""

from __future__ import annotations

from typing import Tuple

from .errors import NotASemiprimeError
from .models import Outcome


def is_prime(n: int) -> bool:
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def semiprime_factors(n: int) -> Tuple[int, int]:
    """
    Return (p, q) with p <= q, both prime and p * q == n.

    Squares of primes count (4 -> (2, 2)). Raises NotASemiprimeError for
    n <= 1, primes, and integers with three or more prime factors.
    """
    if n <= 1:
        raise NotASemiprimeError(n)
    i = 2
    while i * i <= n:
        if n % i == 0:
            q = n // i
            if is_prime(i) and is_prime(q):
                return i, q
        i += 1
    raise NotASemiprimeError(n)


def decompose(n: int) -> Outcome[Tuple[int, int]]:
    try:
        return Outcome.success(semiprime_factors(n))
    except NotASemiprimeError as e:
        return Outcome.failure(e)
