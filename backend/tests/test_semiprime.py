# File: backend/tests/test_semiprime.py
# Version: v0.1.0
"""
Semiprime decomposer checked exhaustively over the window-integer range.
"""

import pytest

from backend.app.core.crispr.errors import NotASemiprimeError
from backend.app.core.crispr.semiprime import decompose, is_prime, semiprime_factors


def _prime_factor_count(n: int) -> int:
    count, d = 0, 2
    while d * d <= n:
        while n % d == 0:
            n //= d
            count += 1
        d += 1
    return count + (1 if n > 1 else 0)


def _naive_prime(n: int) -> bool:
    return n > 1 and all(n % d for d in range(2, n))


def test_is_prime_matches_naive_below_4096():
    for n in range(-2, 600):
        assert is_prime(n) == _naive_prime(n), n
    for n in (4093, 4091, 4087, 4095):
        assert is_prime(n) == _naive_prime(n), n


def test_decomposition_over_window_range():
    for n in range(2, 4096):
        if _prime_factor_count(n) == 2:
            p, q = semiprime_factors(n)
            assert p <= q
            assert p * q == n
            assert is_prime(p) and is_prime(q)
        else:
            with pytest.raises(NotASemiprimeError):
                semiprime_factors(n)


@pytest.mark.parametrize("n,expected", [(4, (2, 2)), (6, (2, 3)), (9, (3, 3)), (4087, (61, 67)), (94, (2, 47))])
def test_known_semiprimes(n, expected):
    assert semiprime_factors(n) == expected


@pytest.mark.parametrize("n", [-5, 0, 1, 2, 13, 8, 12, 4095])
def test_non_semiprimes(n):
    with pytest.raises(NotASemiprimeError) as ei:
        semiprime_factors(n)
    assert ei.value.n == n


def test_decompose_outcome():
    assert decompose(15).value == (3, 5)
    failed = decompose(16)
    assert not failed.ok
    assert failed.error.n == 16
