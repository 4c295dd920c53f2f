# File: backend/tests/test_scorer.py
# Version: v0.1.0
"""
Window scorer against an independent base-4 reference and hand-worked cases.
"""

import math
import random

import pytest

from backend.app.core.crispr.errors import InvalidPatternError
from backend.app.core.crispr.models import CandidateSite
from backend.app.core.crispr.scorer import score_candidate, score_site, score_window


def _reference(protospacer: str, step: int = 1):
    """Two adjacent codons read as one base-4 number == c1 * 64 + c2."""
    digits = str.maketrans("ACGT", "0123")
    total, records = 0.0, []
    for i in range(0, len(protospacer) - 6 + 1, step):
        n = int(protospacer[i : i + 6].translate(digits), 4)
        factors = [d for d in range(2, n) if n % d == 0 and all(d % k for k in range(2, d))]
        for p in factors:
            q = n // p
            if p <= q and q > 1 and all(q % k for k in range(2, q)):
                lam = (p - q) ** 2 / (n * math.log((p + q) / 2)) if (p + q) / 2 > 1 else 0.0
                total += lam
                records.append((i, n, p, q))
                break
    return total, records


def test_hand_worked_single_window():
    # only window 0 (AAA|ACG -> 6 = 2 * 3) is a semiprime
    seq = "AAAACG" + "A" * 14 + "TGG"
    res = score_candidate(seq, "NGG")
    assert len(res.factorization_records) == 1
    r = res.factorization_records[0]
    assert (r.offset, r.window_integer, r.p, r.q) == (0, 6, 2, 3)
    assert r.additive_complexity == 2.5
    assert r.multiplicative_resistance == 6
    assert math.isclose(res.total_score, 1.0 / (6 * math.log(2.5)))
    assert res.lambda_score() == round(res.total_score, 4)


@pytest.mark.parametrize("step", [1, 2, 3, 5])
def test_matches_reference_on_random_protospacers(step):
    rng = random.Random(1234 + step)
    for _ in range(40):
        proto = "".join(rng.choice("ACGT") for _ in range(20))
        res = score_candidate(proto + "AGG", "NGG", step=step)
        total, records = _reference(proto, step)
        assert math.isclose(res.total_score, total, rel_tol=1e-12, abs_tol=1e-12)
        assert [(r.offset, r.window_integer, r.p, r.q) for r in res.factorization_records] == records


def test_window_count_for_default_step():
    # 20 nt protospacer, 6 nt window -> offsets 0..14
    offsets = [r.offset for r in score_candidate("ACGT" * 5 + "CGG").factorization_records]
    assert all(0 <= o <= 14 for o in offsets)
    assert offsets == sorted(offsets)


def test_motif_mismatch_returns_zero_without_raising():
    res = score_candidate("AAAACG" + "A" * 14 + "TTT", "NGG")
    assert res.total_score == 0.0
    assert res.factorization_records == ()


def test_short_input_returns_zero():
    res = score_candidate("ACGTACGTAGG", "NGG")
    assert res.total_score == 0.0
    assert res.factorization_records == ()


def test_invalid_windows_are_skipped_not_fatal():
    # windows overlapping positions 6..8 are skipped
    proto = "AAAACG" + "NNN" + "A" * 11
    res = score_candidate(proto + "AGG", "NGG")
    assert [(r.offset, r.window_integer) for r in res.factorization_records] == [(0, 6)]


def test_score_window_outcomes():
    assert score_window("AAAACG" + "A" * 14, 0).value.window_integer == 6
    assert not score_window("A" * 20, 0).ok            # 0 is not a semiprime
    assert not score_window("NAAAAA" + "A" * 14, 0).ok  # invalid codon


def test_bad_pattern_and_step_raise():
    with pytest.raises(InvalidPatternError):
        score_candidate("A" * 23, "N?G")
    with pytest.raises(ValueError):
        score_candidate("A" * 20 + "AGG", "NGG", step=0)


def test_score_site_keeps_location():
    site = CandidateSite(protospacer="AAAACG" + "A" * 14, motif="TGG", position=42, source_id="chr7")
    res = score_site(site, "NGG")
    assert res.position == 42
    assert res.source_id == "chr7"
    assert res.motif == "TGG"
    assert res.factorization_records[0].p == 2


def test_longer_motif_pattern():
    res = score_candidate("AAAACG" + "A" * 14 + "TTTA", "TTTN")
    assert len(res.factorization_records) == 1
