from __future__ import annotations

import pytest

from popgen_hub.popgen.constants import CoalescentConstants, coalescent_constants


def test_constants_for_four_sequences():
    c = coalescent_constants(4)
    assert c.n == 4
    assert c.a1 == pytest.approx(1 + 1 / 2 + 1 / 3)
    assert c.a2 == pytest.approx(1 + 1 / 4 + 1 / 9)
    assert c.b1 == pytest.approx(5 / 9)
    assert c.b2 == pytest.approx(46 / 108)
    assert c.c1 == pytest.approx(5 / 9 - 6 / 11)
    assert c.e1 == pytest.approx(0.0055096419, abs=1e-9)
    c2 = c.b2 - (4 + 2) / (c.a1 * 4) + c.a2 / c.a1**2
    assert c.c2 == pytest.approx(c2)
    assert c.e2 == pytest.approx(c2 / (c.a1**2 + c.a2))
    assert c.e2 == pytest.approx(0.0026900016, abs=1e-9)


def test_constants_are_pure():
    first = coalescent_constants(17)
    coalescent_constants.cache_clear()
    second = coalescent_constants(17)
    assert first == second
    assert CoalescentConstants.for_sample_size(17) == first


def test_two_sequences_have_zero_variance_terms():
    c = coalescent_constants(2)
    assert c.a1 == 1.0
    assert c.a2 == 1.0
    assert c.e1 == pytest.approx(0.0)
    assert c.e2 == pytest.approx(0.0)


def test_single_sequence_has_empty_sums():
    c = coalescent_constants(1)
    assert c.a1 == 0.0
    assert c.a2 == 0.0
    assert c.e1 == 0.0


def test_invalid_sample_size():
    with pytest.raises(ValueError):
        coalescent_constants(0)
