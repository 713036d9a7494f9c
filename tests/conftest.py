from __future__ import annotations

import pytest

from popgen_hub.core.types import Alignment


def make_alignment(*sequences: str, name: str = "test") -> Alignment:
    return Alignment(
        name=name,
        rows=[(f"s{i + 1}", seq) for i, seq in enumerate(sequences)],
    )


@pytest.fixture
def identical_alignment() -> Alignment:
    return make_alignment(*["ACGTACGTAC"] * 4, name="identical")


@pytest.fixture
def two_sequence_alignment() -> Alignment:
    return make_alignment("AAAA", "AATA", name="pair")


@pytest.fixture
def four_sequence_alignment() -> Alignment:
    # col 0: A,A,A,T (one singleton); col 4: A,A,C,C
    return make_alignment("AAAAA", "AAAAA", "AAAAC", "TAAAC", name="four")


@pytest.fixture
def gapped_alignment() -> Alignment:
    return make_alignment("AC-T", "ACGA", "GCGT", name="gapped")


@pytest.fixture
def alignment_of():
    """Factory building an alignment from bare sequences."""
    return make_alignment
