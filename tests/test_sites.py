from __future__ import annotations

from popgen_hub.popgen.alignment import AlignmentView
from popgen_hub.popgen.sites import SiteFilter


def test_view_restrict_keeps_source_coordinates(gapped_alignment):
    view = AlignmentView.of(gapped_alignment)
    assert view.num_rows == 3
    assert view.width == 4

    sub = view.restrict(rows=[2, 0], columns=[0, 3])
    assert sub.identifiers == ["s3", "s1"]
    assert sub.sequences() == ["GT", "AT"]
    assert sub.column_indices == (0, 3)

    narrower = sub.restrict(columns=[3])
    assert narrower.row_indices == (2, 0)
    assert narrower.column(0) == "TT"


def test_gap_free_and_segregating_columns(gapped_alignment):
    view = AlignmentView.of(gapped_alignment)
    site_filter = SiteFilter()
    assert site_filter.gap_free_columns(view) == (0, 1, 3)
    assert site_filter.segregating_columns(view) == (0, 3)

    sites = site_filter.split(view)
    assert sites.gap_free_length == 3
    assert sites.segregating_sites == 2
    assert sites.segregating.sequences() == ["AT", "AA", "GT"]


def test_gap_filtering_is_local_to_rows(gapped_alignment):
    view = AlignmentView.of(gapped_alignment).restrict(rows=[1, 2])
    assert SiteFilter().gap_free_columns(view) == (0, 1, 2, 3)


def test_custom_gap_character(alignment_of):
    alignment = alignment_of("AC.T", "ACGT")
    view = AlignmentView.of(alignment)
    assert SiteFilter(".").gap_free_columns(view) == (0, 1, 3)
    assert SiteFilter("-").gap_free_columns(view) == (0, 1, 2, 3)


def test_identical_rows_have_no_segregating_sites(identical_alignment):
    sites = SiteFilter().split(AlignmentView.of(identical_alignment))
    assert sites.gap_free_length == 10
    assert sites.segregating_sites == 0
    assert sites.segregating.sequences() == [""] * 4
