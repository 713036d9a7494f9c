from __future__ import annotations

import pytest

from popgen_hub.core.exceptions import ConfigurationError, InputValidationError, WindowSliceError
from popgen_hub.core.types import (
    NOT_APPLICABLE,
    AnalysisMode,
    Statistic,
    WindowSpec,
    WindowStatistic,
)
from popgen_hub.popgen.modes import AnalysisModeController, window_slices


WINDOW_ROWS = ("AC-TACGT", "ACGTACGA", "ACGTTCGT")


def test_whole_alignment_bundle(four_sequence_alignment):
    controller = AnalysisModeController(label="run 1")
    bundle = controller.whole(four_sequence_alignment)
    assert bundle.n == 4
    assert bundle.name == "four"
    assert bundle.label == "run 1"
    assert bundle.total_length == 5
    assert bundle.gap_free_length == 5
    assert bundle.segregating_sites == 2
    assert bundle.segregating_fraction == pytest.approx(0.4)
    assert bundle.num_alleles == 3
    assert bundle.theta_w == pytest.approx(12 / 11)
    assert bundle.tajima_d == pytest.approx(0.59158, abs=1e-4)
    assert bundle.fu_li_d_star is not NOT_APPLICABLE


def test_identical_sequences_end_to_end(identical_alignment):
    bundle = AnalysisModeController().whole(identical_alignment)
    assert bundle.segregating_sites == 0
    assert bundle.num_alleles == 1
    assert bundle.heterozygosity == 0.0
    assert bundle.pi == 0.0
    assert bundle.tajima_d == 0.0
    assert bundle.expected_alleles == 1.0
    assert bundle.partition_probability == 1.0


def test_two_sequence_end_to_end(two_sequence_alignment):
    bundle = AnalysisModeController().whole(two_sequence_alignment)
    assert bundle.segregating_sites == 1
    assert bundle.gap_free_length == 4
    assert bundle.theta_w == pytest.approx(1.0)
    assert bundle.pi_per_site == pytest.approx(0.25)
    assert bundle.fu_li_d_star is NOT_APPLICABLE
    assert bundle.fu_li_f_star is NOT_APPLICABLE


def test_pairwise_uses_pair_local_gap_filtering(gapped_alignment):
    matrix = AnalysisModeController().pairwise(gapped_alignment)
    assert matrix.num_pairs == 3
    assert matrix.statistic is Statistic.PI_PER_SITE
    assert matrix.get(1, 0) == pytest.approx(1 / 3)
    assert matrix.get(2, 1) == pytest.approx(0.5)
    assert matrix.get(0, 2) == pytest.approx(1 / 3)
    assert matrix.rows() == [[], [matrix.get(1, 0)], [matrix.get(2, 0), matrix.get(2, 1)]]


def test_pairwise_absolute(gapped_alignment):
    matrix = AnalysisModeController(per_site=False).pairwise(gapped_alignment)
    assert matrix.statistic is Statistic.PI
    assert matrix.get(2, 1) == pytest.approx(2.0)


@pytest.mark.parametrize("rows", [2, 3, 5, 8])
def test_pairwise_pair_count(alignment_of, rows):
    alignment = alignment_of(*["ACGT"] * rows)
    matrix = AnalysisModeController().pairwise(alignment)
    assert matrix.num_pairs == rows * (rows - 1) // 2
    assert set(matrix.values) == {(i, j) for i in range(rows) for j in range(i)}


@pytest.mark.parametrize(
    "length,width,step",
    [(10, 3, 2), (10, 10, 1), (10, 1, 1), (7, 3, 3), (25, 4, 7)],
)
def test_window_count(length, width, step):
    windows = list(window_slices(range(length), WindowSpec(width, step)))
    assert len(windows) == (length - width) // step + 1
    assert all(len(columns) == width for _, columns in windows)


def test_short_sequence_yields_no_windows():
    assert list(window_slices(range(4), WindowSpec(5, 1))) == []


def test_window_slice_invariant_is_enforced():
    class Truncating(list):
        def __getitem__(self, item):
            value = super().__getitem__(item)
            return value[:-1] if isinstance(item, slice) else value

    with pytest.raises(WindowSliceError):
        list(window_slices(Truncating(range(6)), WindowSpec(3, 1)))


def test_sliding_window_diversity(alignment_of):
    alignment = alignment_of(*WINDOW_ROWS)
    windows = AnalysisModeController().windows(alignment, WindowSpec(3, 2))
    assert [(w.start, w.end) for w in windows] == [(1, 4), (4, 6), (6, 8)]
    assert [w.midpoint for w in windows] == [2.5, 5.0, 7.0]
    assert windows[0].value == pytest.approx(0.0)
    assert windows[1].value == pytest.approx(2 / 9)
    assert windows[2].value == pytest.approx(2 / 9)
    assert all(w.statistic is Statistic.PI_PER_SITE for w in windows)


def test_sliding_window_watterson_absolute(alignment_of):
    alignment = alignment_of(*WINDOW_ROWS)
    controller = AnalysisModeController(per_site=False)
    windows = controller.windows(alignment, WindowSpec(3, 2, WindowStatistic.WATTERSON))
    assert windows[1].statistic is Statistic.THETA_W
    assert windows[1].value == pytest.approx(1 / 1.5)


def test_sliding_window_pairwise(alignment_of):
    alignment = alignment_of(*WINDOW_ROWS)
    spec = WindowSpec(3, 2, WindowStatistic.TAJIMA_D)
    windows = AnalysisModeController().pairwise_windows(alignment, spec)
    assert len(windows) == 3
    assert all(w.matrix.num_pairs == 3 for w in windows)
    assert all(w.statistic is Statistic.PI_PER_SITE for w in windows)
    # window [4, 6]: only row 3 differs, at column 5
    assert windows[1].matrix.get(2, 0) == pytest.approx(1 / 3)
    assert windows[1].matrix.get(1, 0) == pytest.approx(0.0)


def test_analyze_dispatches_modes(alignment_of):
    alignment = alignment_of(*WINDOW_ROWS)
    controller = AnalysisModeController()
    spec = WindowSpec(3, 2)

    assert controller.analyze(alignment, AnalysisMode.WHOLE).bundle is not None
    assert controller.analyze(alignment, AnalysisMode.PAIRWISE).matrix is not None
    assert len(controller.analyze(alignment, AnalysisMode.WINDOW, spec).windows) == 3
    report = controller.analyze(alignment, AnalysisMode.WINDOW_PAIRWISE, spec)
    assert all(w.matrix is not None for w in report.windows)


def test_window_mode_requires_spec(gapped_alignment):
    with pytest.raises(ConfigurationError):
        AnalysisModeController().analyze(gapped_alignment, AnalysisMode.WINDOW)


def test_single_sequence_is_rejected(alignment_of):
    with pytest.raises(InputValidationError):
        AnalysisModeController().whole(alignment_of("ACGT"))


def test_run_processes_each_alignment(alignment_of):
    alignments = [alignment_of("AAAA", "AATA", name="a"), alignment_of("ACGT", "ACGT", "ACGA", name="b")]
    reports = list(AnalysisModeController().run(alignments, AnalysisMode.WHOLE))
    assert [r.alignment_name for r in reports] == ["a", "b"]
    assert [r.bundle.n for r in reports] == [2, 3]
