"""Analysis modes: which rows and columns feed each engine run."""

import logging
from itertools import combinations
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from popgen_hub.core.exceptions import ConfigurationError, InputValidationError, WindowSliceError
from popgen_hub.core.types import (
    Alignment,
    AnalysisMode,
    AnalysisReport,
    PairwiseMatrix,
    Statistic,
    StatisticBundle,
    WindowResult,
    WindowSpec,
)
from popgen_hub.popgen.alignment import AlignmentView
from popgen_hub.popgen.alleles import AllelePartitionModel
from popgen_hub.popgen.constants import coalescent_constants
from popgen_hub.popgen.engine import PopGenStatisticsEngine
from popgen_hub.popgen.sites import DEFAULT_GAP_CHAR, SiteFilter

logger = logging.getLogger(__name__)


def window_slices(
    columns: Sequence[int], spec: WindowSpec
) -> Iterator[Tuple[int, Tuple[int, ...]]]:
    """
    Yield ``(window index, columns)`` for every full window over ``columns``.

    Windows that would run past the end are not produced.

    Raises:
        WindowSliceError: If a produced window does not hold exactly
            ``spec.width`` columns.
    """
    for index, start in enumerate(range(0, len(columns) - spec.width + 1, spec.step)):
        window = tuple(columns[start : start + spec.width])
        if len(window) != spec.width:
            raise WindowSliceError(index, spec.width, len(window))
        yield index, window


class AnalysisModeController:
    """
    Drive the statistics engine over the analysis units of an alignment.

    Units are independent: the whole alignment, every pair of rows, or
    every sliding window over the globally gap-free columns.
    """

    def __init__(
        self,
        gap_char: str = DEFAULT_GAP_CHAR,
        per_site: bool = True,
        label: str = "",
        min_sequences: int = 2,
        engine: Optional[PopGenStatisticsEngine] = None,
        allele_model: Optional[AllelePartitionModel] = None,
    ):
        """
        Initialize the controller.

        Args:
            gap_char: Gap symbol excluded from every analysis unit.
            per_site: Report diversity and Watterson's estimator per site
                in pairwise and window modes.
            label: Free text attached to every result.
            min_sequences: Smallest accepted sample size.
            engine: Statistics engine; a new one if None.
            allele_model: Allele partition model; a new one if None.
        """
        self.site_filter = SiteFilter(gap_char)
        self.per_site = per_site
        self.label = label
        self.min_sequences = min_sequences
        self.engine = engine or PopGenStatisticsEngine()
        self.allele_model = allele_model or AllelePartitionModel()

    @property
    def diversity_statistic(self) -> Statistic:
        return Statistic.PI_PER_SITE if self.per_site else Statistic.PI

    def run(
        self,
        alignments: Iterable[Alignment],
        mode: AnalysisMode,
        window: Optional[WindowSpec] = None,
    ) -> Iterator[AnalysisReport]:
        """Analyse each alignment independently, in input order."""
        for alignment in alignments:
            yield self.analyze(alignment, mode, window)

    def analyze(
        self,
        alignment: Alignment,
        mode: AnalysisMode,
        window: Optional[WindowSpec] = None,
    ) -> AnalysisReport:
        """Analyse one alignment in the given mode."""
        mode = AnalysisMode(mode)
        if mode in (AnalysisMode.WINDOW, AnalysisMode.WINDOW_PAIRWISE) and window is None:
            raise ConfigurationError(f"Analysis mode '{mode.value}' requires a window spec")
        self._check_sample_size(alignment)

        report = AnalysisReport(
            alignment_name=alignment.name,
            mode=mode,
            molecule_type=alignment.molecule_type,
        )
        logger.info("Analysing %s (%d sequences, mode=%s)", alignment.name, alignment.num_sequences, mode.value)
        if mode is AnalysisMode.WHOLE:
            report.bundle = self.whole(alignment)
        elif mode is AnalysisMode.PAIRWISE:
            report.matrix = self.pairwise(alignment)
        elif mode is AnalysisMode.WINDOW:
            report.windows = self.windows(alignment, window)
        else:
            report.windows = self.pairwise_windows(alignment, window)
        return report

    def whole(self, alignment: Alignment) -> StatisticBundle:
        """Full statistic bundle for the entire alignment."""
        self._check_sample_size(alignment)
        sites = self.site_filter.split(AlignmentView.of(alignment))
        n = alignment.num_sequences
        result = self.engine.compute(sites, coalescent_constants(n))
        alleles = self.allele_model.compute(sites.segregating, result.theta_w)

        length = result.gap_free_length
        return StatisticBundle(
            n=n,
            num_alleles=alleles.num_alleles,
            heterozygosity=alleles.heterozygosity,
            expected_alleles=alleles.expected_alleles,
            partition_probability=alleles.partition_probability,
            total_length=alignment.width,
            gap_free_length=length,
            segregating_sites=result.segregating_sites,
            segregating_fraction=result.segregating_sites / length if length > 0 else 0.0,
            theta_w=result.theta_w,
            theta_w_per_site=result.theta_w_per_site,
            theta_w_se_no_recomb=result.theta_w_se_no_recomb,
            theta_w_se_free_recomb=result.theta_w_se_free_recomb,
            pi=result.pi,
            pi_per_site=result.pi_per_site,
            pi_se_no_recomb=result.pi_se_no_recomb,
            pi_se_free_recomb=result.pi_se_free_recomb,
            tajima_d=result.tajima_d,
            fu_li_d_star=result.fu_li_d_star,
            fu_li_f_star=result.fu_li_f_star,
            label=self.label,
            name=alignment.name,
        )

    def pairwise(self, alignment: Alignment) -> PairwiseMatrix:
        """Diversity for every pair of rows, each over its own gap-free columns."""
        self._check_sample_size(alignment)
        return self._pairwise_matrix(AlignmentView.of(alignment))

    def windows(self, alignment: Alignment, spec: WindowSpec) -> List[WindowResult]:
        """The selected statistic for every full window over the gap-free columns."""
        self._check_sample_size(alignment)
        view = AlignmentView.of(alignment)
        statistic = spec.statistic.resolve(self.per_site)
        constants = coalescent_constants(alignment.num_sequences)

        results = []
        for index, columns in self._slices(view, spec):
            sites = self.site_filter.split(view.restrict(columns=columns))
            value = self.engine.compute_statistic(sites, constants, statistic)
            results.append(self._window_result(alignment, index, columns, statistic, value=value))
        return results

    def pairwise_windows(self, alignment: Alignment, spec: WindowSpec) -> List[WindowResult]:
        """A pairwise diversity matrix for every full window over the gap-free columns."""
        self._check_sample_size(alignment)
        view = AlignmentView.of(alignment)

        results = []
        for index, columns in self._slices(view, spec.forced_diversity()):
            matrix = self._pairwise_matrix(view.restrict(columns=columns))
            results.append(
                self._window_result(
                    alignment, index, columns, self.diversity_statistic, matrix=matrix
                )
            )
        return results

    def _slices(
        self, view: AlignmentView, spec: WindowSpec
    ) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        gap_free = self.site_filter.gap_free_columns(view)
        if len(gap_free) < spec.width:
            logger.warning(
                "%s: %d gap-free columns, fewer than window width %d; no windows produced",
                view.source.name, len(gap_free), spec.width,
            )
        return window_slices(gap_free, spec)

    def _pairwise_matrix(self, view: AlignmentView) -> PairwiseMatrix:
        statistic = self.diversity_statistic
        constants = coalescent_constants(2)
        values = {}
        for j, i in combinations(range(view.num_rows), 2):
            pair_view = view.restrict(rows=(view.row_indices[j], view.row_indices[i]))
            sites = self.site_filter.split(pair_view)
            values[(i, j)] = self.engine.compute_statistic(sites, constants, statistic)
        return PairwiseMatrix(
            identifiers=view.identifiers,
            values=values,
            statistic=statistic,
            label=self.label,
            name=view.source.name,
        )

    def _window_result(
        self,
        alignment: Alignment,
        index: int,
        columns: Sequence[int],
        statistic: Statistic,
        value: Optional[float] = None,
        matrix: Optional[PairwiseMatrix] = None,
    ) -> WindowResult:
        start, end = columns[0] + 1, columns[-1] + 1
        return WindowResult(
            index=index,
            start=start,
            end=end,
            midpoint=(start + end) / 2.0,
            statistic=statistic,
            value=value,
            matrix=matrix,
            label=self.label,
            name=alignment.name,
        )

    def _check_sample_size(self, alignment: Alignment) -> None:
        if alignment.num_sequences < self.min_sequences:
            logger.warning(
                "Rejecting %s: %d sequence(s), at least %d required",
                alignment.name, alignment.num_sequences, self.min_sequences,
            )
            raise InputValidationError(
                f"Alignment '{alignment.name}' has {alignment.num_sequences} sequence(s); "
                f"at least {self.min_sequences} are required",
                "rows",
            )
