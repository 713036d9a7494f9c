"""Population-genetic statistics for multiple sequence alignments.

This module provides:
- Alignment views and gap-free / segregating site filtering
- Coalescent correction constants
- Watterson's estimator, nucleotide diversity, Tajima's D, Fu & Li's D* and F*
- Allele counts and Ewens sampling formula quantities
- Whole-alignment, pairwise and sliding-window analysis modes
"""

from popgen_hub.popgen.alignment import AlignmentView
from popgen_hub.popgen.sites import SiteFilter, SiteSets
from popgen_hub.popgen.constants import CoalescentConstants, coalescent_constants
from popgen_hub.popgen.engine import (
    EngineResult,
    PopGenStatisticsEngine,
    fu_li_statistics,
)
from popgen_hub.popgen.alleles import (
    AllelePartition,
    AllelePartitionModel,
    allele_partition_probability,
    expected_allele_count,
    ramanujan_log_factorial,
)
from popgen_hub.popgen.modes import AnalysisModeController, window_slices

__all__ = [
    "AlignmentView",
    "SiteFilter",
    "SiteSets",
    "CoalescentConstants",
    "coalescent_constants",
    "EngineResult",
    "PopGenStatisticsEngine",
    "fu_li_statistics",
    "AllelePartition",
    "AllelePartitionModel",
    "allele_partition_probability",
    "expected_allele_count",
    "ramanujan_log_factorial",
    "AnalysisModeController",
    "window_slices",
]
