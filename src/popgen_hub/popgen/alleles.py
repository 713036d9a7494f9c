"""Allele counts and Ewens sampling formula quantities.

Sequences identical over the segregating sites form one allele class. From
the class sizes the model reports the allele count, haplotype
heterozygosity, the expected number of alleles under Ewens' sampling
formula (Ewens 1972) and the allele-partition probability of Karlin &
MacGregor (1972).
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from popgen_hub.popgen.alignment import AlignmentView
from popgen_hub.popgen.engine import heterozygosity

logger = logging.getLogger(__name__)

_HALF_LOG_FOUR_PI = math.log(4.0 * math.pi) / 2.0


def ramanujan_log_factorial(n: int) -> float:
    """Ramanujan's closed-form approximation of log(n!); log(0!) is exactly 0."""
    if n == 0:
        return 0.0
    return n * math.log(n) - n + math.log(n + 4 * n**2 + 8 * n**3) / 6.0 + _HALF_LOG_FOUR_PI


def expected_allele_count(theta: float, n: int) -> float:
    """Expected number of alleles in a sample of ``n``; 1 when theta <= 0."""
    if theta <= 0:
        return 1.0
    return theta * sum(1.0 / (theta + i) for i in range(n))


def allele_partition_probability(theta: float, class_sizes: Iterable[int], n: int) -> float:
    """
    Probability of the observed allele class sizes; 1 when theta <= 0.

    The log-factorial approximation can push the value above 1 for large
    theta with all classes distinct; such values are capped at 1.
    """
    if theta <= 0:
        return 1.0
    sizes = list(class_sizes)
    k = len(sizes)
    log_p = (
        k * math.log(theta)
        + ramanujan_log_factorial(k)
        - sum(math.log(theta + i) for i in range(n))
        - sum(a * math.log(a) + ramanujan_log_factorial(a) for a in sizes)
    )
    probability = math.exp(log_p)
    if probability > 1.0:
        logger.debug("Partition probability %r above 1, using 1", probability)
        return 1.0
    return probability


@dataclass(frozen=True)
class AllelePartition:
    num_alleles: int
    heterozygosity: float
    expected_alleles: float
    partition_probability: float
    allele_counts: Dict[str, int] = field(default_factory=dict)


class AllelePartitionModel:
    """Allele statistics for the whole-alignment analysis."""

    def compute(self, segregating: AlignmentView, theta_w: float) -> AllelePartition:
        """
        Args:
            segregating: Alignment narrowed to its segregating sites.
            theta_w: Watterson's estimator for the same sample.
        """
        n = segregating.num_rows
        counts = Counter(segregating.sequences())
        sizes = list(counts.values())
        partition = AllelePartition(
            num_alleles=len(counts),
            heterozygosity=heterozygosity(sizes, n),
            expected_alleles=expected_allele_count(theta_w, n),
            partition_probability=allele_partition_probability(theta_w, sizes, n),
            allele_counts=dict(counts),
        )
        logger.debug(
            "k=%d H=%.6g E[k]=%.6g P=%.6g",
            partition.num_alleles,
            partition.heterozygosity,
            partition.expected_alleles,
            partition.partition_probability,
        )
        return partition
