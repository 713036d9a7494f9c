"""Population-genetic summary statistics over gap-free alignment views.

The engine turns a pair of narrowed views (gap-free columns and the
segregating subset of them) plus the coalescent constants for the sample
size into:

- Watterson's estimator (Watterson 1975), absolute and per site
- Nucleotide diversity with the n/(n-1) finite-sample correction
- Tajima's D (Tajima 1989)
- Fu & Li's D* and F* (Fu & Li 1993), F* variance per Simonsen et al. (1995)
- Sampling standard errors of theta_w and pi (Tajima 1993) under no
  recombination and under free recombination

Degenerate inputs never raise: a zero divisor in a test statistic is
replaced by 1, per-site values over zero sites are 0, and Fu & Li's
statistics are ``NOT_APPLICABLE`` for n <= 2.
"""

import logging
import math
from collections import Counter
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional, Tuple

from popgen_hub.core.types import NOT_APPLICABLE, Statistic
from popgen_hub.popgen.constants import CoalescentConstants
from popgen_hub.popgen.sites import SiteSets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineResult:
    """Numeric output of one engine run."""

    n: int
    gap_free_length: int
    segregating_sites: int
    theta_w: float
    theta_w_per_site: float
    pi: float
    pi_per_site: float
    eta: int
    eta_singletons: int
    tajima_d: float
    fu_li_d_star: Optional[float]
    fu_li_f_star: Optional[float]
    theta_w_se_no_recomb: float
    theta_w_se_free_recomb: float
    pi_se_no_recomb: float
    pi_se_free_recomb: float

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _guarded_root(variance: float) -> float:
    """Square root used as a test-statistic denominator; non-positive variance gives 1."""
    if variance > 0:
        return math.sqrt(variance)
    logger.debug("Non-positive variance %r in denominator, using 1", variance)
    return 1.0


def heterozygosity(counts: Iterable[int], n: int) -> float:
    """1 - sum of squared class frequencies for class sizes summing to n."""
    return 1.0 - sum((count / n) ** 2 for count in counts)


def fu_li_statistics(
    n: int,
    a1: float,
    a2: float,
    pi: float,
    eta: int,
    eta_singletons: int,
) -> Tuple[Optional[float], Optional[float]]:
    """
    Fu & Li's D* and F* from mutation and singleton counts.

    Args:
        n: Sample size.
        a1, a2: Harmonic sums for ``n``.
        pi: Average number of pairwise differences.
        eta: Total number of mutations.
        eta_singletons: Number of singleton mutations.

    Returns:
        Tuple ``(d_star, f_star)``; both ``NOT_APPLICABLE`` when n <= 2.
    """
    if n <= 2:
        return NOT_APPLICABLE, NOT_APPLICABLE

    a_next = a1 + 1.0 / n
    cn = 2.0 * (n * a1 - 2.0 * (n - 1)) / ((n - 1) * (n - 2))
    dn = (
        cn
        + (n - 2) / (n - 1) ** 2
        + 2.0 / (n - 1) * (1.5 - (2.0 * a_next - 3.0) / (n - 2) - 1.0 / n)
    )

    ratio = n / (n - 1.0)
    v_d = (ratio**2 * a2 + a1**2 * dn - 2.0 * n * a1 * (a1 + 1) / (n - 1) ** 2) / (
        a1**2 + a2
    )
    u_d = ratio * (a1 - ratio) - v_d
    d_star = (ratio * eta - a1 * eta_singletons) / _guarded_root(u_d * eta + v_d * eta**2)

    # Simonsen, Churchill & Aquadro (1995) variance terms
    v_f = (
        (2.0 * n**3 + 110.0 * n**2 - 255.0 * n + 153.0) / (9.0 * n**2 * (n - 1))
        + 2.0 * (n - 1) * a1 / n**2
        - 8.0 * a2 / n
    ) / (a1**2 + a2)
    u_f = (
        (4.0 * n**2 + 19.0 * n + 3.0 - 12.0 * (n + 1) * a_next) / (3.0 * n * (n - 1))
    ) / a1 - v_f
    f_star = (pi - (n - 1.0) / n * eta_singletons) / _guarded_root(u_f * eta + v_f * eta**2)

    return d_star, f_star


class PopGenStatisticsEngine:
    """Compute the statistic set for one analysis unit."""

    def compute(self, sites: SiteSets, constants: CoalescentConstants) -> EngineResult:
        """Run every stage and return the full result."""
        return EngineResult(**self._evaluate(sites, constants))

    def compute_statistic(
        self,
        sites: SiteSets,
        constants: CoalescentConstants,
        statistic: Statistic,
    ) -> float:
        """Return a single statistic, stopping as soon as it is known."""
        statistic = Statistic(statistic)
        return self._evaluate(sites, constants, stop_at=statistic)[statistic.value]

    def _evaluate(
        self,
        sites: SiteSets,
        constants: CoalescentConstants,
        stop_at: Optional[Statistic] = None,
    ) -> Dict[str, object]:
        n = sites.gap_free.num_rows
        if constants.n != n:
            raise ValueError(
                f"Coalescent constants for n={constants.n} used with {n} sequences"
            )

        length = sites.gap_free_length
        segregating = sites.segregating_sites
        a1, a2 = constants.a1, constants.a2
        values: Dict[str, object] = {
            "n": n,
            "gap_free_length": length,
            "segregating_sites": segregating,
        }

        # Watterson's estimator
        theta_w = segregating / a1 if a1 > 0 else 0.0
        values["theta_w"] = theta_w
        values["theta_w_per_site"] = theta_w / length if length > 0 else 0.0
        if stop_at is not None and stop_at.value in values:
            return values

        # Per-column diversity and mutation counts
        diversity = 0.0
        eta = 0
        eta_singletons = 0
        for _, column in sites.segregating.columns():
            counts = Counter(column)
            diversity += heterozygosity(counts.values(), n)
            eta += len(counts) - 1
            eta_singletons += sum(1 for c in counts.values() if c == 1)

        pi = diversity * n / (n - 1) if n > 1 else 0.0
        values["pi"] = pi
        values["pi_per_site"] = pi / length if length > 0 else 0.0
        values["eta"] = eta
        values["eta_singletons"] = eta_singletons
        if stop_at is not None and stop_at.value in values:
            return values

        # Tajima's D
        values["tajima_d"] = (pi - theta_w) / _guarded_root(
            constants.e1 * segregating + constants.e2 * segregating * (segregating - 1)
        )
        if stop_at is not None and stop_at.value in values:
            return values

        d_star, f_star = fu_li_statistics(n, a1, a2, pi, eta, eta_singletons)
        values["fu_li_d_star"] = d_star
        values["fu_li_f_star"] = f_star

        # Tajima (1993) sampling variances, per site
        sites_divisor = max(length, 1)
        if a1 > 0:
            theta_linked = theta_w / a1 + a2 * theta_w**2 / a1**2
            theta_free = theta_w / a1 + a2 * theta_w**2 / (a1**2 * sites_divisor)
        else:
            theta_linked = theta_free = 0.0
        pi_linked = constants.b1 * pi + constants.b2 * pi**2
        pi_free = constants.b1 * pi + constants.b2 * pi**2 / sites_divisor

        values["theta_w_se_no_recomb"] = math.sqrt(theta_linked) / sites_divisor
        values["theta_w_se_free_recomb"] = math.sqrt(theta_free) / sites_divisor
        values["pi_se_no_recomb"] = math.sqrt(pi_linked) / sites_divisor
        values["pi_se_free_recomb"] = math.sqrt(pi_free) / sites_divisor

        logger.debug(
            "n=%d L=%d S=%d theta_w=%.6g pi=%.6g D=%.6g",
            n, length, segregating, theta_w, pi, values["tajima_d"],
        )
        return values
