"""Coalescent correction terms used by Watterson's estimator and the neutrality tests."""

from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class CoalescentConstants:
    """
    Correction terms for a sample of ``n`` sequences (Tajima 1989).

    a1 and a2 are the harmonic sums over 1..n-1; the remaining terms build
    the variance of Tajima's D. For n < 2 the sums are empty and the
    derived terms are reported as 0.0.
    """

    n: int
    a1: float
    a2: float
    b1: float
    b2: float
    c1: float
    c2: float
    e1: float
    e2: float

    @classmethod
    def for_sample_size(cls, n: int) -> "CoalescentConstants":
        return coalescent_constants(n)


@lru_cache(maxsize=None)
def coalescent_constants(n: int) -> CoalescentConstants:
    """Compute (and memoise) the constants for sample size ``n``."""
    if n < 1:
        raise ValueError(f"Sample size must be at least 1, got {n}")

    a1 = sum(1.0 / i for i in range(1, n))
    a2 = sum(1.0 / (i * i) for i in range(1, n))
    if n < 2:
        return CoalescentConstants(n, a1, a2, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)

    b1 = (n + 1) / (3.0 * (n - 1))
    b2 = 2.0 * (n * n + n + 3) / (9.0 * n * (n - 1))
    c1 = b1 - 1.0 / a1
    c2 = b2 - (n + 2) / (a1 * n) + a2 / (a1 * a1)
    e1 = c1 / a1
    e2 = c2 / (a1 * a1 + a2)
    return CoalescentConstants(n, a1, a2, b1, b2, c1, c2, e1, e2)
