"""Core data types for Population Genetics Hub."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from popgen_hub.core.exceptions import ConfigurationError, InputValidationError


# Fu & Li's statistics are undefined for n <= 2
NOT_APPLICABLE = None


class MoleculeType(str, Enum):
    """Molecule types of an alignment."""

    DNA = "dna"
    RNA = "rna"
    PROTEIN = "protein"


class Statistic(str, Enum):
    """Statistics the engine can return on their own."""

    THETA_W = "theta_w"
    THETA_W_PER_SITE = "theta_w_per_site"
    PI = "pi"
    PI_PER_SITE = "pi_per_site"
    TAJIMA_D = "tajima_d"


class WindowStatistic(str, Enum):
    """Statistic reported for each sliding window."""

    DIVERSITY = "diversity"
    WATTERSON = "watterson"
    TAJIMA_D = "tajima_d"

    @classmethod
    def parse(cls, code: str) -> "WindowStatistic":
        """Resolve a user-supplied code, accepting the short aliases."""
        aliases = {
            "diversity": cls.DIVERSITY,
            "pi": cls.DIVERSITY,
            "watterson": cls.WATTERSON,
            "theta": cls.WATTERSON,
            "tajima_d": cls.TAJIMA_D,
            "tajimad": cls.TAJIMA_D,
            "d": cls.TAJIMA_D,
        }
        key = str(code).strip().lower()
        if key not in aliases:
            raise ConfigurationError(
                f"Unknown window statistic '{code}' (expected one of: diversity, watterson, tajima_d)"
            )
        return aliases[key]

    def resolve(self, per_site: bool = True) -> Statistic:
        """Map to the engine statistic for the chosen normalisation."""
        if self is WindowStatistic.DIVERSITY:
            return Statistic.PI_PER_SITE if per_site else Statistic.PI
        if self is WindowStatistic.WATTERSON:
            return Statistic.THETA_W_PER_SITE if per_site else Statistic.THETA_W
        return Statistic.TAJIMA_D


class AnalysisMode(str, Enum):
    """How an alignment is split into analysis units."""

    WHOLE = "whole"
    PAIRWISE = "pairwise"
    WINDOW = "window"
    WINDOW_PAIRWISE = "window_pairwise"


@dataclass(frozen=True)
class WindowSpec:
    """Sliding window width, step and reported statistic."""

    width: int
    step: int
    statistic: WindowStatistic = WindowStatistic.DIVERSITY

    def __post_init__(self):
        for name in ("width", "step"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(
                    f"Window {name} must be a positive integer, got {value!r}"
                )
        if not isinstance(self.statistic, WindowStatistic):
            object.__setattr__(self, "statistic", WindowStatistic.parse(self.statistic))

    @classmethod
    def parse(cls, text: str) -> "WindowSpec":
        """
        Parse a ``"WIDTH,STEP[,STATISTIC]"`` string.

        Raises:
            ConfigurationError: If the integers or the statistic code are invalid.
        """
        parts = [p.strip() for p in str(text).split(",")]
        if len(parts) not in (2, 3):
            raise ConfigurationError(
                f"Invalid window spec '{text}': expected WIDTH,STEP[,STATISTIC]"
            )
        try:
            width, step = int(parts[0]), int(parts[1])
        except ValueError:
            raise ConfigurationError(
                f"Invalid window spec '{text}': width and step must be integers"
            ) from None
        statistic = WindowStatistic.parse(parts[2]) if len(parts) == 3 else WindowStatistic.DIVERSITY
        return cls(width=width, step=step, statistic=statistic)

    def forced_diversity(self) -> "WindowSpec":
        """Copy of this spec reporting diversity, as required for pairwise windows."""
        return WindowSpec(width=self.width, step=self.step, statistic=WindowStatistic.DIVERSITY)


@dataclass
class Alignment:
    """A loaded multiple sequence alignment."""

    name: str
    rows: List[Tuple[str, str]]  # (identifier, aligned sequence)
    molecule_type: MoleculeType = MoleculeType.DNA

    def __post_init__(self):
        self.rows = [(ident, "".join(seq.split()).upper()) for ident, seq in self.rows]
        if not self.rows:
            raise InputValidationError(f"Alignment '{self.name}' contains no sequences", "rows")
        width = len(self.rows[0][1])
        for ident, seq in self.rows:
            if len(seq) != width:
                raise InputValidationError(
                    f"Alignment '{self.name}': sequence '{ident}' has length {len(seq)}, "
                    f"expected {width}",
                    "rows",
                )

    @property
    def num_sequences(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0][1])

    @property
    def identifiers(self) -> List[str]:
        return [ident for ident, _ in self.rows]

    @property
    def sequences(self) -> List[str]:
        return [seq for _, seq in self.rows]


@dataclass(frozen=True)
class StatisticBundle:
    """Full set of statistics for one analysis unit."""

    n: int
    num_alleles: int
    heterozygosity: float
    expected_alleles: float
    partition_probability: float
    total_length: int
    gap_free_length: int
    segregating_sites: int
    segregating_fraction: float
    theta_w: float
    theta_w_per_site: float
    theta_w_se_no_recomb: float
    theta_w_se_free_recomb: float
    pi: float
    pi_per_site: float
    pi_se_no_recomb: float
    pi_se_free_recomb: float
    tajima_d: float
    fu_li_d_star: Optional[float]
    fu_li_f_star: Optional[float]
    label: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "n": self.n,
            "num_alleles": self.num_alleles,
            "heterozygosity": self.heterozygosity,
            "expected_alleles": self.expected_alleles,
            "partition_probability": self.partition_probability,
            "total_length": self.total_length,
            "gap_free_length": self.gap_free_length,
            "segregating_sites": self.segregating_sites,
            "segregating_fraction": self.segregating_fraction,
            "theta_w": self.theta_w,
            "theta_w_per_site": self.theta_w_per_site,
            "theta_w_se_no_recomb": self.theta_w_se_no_recomb,
            "theta_w_se_free_recomb": self.theta_w_se_free_recomb,
            "pi": self.pi,
            "pi_per_site": self.pi_per_site,
            "pi_se_no_recomb": self.pi_se_no_recomb,
            "pi_se_free_recomb": self.pi_se_free_recomb,
            "tajima_d": self.tajima_d,
            "fu_li_d_star": self.fu_li_d_star,
            "fu_li_f_star": self.fu_li_f_star,
        }


@dataclass(frozen=True)
class PairwiseMatrix:
    """Lower-triangular matrix of pairwise nucleotide diversity."""

    identifiers: List[str]
    values: Dict[Tuple[int, int], float]  # keyed by (i, j) with j < i
    statistic: Statistic = Statistic.PI_PER_SITE
    label: str = ""
    name: str = ""

    @property
    def num_pairs(self) -> int:
        return len(self.values)

    def get(self, i: int, j: int) -> float:
        """Value for rows i and j in either order."""
        if i == j:
            raise KeyError("Pairwise matrix has no diagonal entries")
        return self.values[(i, j) if i > j else (j, i)]

    def rows(self) -> List[List[float]]:
        """Lower triangle as ragged rows; row i has i entries."""
        return [
            [self.values[(i, j)] for j in range(i)]
            for i in range(len(self.identifiers))
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "statistic": self.statistic.value,
            "identifiers": list(self.identifiers),
            "matrix": self.rows(),
        }


@dataclass(frozen=True)
class WindowResult:
    """One sliding window; positions are 1-based alignment columns."""

    index: int
    start: int
    end: int
    midpoint: float
    statistic: Statistic
    value: Optional[float] = None
    matrix: Optional[PairwiseMatrix] = None
    label: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "label": self.label,
            "window": self.index,
            "start": self.start,
            "end": self.end,
            "midpoint": self.midpoint,
            "statistic": self.statistic.value,
        }
        if self.matrix is not None:
            data["matrix"] = self.matrix.to_dict()
        else:
            data["value"] = self.value
        return data


@dataclass
class AnalysisReport:
    """All results produced for one alignment record."""

    alignment_name: str
    mode: AnalysisMode
    molecule_type: MoleculeType = MoleculeType.DNA
    bundle: Optional[StatisticBundle] = None
    matrix: Optional[PairwiseMatrix] = None
    windows: List[WindowResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "alignment": self.alignment_name,
            "mode": self.mode.value,
            "molecule_type": self.molecule_type.value,
        }
        if self.bundle is not None:
            data["statistics"] = self.bundle.to_dict()
        if self.matrix is not None:
            data["pairwise"] = self.matrix.to_dict()
        if self.mode in (AnalysisMode.WINDOW, AnalysisMode.WINDOW_PAIRWISE):
            data["windows"] = [w.to_dict() for w in self.windows]
        return data
