"""Core module for Population Genetics Hub."""

from popgen_hub.core.types import (
    NOT_APPLICABLE,
    Alignment,
    AnalysisMode,
    AnalysisReport,
    MoleculeType,
    PairwiseMatrix,
    Statistic,
    StatisticBundle,
    WindowResult,
    WindowSpec,
    WindowStatistic,
)
from popgen_hub.core.config import Settings, get_settings, set_settings
from popgen_hub.core.exceptions import (
    PopGenHubError,
    InputValidationError,
    ConfigurationError,
    WindowSliceError,
    AlignmentFormatError,
)

__all__ = [
    "NOT_APPLICABLE",
    "Alignment",
    "AnalysisMode",
    "AnalysisReport",
    "MoleculeType",
    "PairwiseMatrix",
    "Statistic",
    "StatisticBundle",
    "WindowResult",
    "WindowSpec",
    "WindowStatistic",
    "Settings",
    "get_settings",
    "set_settings",
    "PopGenHubError",
    "InputValidationError",
    "ConfigurationError",
    "WindowSliceError",
    "AlignmentFormatError",
]
