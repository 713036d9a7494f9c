"""Population Genetics Hub - Summary statistics for multiple sequence alignments."""

__version__ = "0.1.0"
__author__ = "Population Genetics Hub Team"

from popgen_hub.core.types import (
    Alignment,
    AnalysisMode,
    StatisticBundle,
    WindowSpec,
)
from popgen_hub.core.config import Settings
from popgen_hub.popgen.modes import AnalysisModeController

__all__ = [
    "__version__",
    "Alignment",
    "AnalysisMode",
    "StatisticBundle",
    "WindowSpec",
    "Settings",
    "AnalysisModeController",
]
