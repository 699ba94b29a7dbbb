"""Minutia Screener - periodic minutia placement detection"""

__version__ = "0.1.0"

from .constants import PERIODICITY_THRESHOLD
from .detector import PeriodicityDetector
from .errors import (
    DegenerateInputError,
    InputNotFoundError,
    ScreenerError,
    UnsupportedFormatError,
    UsageError,
)
from .loaders import load_density_grid
from .types import Decision, PeriodicityResult, SpectralPeak

__all__ = [
    "PERIODICITY_THRESHOLD",
    "PeriodicityDetector",
    "PeriodicityResult",
    "Decision",
    "SpectralPeak",
    "load_density_grid",
    "ScreenerError",
    "UsageError",
    "InputNotFoundError",
    "UnsupportedFormatError",
    "DegenerateInputError",
]
