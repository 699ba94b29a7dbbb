"""Shared result types for periodicity screening."""

from typing import List, NamedTuple, Optional

import numpy as np


class Decision(NamedTuple):
    """Outcome of the Decision Stage."""

    periodic: bool
    score: float  # Global max of the suppressed spectrum


class SpectralPeak(NamedTuple):
    """A local maximum in the suppressed spectrum."""

    row: int
    col: int
    magnitude: float  # DC-normalized magnitude
    distance_from_center: float  # In grid-index units
    period: float  # Spatial period in grid cells (N / distance)


class PeriodicityResult(NamedTuple):
    """Complete result of screening one density grid."""

    input_path: str
    grid_size: int
    periodic: bool
    score: float
    peaks: List[SpectralPeak]
    spectrum: np.ndarray  # Centered, DC-normalized magnitude
    suppressed_spectrum: np.ndarray
    minutia_count: float  # Sum of the density grid
    normalized_score: Optional[float]  # Only set when normalization is requested
