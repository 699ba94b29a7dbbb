"""Periodicity Detector - runs the full screening pipeline on one density map."""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
from pydantic import Field
from pydantic.dataclasses import dataclass

from minutia_screener.constants import DEFAULT_MAX_PEAKS, DEFAULT_SUPPRESSION_RADIUS
from minutia_screener.decision import decide
from minutia_screener.grids import validate_density_grid
from minutia_screener.loaders import load_density_grid
from minutia_screener.spectrum import SpectrumProcessor
from minutia_screener.suppression import find_spectral_peaks, suppress_low_frequencies
from minutia_screener.types import PeriodicityResult
from minutia_screener.windowing import apply_window

logger = logging.getLogger(__name__)

__all__ = ['PeriodicityDetector']


@dataclass
class PeriodicityDetector:
    """
    Screens minutia density maps for grid-like placement.

    Sensor artifacts place minutiae on a regular lattice, which shows up as
    isolated peaks in the frequency domain. The grid is windowed, transformed,
    normalized by its DC term and stripped of low frequencies; the largest
    remaining magnitude is the periodicity score.

    The threshold is fixed, but the noise floor of a random map is not: its
    residual spectrum shrinks roughly like 1 / (N * sqrt(mean count)). Small
    or sparse random maps (e.g. Poisson counts with mean 2 on 256 x 256) can
    score above the threshold; dense maps (mean 100 on 512 x 512) stay well
    below it. ``normalized_score`` helps compare maps of different density.

    Instances hold only configuration, so one detector can screen any number
    of maps independently.
    """

    suppression_radius: int = Field(default=DEFAULT_SUPPRESSION_RADIUS, ge=0)
    max_peaks: int = Field(default=DEFAULT_MAX_PEAKS, ge=0)
    normalize_by_count: bool = Field(default=False)

    def __post_init__(self):
        """Initialize sub-processors."""
        self.spectrum_processor = SpectrumProcessor()

    def analyze_grid(
        self, grid: np.ndarray, input_path: Union[str, Path] = "<array>"
    ) -> PeriodicityResult:
        """
        Screen an in-memory density grid.

        Args:
            grid: Square, non-negative density grid (N, N)
            input_path: Label reported with the result

        Returns:
            PeriodicityResult with decision, score, peaks and spectra

        Raises:
            DegenerateInputError: If the grid is all zeros
            UsageError: If the grid is smaller than 2x2
            ValueError: If the grid is not square, finite and non-negative
        """
        grid = validate_density_grid(grid)
        n = grid.shape[0]

        windowed = apply_window(grid)
        spectrum = self.spectrum_processor.process(windowed)
        suppressed = suppress_low_frequencies(spectrum, self.suppression_radius)
        decision = decide(suppressed)
        peaks = find_spectral_peaks(suppressed, self.max_peaks)

        minutia_count = float(grid.sum())
        normalized_score = None
        if self.normalize_by_count:
            normalized_score = decision.score * float(np.sqrt(minutia_count))

        result = PeriodicityResult(
            input_path=str(input_path),
            grid_size=n,
            periodic=decision.periodic,
            score=decision.score,
            peaks=peaks,
            spectrum=spectrum,
            suppressed_spectrum=suppressed,
            minutia_count=minutia_count,
            normalized_score=normalized_score,
        )

        logger.info(
            f"Screening complete: periodic={result.periodic}, score={result.score:.5f}, "
            f"grid={n}x{n}, count={minutia_count:.6g}"
        )

        return result

    def analyze(
        self, input_path: Union[str, Path], grid_size: Optional[int] = None
    ) -> PeriodicityResult:
        """
        Load and screen a density map from disk.

        Args:
            input_path: ``.csv`` density table or ``.png`` density image
            grid_size: Side length, required for density tables

        Returns:
            PeriodicityResult for the map
        """
        logger.info(f"Screening density map: {input_path}")
        grid = load_density_grid(input_path, grid_size)
        return self.analyze_grid(grid, input_path)

    def batch_analyze(
        self, input_paths: list[Union[str, Path]], grid_size: Optional[int] = None
    ) -> list[PeriodicityResult]:
        """Screen several maps; every map is processed independently."""
        logger.info(f"Batch screening {len(input_paths)} density maps")
        return [self.analyze(path, grid_size) for path in input_paths]
