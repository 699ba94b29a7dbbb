"""Low-frequency suppression and peak listing on centered spectra."""

import logging
from typing import List, Tuple

import numpy as np
from scipy.ndimage import maximum_filter

from minutia_screener.constants import (
    DEFAULT_MAX_PEAKS,
    DEFAULT_SUPPRESSION_RADIUS,
    PEAK_NEIGHBORHOOD_SIZE,
)
from minutia_screener.grids import distance_from_center, validate_square_grid
from minutia_screener.types import SpectralPeak

logger = logging.getLogger(__name__)

__all__ = ['low_frequency_mask', 'suppress_low_frequencies', 'find_spectral_peaks']


def low_frequency_mask(shape: Tuple[int, int], radius: float) -> np.ndarray:
    """
    Create a mask of the disk around the spectrum center.

    Args:
        shape: Shape of the centered spectrum (N, N)
        radius: Disk radius in grid cells

    Returns:
        Boolean mask, True where distance from center is <= radius
    """
    if radius < 0:
        raise ValueError(f"Suppression radius must be non-negative, got {radius}")

    mask = distance_from_center(shape) <= radius

    logger.debug(
        f"Low-frequency mask: {mask.sum()} cells ({mask.sum() / mask.size * 100:.1f}%) "
        f"within radius {radius}"
    )
    return mask


def suppress_low_frequencies(
    spectrum: np.ndarray, radius: float = DEFAULT_SUPPRESSION_RADIUS
) -> np.ndarray:
    """
    Zero the DC term and everything within ``radius`` of it.

    Broad density gradients live near DC and would otherwise always win the
    maximum. Cells outside the disk are copied unchanged.

    Args:
        spectrum: Centered spectrum (N, N)
        radius: Disk radius in grid cells

    Returns:
        New suppressed spectrum
    """
    validate_square_grid(spectrum)
    suppressed = spectrum.copy()
    suppressed[low_frequency_mask(spectrum.shape, radius)] = 0.0
    return suppressed


def find_spectral_peaks(
    suppressed: np.ndarray, max_peaks: int = DEFAULT_MAX_PEAKS
) -> List[SpectralPeak]:
    """
    List the strongest local maxima of a suppressed spectrum.

    Diagnostic only; the periodicity decision uses the global maximum.
    A centered magnitude spectrum of a real grid is point-symmetric, so
    peaks usually come in mirrored pairs.

    Args:
        suppressed: Suppressed centered spectrum (N, N)
        max_peaks: Maximum number of peaks to return

    Returns:
        Peaks sorted by magnitude, strongest first
    """
    if max_peaks <= 0:
        return []

    n = validate_square_grid(suppressed)
    local_maxima = maximum_filter(suppressed, size=PEAK_NEIGHBORHOOD_SIZE) == suppressed
    peak_mask = local_maxima & (suppressed > 0)

    distances = distance_from_center(suppressed.shape)
    peaks = []
    for row, col in np.argwhere(peak_mask):
        distance = float(distances[row, col])
        peaks.append(
            SpectralPeak(
                row=int(row),
                col=int(col),
                magnitude=float(suppressed[row, col]),
                distance_from_center=distance,
                period=n / distance if distance > 0 else float("inf"),
            )
        )

    peaks.sort(key=lambda p: p.magnitude, reverse=True)
    peaks = peaks[:max_peaks]

    logger.debug(f"Found {len(peaks)} spectral peaks outside the suppressed disk")
    return peaks
