"""2D DFT magnitude spectrum, DC-normalized and centered."""

import logging

import numpy as np
from pydantic.dataclasses import dataclass

from minutia_screener.errors import DegenerateInputError
from minutia_screener.grids import centered_source_index, validate_square_grid

logger = logging.getLogger(__name__)

__all__ = ['SpectrumProcessor']


@dataclass
class SpectrumProcessor:
    """Turns a windowed density grid into a centered, DC-normalized spectrum."""

    def compute_dft(self, windowed: np.ndarray) -> np.ndarray:
        """
        Compute the unscaled forward 2D DFT in double precision.

        Args:
            windowed: Windowed density grid (N, N)

        Returns:
            Complex-valued FFT result (N, N), complex128

        Raises:
            ValueError: If the grid is empty, not 2D or not square
        """
        validate_square_grid(windowed)

        if windowed.dtype != np.float64:
            logger.warning(f"Converting grid from {windowed.dtype} to float64")
            windowed = windowed.astype(np.float64)

        logger.debug(f"Computing 2D FFT for grid shape: {windowed.shape}")
        return np.fft.fft2(windowed)

    def compute_magnitude(self, fft_result: np.ndarray) -> np.ndarray:
        """Euclidean norm of every complex coefficient."""
        return np.abs(fft_result)

    def normalize_by_dc(self, magnitude: np.ndarray) -> np.ndarray:
        """
        Divide the magnitude spectrum by its DC term at (0, 0).

        Must run before centering, while DC is still at the origin.

        Raises:
            DegenerateInputError: If the DC term is zero (empty density grid)
        """
        dc = magnitude[0, 0]
        if not np.isfinite(dc) or dc == 0:
            raise DegenerateInputError(
                f"DC term is {dc}; density grid is empty or all zero"
            )

        normalized = magnitude / dc
        logger.debug(f"Normalized spectrum by DC term {dc:.6g}")
        return normalized

    def center_spectrum(self, spectrum: np.ndarray) -> np.ndarray:
        """
        Move the zero-frequency term from (0, 0) to (N // 2, N // 2).

        Rows are remapped first, then columns, with each output index ``i``
        reading source index ``(i - N // 2) mod N``.
        """
        n = validate_square_grid(spectrum)
        source = centered_source_index(np.arange(n), n)
        centered = spectrum[source, :][:, source]
        logger.debug("Centered spectrum on the DC component")
        return centered

    def process(self, windowed: np.ndarray) -> np.ndarray:
        """
        Full Spectral Transform Stage: DFT, magnitude, DC-normalize, center.

        Args:
            windowed: Windowed density grid (N, N)

        Returns:
            Non-negative float64 spectrum (N, N) with 1.0 at the center

        Raises:
            DegenerateInputError: If the grid has no energy at DC
        """
        fft_result = self.compute_dft(windowed)
        magnitude = self.compute_magnitude(fft_result)
        normalized = self.normalize_by_dc(magnitude)
        return self.center_spectrum(normalized)
