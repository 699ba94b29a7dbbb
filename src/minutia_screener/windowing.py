"""Raised-sine windowing to reduce spectral leakage from grid edges."""

import logging

import numpy as np

from minutia_screener.constants import MIN_GRID_SIZE
from minutia_screener.errors import UsageError
from minutia_screener.grids import validate_square_grid

logger = logging.getLogger(__name__)

__all__ = ['raised_sine', 'window_2d', 'apply_window']


def raised_sine(n: int) -> np.ndarray:
    """1D weights sin(pi * i / (n - 1)): 0 at both ends, 1 in the middle."""
    if n < MIN_GRID_SIZE:
        raise UsageError(f"Window length must be at least {MIN_GRID_SIZE}, got {n}")
    # Fold onto the leading half so both ends are exactly 0, not sin(pi)
    i = np.arange(n, dtype=np.float64)
    return np.sin(np.pi * np.minimum(i, n - 1 - i) / (n - 1))


def window_2d(n: int) -> np.ndarray:
    """Separable N x N window, the outer product of two raised sines."""
    weights = raised_sine(n)
    return np.outer(weights, weights)


def apply_window(grid: np.ndarray) -> np.ndarray:
    """
    Taper a square density grid towards zero at its borders.

    A hard-edged grid puts a bright cross through its spectrum; tapering the
    edges keeps genuine periodic peaks visible.

    Args:
        grid: Square density grid (N, N)

    Returns:
        New windowed grid of the same shape (float64)
    """
    n = validate_square_grid(grid)
    windowed = grid.astype(np.float64) * window_2d(n)
    logger.debug(f"Applied {n}x{n} raised-sine window")
    return windowed
