"""Grid and coordinate helpers shared by the pipeline stages."""

import logging
from typing import Tuple

import numpy as np

from minutia_screener.constants import MIN_GRID_SIZE
from minutia_screener.errors import UsageError

logger = logging.getLogger(__name__)

__all__ = [
    'validate_square_grid',
    'validate_density_grid',
    'get_center_coords',
    'centered_source_index',
    'distance_from_center',
]


def validate_square_grid(grid: np.ndarray) -> int:
    """
    Check that a grid is a non-empty square 2D array.

    Args:
        grid: Array to check

    Returns:
        Side length N

    Raises:
        ValueError: If the array is empty, not 2D or not square
        UsageError: If N is smaller than the minimum grid size
    """
    if grid.size == 0:
        raise ValueError("Grid array is empty")
    if grid.ndim != 2:
        raise ValueError(f"Expected 2D array, got {grid.ndim}D array with shape {grid.shape}")
    rows, cols = grid.shape
    if rows != cols:
        raise ValueError(f"Expected square grid, got shape {grid.shape}")
    if rows < MIN_GRID_SIZE:
        raise UsageError(f"Grid size must be at least {MIN_GRID_SIZE}, got {rows}")
    return rows


def validate_density_grid(grid: np.ndarray) -> np.ndarray:
    """
    Validate a density grid and return it as float64.

    Values must be finite and non-negative on top of the square-shape checks.
    """
    grid = np.asarray(grid)
    validate_square_grid(grid)

    if grid.dtype != np.float64:
        logger.debug(f"Converting density grid from {grid.dtype} to float64")
        grid = grid.astype(np.float64)

    if not np.all(np.isfinite(grid)):
        raise ValueError("Density grid contains non-finite values")
    if np.any(grid < 0):
        raise ValueError("Density grid contains negative values")

    return grid


def get_center_coords(shape: Tuple[int, int]) -> Tuple[int, int]:
    """Get the (row, col) of the zero-frequency cell in a centered spectrum."""
    return shape[0] // 2, shape[1] // 2


def centered_source_index(index, size: int):
    """
    Map a centered-spectrum index back to its uncentered position.

    Cell ``i`` of the centered spectrum holds cell ``(i - size // 2) mod size``
    of the raw one. Python's ``%`` never returns a negative value, so this
    also works element-wise on integer arrays.
    """
    return (index - size // 2) % size


def distance_from_center(shape: Tuple[int, int]) -> np.ndarray:
    """Euclidean distance of every cell from the spectrum center, in cells."""
    h, w = shape
    center_y, center_x = get_center_coords(shape)
    y_coords, x_coords = np.ogrid[:h, :w]
    return np.sqrt((y_coords - center_y) ** 2 + (x_coords - center_x) ** 2)
