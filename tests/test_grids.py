"""Tests for grid and coordinate helpers."""

import numpy as np
import pytest

from minutia_screener.errors import UsageError
from minutia_screener.grids import (
    centered_source_index,
    distance_from_center,
    get_center_coords,
    validate_density_grid,
    validate_square_grid,
)


def test_validate_square_grid_returns_size():
    """Test that a square grid reports its side length."""
    assert validate_square_grid(np.zeros((8, 8))) == 8


def test_validate_square_grid_input_validation():
    """Test input validation for grid shapes."""
    with pytest.raises(ValueError, match="Grid array is empty"):
        validate_square_grid(np.array([]))

    with pytest.raises(ValueError, match="Expected 2D array"):
        validate_square_grid(np.array([1, 2, 3]))

    with pytest.raises(ValueError, match="Expected square grid"):
        validate_square_grid(np.zeros((4, 6)))

    with pytest.raises(UsageError, match="at least 2"):
        validate_square_grid(np.zeros((1, 1)))


def test_validate_density_grid_converts_to_float64():
    """Test integer count grids are converted to float64."""
    grid = validate_density_grid(np.ones((4, 4), dtype=np.int32))
    assert grid.dtype == np.float64


def test_validate_density_grid_rejects_bad_values():
    """Test negative and non-finite densities are rejected."""
    grid = np.ones((4, 4))
    grid[1, 2] = -1.0
    with pytest.raises(ValueError, match="negative"):
        validate_density_grid(grid)

    grid = np.ones((4, 4))
    grid[0, 0] = np.nan
    with pytest.raises(ValueError, match="non-finite"):
        validate_density_grid(grid)


def test_get_center_coords():
    """Test center coordinates for even and odd sizes."""
    assert get_center_coords((64, 64)) == (32, 32)
    assert get_center_coords((7, 7)) == (3, 3)


def test_centered_source_index():
    """Test the centering remap for scalars and arrays."""
    assert centered_source_index(4, 8) == 0
    assert centered_source_index(0, 8) == 4
    assert centered_source_index(3, 8) == 7

    indices = centered_source_index(np.arange(7), 7)
    assert np.all(indices >= 0)
    assert sorted(indices.tolist()) == list(range(7))
    assert indices[3] == 0


def test_distance_from_center():
    """Test distances are measured in grid cells from (N//2, N//2)."""
    distances = distance_from_center((8, 8))
    assert distances.shape == (8, 8)
    assert distances[4, 4] == 0.0
    assert distances[4, 7] == 3.0
    assert distances[0, 4] == 4.0
    assert distances[1, 0] == pytest.approx(5.0)
