"""Density grid loaders for coordinate/count tables and grayscale rasters."""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image
from pydantic import Field
from pydantic.dataclasses import dataclass

from minutia_screener.constants import (
    MIN_GRID_SIZE,
    RASTER_SUFFIXES,
    TABLE_COLUMNS,
    TABLE_SUFFIXES,
)
from minutia_screener.errors import InputNotFoundError, UnsupportedFormatError, UsageError

logger = logging.getLogger(__name__)

__all__ = [
    'DensityLoader',
    'TableDensityLoader',
    'RasterDensityLoader',
    'get_loader',
    'load_density_grid',
]


class DensityLoader(ABC):
    """Produces an N x N density grid from a file on disk."""

    def load(self, path: Union[str, Path]) -> np.ndarray:
        """
        Load a density grid.

        Args:
            path: Path to the input file

        Returns:
            Square float64 density grid

        Raises:
            InputNotFoundError: If the file does not exist
            ValueError: If the file content cannot be turned into a grid
        """
        path = resolve_input(path)
        grid = self.read(path)
        logger.debug(
            f"Loaded {grid.shape[0]}x{grid.shape[1]} density grid from {path} "
            f"(total count {grid.sum():.6g})"
        )
        return grid

    @abstractmethod
    def read(self, path: Path) -> np.ndarray:
        """Read an existing file into a density grid."""


@dataclass
class TableDensityLoader(DensityLoader):
    """Sparse ``x,y,count`` table; counts accumulate into ``grid[y, x]``."""

    grid_size: int = Field(ge=MIN_GRID_SIZE)

    def read(self, path: Path) -> np.ndarray:
        grid = np.zeros((self.grid_size, self.grid_size), dtype=np.float64)

        # utf-8-sig drops the byte order mark spreadsheet exports put first
        with open(path, 'r', newline='', encoding='utf-8-sig') as f:
            reader = csv.DictReader(f)
            fieldnames = [name.strip() for name in reader.fieldnames or []]
            missing = [column for column in TABLE_COLUMNS if column not in fieldnames]
            if missing:
                raise ValueError(
                    f"Density table {path} is missing column(s): {', '.join(missing)}"
                )
            reader.fieldnames = fieldnames

            rows = 0
            for line_number, row in enumerate(reader, start=2):
                x, y, count = self._parse_row(path, line_number, row)
                grid[y, x] += count
                rows += 1

        if rows == 0:
            logger.warning(f"Density table {path} has no entries")

        return grid

    def _parse_row(self, path: Path, line_number: int, row: dict):
        try:
            x = int(row['x'])
            y = int(row['y'])
            count = float(row['count'])
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed row at {path}:{line_number}: {e}")

        if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
            raise ValueError(
                f"Coordinate ({x}, {y}) at {path}:{line_number} is outside "
                f"a {self.grid_size}x{self.grid_size} grid"
            )
        if not np.isfinite(count) or count < 0:
            raise ValueError(f"Invalid count {count} at {path}:{line_number}")

        return x, y, count


@dataclass
class RasterDensityLoader(DensityLoader):
    """8-bit grayscale raster whose pixel values [0, 255] are the densities."""

    def read(self, path: Path) -> np.ndarray:
        try:
            with Image.open(path) as img:
                img.verify()
        except Exception as e:
            raise ValueError(f"Failed to load or verify image {path}: {e}")

        # verify() leaves the image unusable, so open it again
        with Image.open(path) as img:
            if img.mode != "L":
                logger.debug(f"Converting image from {img.mode} to grayscale")
                grid = np.array(img.convert("L"), dtype=np.uint8)
            else:
                grid = np.array(img, dtype=np.uint8)

        grid = grid.astype(np.float64)

        if grid.shape[0] != grid.shape[1]:
            raise ValueError(f"Density image {path} must be square, got {grid.shape}")

        return grid


def resolve_input(path: Union[str, Path]) -> Path:
    """Return the input as a Path, failing early if it does not exist."""
    path = Path(path)
    if not path.exists():
        raise InputNotFoundError(f"Input not found: {path}")
    return path


def get_loader(path: Union[str, Path], grid_size: Optional[int] = None) -> DensityLoader:
    """
    Pick the loader for an input by its file extension.

    Args:
        path: Path to a ``.csv`` density table or ``.png`` density image
        grid_size: Side length, required for tables and ignored for rasters

    Returns:
        A loader ready to ``load(path)``

    Raises:
        InputNotFoundError: If the file does not exist
        UnsupportedFormatError: If the extension is not recognized
        UsageError: If a table is given without a valid grid size
    """
    path = resolve_input(path)
    suffix = path.suffix.lower()

    if suffix in TABLE_SUFFIXES:
        if grid_size is None:
            raise UsageError(f"A grid size is required for density table {path}")
        if grid_size < MIN_GRID_SIZE:
            raise UsageError(f"Grid size must be at least {MIN_GRID_SIZE}, got {grid_size}")
        return TableDensityLoader(grid_size=grid_size)

    if suffix in RASTER_SUFFIXES:
        if grid_size is not None:
            logger.warning(f"Ignoring grid size {grid_size} for density image {path}")
        return RasterDensityLoader()

    raise UnsupportedFormatError(f"Unsupported input format: {path.suffix}")


def load_density_grid(path: Union[str, Path], grid_size: Optional[int] = None) -> np.ndarray:
    """Load a density grid from a table or a raster, selected by extension."""
    return get_loader(path, grid_size).load(path)
