"""Tests for density grid loaders."""

import numpy as np
import pytest
from PIL import Image

from minutia_screener.errors import InputNotFoundError, UnsupportedFormatError, UsageError
from minutia_screener.loaders import (
    RasterDensityLoader,
    TableDensityLoader,
    get_loader,
    load_density_grid,
)


def write_table(path, rows, header="x,y,count"):
    path.write_text("\n".join([header] + rows) + "\n")
    return path


def test_table_round_trip(tmp_path):
    """Test a sparse table becomes a grid with exactly its cells set."""
    path = write_table(tmp_path / "density.csv", ["0,0,5", "1,1,3"])

    grid = load_density_grid(path, grid_size=4)

    assert grid.shape == (4, 4)
    assert grid.dtype == np.float64
    assert grid[0, 0] == 5.0
    assert grid[1, 1] == 3.0
    assert np.count_nonzero(grid) == 2


def test_table_x_is_column_y_is_row(tmp_path):
    """Test x indexes columns and y indexes rows."""
    path = write_table(tmp_path / "density.csv", ["2,1,7"])

    grid = load_density_grid(path, grid_size=4)

    assert grid[1, 2] == 7.0
    assert grid[2, 1] == 0.0


def test_table_duplicate_coordinates_accumulate(tmp_path):
    """Test repeated coordinates add their counts."""
    path = write_table(tmp_path / "density.csv", ["3,3,2", "3,3,4"])

    grid = load_density_grid(path, grid_size=8)

    assert grid[3, 3] == 6.0


def test_table_header_with_spaces(tmp_path):
    """Test column names are matched after stripping whitespace."""
    path = write_table(tmp_path / "density.csv", ["1,0,2"], header="x, y, count")

    grid = load_density_grid(path, grid_size=4)

    assert grid[0, 1] == 2.0


def test_table_header_only(tmp_path):
    """Test a table without entries yields an all-zero grid."""
    path = write_table(tmp_path / "density.csv", [])

    grid = load_density_grid(path, grid_size=16)

    assert grid.shape == (16, 16)
    assert not grid.any()


def test_table_invalid_content(tmp_path):
    """Test error handling for malformed tables."""
    loader = TableDensityLoader(grid_size=4)

    path = write_table(tmp_path / "outside.csv", ["4,0,1"])
    with pytest.raises(ValueError, match="outside"):
        loader.load(path)

    path = write_table(tmp_path / "negative.csv", ["0,0,-1"])
    with pytest.raises(ValueError, match="Invalid count"):
        loader.load(path)

    path = write_table(tmp_path / "malformed.csv", ["0,a,1"])
    with pytest.raises(ValueError, match="Malformed row"):
        loader.load(path)

    path = write_table(tmp_path / "columns.csv", ["0,0"], header="x,y")
    with pytest.raises(ValueError, match="missing column"):
        loader.load(path)


def test_table_requires_grid_size(tmp_path):
    """Test tables need a grid size of at least 2."""
    path = write_table(tmp_path / "density.csv", ["0,0,1"])

    with pytest.raises(UsageError, match="grid size is required"):
        load_density_grid(path)

    with pytest.raises(UsageError, match="at least 2"):
        load_density_grid(path, grid_size=1)


def test_load_raster(tmp_path):
    """Test pixel values are used as densities without rescaling."""
    pixels = np.arange(16, dtype=np.uint8).reshape(4, 4) * 17
    path = tmp_path / "density.png"
    Image.fromarray(pixels).save(path)

    grid = load_density_grid(path)

    assert grid.dtype == np.float64
    assert np.array_equal(grid, pixels.astype(np.float64))
    assert grid.max() == 255.0


def test_load_raster_converts_to_grayscale(tmp_path):
    """Test color rasters are converted to 8-bit grayscale."""
    path = tmp_path / "density.png"
    Image.new("RGB", (8, 8), color=(255, 255, 255)).save(path)

    grid = RasterDensityLoader().load(path)

    assert grid.shape == (8, 8)
    assert np.all(grid == 255.0)


def test_load_raster_must_be_square(tmp_path):
    """Test non-square rasters are rejected."""
    path = tmp_path / "density.png"
    Image.new("L", (8, 6)).save(path)

    with pytest.raises(ValueError, match="must be square"):
        load_density_grid(path)


def test_load_raster_corrupt(tmp_path):
    """Test undecodable rasters are reported."""
    path = tmp_path / "density.png"
    path.write_bytes(b"not a png")

    with pytest.raises(ValueError, match="Failed to load or verify image"):
        load_density_grid(path)


def test_load_not_found(tmp_path):
    """Test error handling for missing files."""
    with pytest.raises(InputNotFoundError):
        load_density_grid(tmp_path / "missing.csv", grid_size=4)

    # Still a FileNotFoundError for callers that only know the builtin
    with pytest.raises(FileNotFoundError):
        load_density_grid(tmp_path / "missing.png")


def test_load_unsupported_format(tmp_path):
    """Test error handling for unsupported formats."""
    path = tmp_path / "density.txt"
    path.write_text("x,y,count\n0,0,1\n")

    with pytest.raises(UnsupportedFormatError, match="Unsupported input format"):
        load_density_grid(path, grid_size=4)


def test_get_loader_selects_by_extension(tmp_path):
    """Test the loader variant is chosen from the file extension."""
    table = write_table(tmp_path / "density.CSV", ["0,0,1"])
    raster = tmp_path / "density.png"
    Image.new("L", (4, 4)).save(raster)

    table_loader = get_loader(table, grid_size=4)
    assert isinstance(table_loader, TableDensityLoader)
    assert table_loader.grid_size == 4
    assert isinstance(get_loader(raster), RasterDensityLoader)


def test_table_with_byte_order_mark(tmp_path):
    """Test spreadsheet exports starting with a UTF-8 BOM are read."""
    path = tmp_path / "density.csv"
    path.write_bytes(b"\xef\xbb\xbfx,y,count\r\n0,0,5\r\n1,1,3\r\n")

    grid = load_density_grid(path, grid_size=4)

    assert grid[0, 0] == 5.0
    assert grid[1, 1] == 3.0


def test_load_raster_closes_image_files(tmp_path, monkeypatch):
    """Test every image opened while loading is closed again."""
    path = tmp_path / "density.png"
    Image.new("RGB", (8, 8), color=(10, 20, 30)).save(path)

    opened = []
    closed = []
    real_open = Image.open
    real_exit = Image.Image.__exit__

    def tracking_open(*args, **kwargs):
        img = real_open(*args, **kwargs)
        opened.append(img)
        return img

    def tracking_exit(self, *args):
        closed.append(self)
        return real_exit(self, *args)

    monkeypatch.setattr(Image, "open", tracking_open)
    monkeypatch.setattr(Image.Image, "__exit__", tracking_exit)

    grid = RasterDensityLoader().load(path)

    assert grid.shape == (8, 8)
    assert len(opened) == 2
    assert all(any(img is c for c in closed) for img in opened)
