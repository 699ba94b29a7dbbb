"""Basic usage example for PeriodicityDetector."""

import logging
import sys
from pathlib import Path

import numpy as np

from minutia_screener import PeriodicityDetector

# Configure logging
logging.basicConfig(level=logging.INFO)


def synthetic_maps(size=512, seed=0):
    """Build a natural-looking map and a sensor-lattice map."""
    rng = np.random.default_rng(seed)

    # Dense enough that random placement stays under the fixed threshold
    natural = rng.poisson(lam=100.0, size=(size, size)).astype(np.float64)

    lattice = np.zeros((size, size))
    lattice[::8, ::8] = 50.0

    return {"natural": natural, "lattice": lattice}


def screen_synthetic_maps():
    """Screen two in-memory density maps and print their scores."""
    detector = PeriodicityDetector(max_peaks=3)

    for name, grid in synthetic_maps().items():
        result = detector.analyze_grid(grid, name)
        print(f"\n{name}: periodic={result.periodic}, score={result.score:.5f}")
        for i, peak in enumerate(result.peaks, 1):
            print(
                f"  {i}. Position: ({peak.row}, {peak.col}), "
                f"Magnitude: {peak.magnitude:.5f}, "
                f"Period: {peak.period:.2f} cells"
            )


def screen_file(path: Path, grid_size=None):
    """Screen a density table or image from disk."""
    if not path.exists():
        print(f"Density map not found: {path}")
        return

    result = PeriodicityDetector().analyze(path, grid_size)
    print(f"\n{result.input_path}: periodic={result.periodic}, score={result.score:.5f}")


if __name__ == "__main__":
    print("=" * 60)
    print("Minutia Screener - Basic Usage Example")
    print("=" * 60)

    screen_synthetic_maps()

    if len(sys.argv) > 1:
        grid_size = int(sys.argv[2]) if len(sys.argv) > 2 else None
        screen_file(Path(sys.argv[1]), grid_size)
