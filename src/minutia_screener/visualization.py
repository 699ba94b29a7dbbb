"""Diagnostic plots for periodicity screening results."""

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from minutia_screener.grids import get_center_coords
from minutia_screener.types import PeriodicityResult

logger = logging.getLogger(__name__)


def create_spectrum_plot(
    result: PeriodicityResult,
    suppression_radius: float,
    output_path: Optional[Path] = None,
    show_plot: bool = True,
) -> None:
    """
    Plot the centered spectrum next to the suppressed spectrum.

    Args:
        result: PeriodicityResult from PeriodicityDetector
        suppression_radius: Radius used for suppression, drawn as a circle
        output_path: Optional path to save plot
        show_plot: Whether to display plot interactively
    """
    fig, (ax_spectrum, ax_suppressed) = plt.subplots(1, 2, figsize=(14, 6))

    verdict = "PERIODIC" if result.periodic else "not periodic"
    fig.suptitle(
        f'Screening of "{Path(result.input_path).name}": {verdict} '
        f'(score {result.score:.5f})',
        fontsize=14,
        fontweight="bold",
    )

    center_y, center_x = get_center_coords(result.spectrum.shape)

    # log1p keeps the zeroed disk at 0 and compresses the DC peak
    im1 = ax_spectrum.imshow(np.log1p(result.spectrum), cmap="hot", interpolation="nearest")
    ax_spectrum.set_title("Centered Spectrum (log)", fontweight="bold")
    ax_spectrum.set_xlabel("Frequency (col)")
    ax_spectrum.set_ylabel("Frequency (row)")
    plt.colorbar(im1, ax=ax_spectrum, fraction=0.046)

    im2 = ax_suppressed.imshow(result.suppressed_spectrum, cmap="hot", interpolation="nearest")
    ax_suppressed.set_title("Suppressed Spectrum", fontweight="bold")
    ax_suppressed.set_xlabel("Frequency (col)")
    plt.colorbar(im2, ax=ax_suppressed, fraction=0.046)

    ax_suppressed.add_patch(
        plt.Circle(
            (center_x, center_y),
            suppression_radius,
            color="cyan",
            fill=False,
            linestyle="--",
            linewidth=1,
        )
    )

    for i, peak in enumerate(result.peaks, 1):
        ax_suppressed.annotate(
            f"#{i}",
            (peak.col, peak.row),
            xytext=(5, 5),
            textcoords="offset points",
            color="white",
            fontsize=9,
            fontweight="bold",
            bbox=dict(boxstyle="round,pad=0.3", facecolor="black", alpha=0.7),
        )

    if output_path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        logger.info(f"Saved spectrum plot to {output_path}")

    if show_plot:
        # Only show if backend supports it
        backend = plt.get_backend()
        if backend.lower() != "agg":
            plt.show()
        else:
            logger.debug(f"Skipping plt.show() - non-interactive backend: {backend}")
    else:
        plt.close(fig)
