"""Command-line entry point for minutia density periodicity screening.

Usage:
    minutia-screener density.csv 512
    minutia-screener density.png
    minutia-screener density.png --plot outputs/spectrum.png
"""

import argparse
import logging
import sys
from pathlib import Path

from minutia_screener.constants import SCORE_DECIMALS
from minutia_screener.decision import format_report
from minutia_screener.detector import PeriodicityDetector
from minutia_screener.errors import ScreenerError, UsageError
from minutia_screener.loaders import load_density_grid
from minutia_screener.types import Decision

logger = logging.getLogger(__name__)

EXIT_NOT_PERIODIC = 0
EXIT_PERIODIC = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="minutia-screener",
        description=(
            "Detect grid-like (periodic) minutia placement in a fingerprint "
            "minutia density map. Exits 1 if periodic, 0 otherwise."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  minutia-screener density.csv 512
  minutia-screener density.png
  minutia-screener density.png --plot outputs/spectrum.png
        """,
    )

    parser.add_argument(
        "input_path",
        type=str,
        help="Density table (.csv with x,y,count columns) or grayscale density image (.png)",
    )

    parser.add_argument(
        "grid_size",
        type=int,
        nargs="?",
        default=None,
        help="Grid side length, required for .csv density tables",
    )

    parser.add_argument(
        "--plot",
        type=str,
        default=None,
        metavar="PATH",
        help="Save a diagnostic spectrum plot to PATH",
    )

    parser.add_argument(
        "--normalized",
        action="store_true",
        help="Also print the score normalized by the total minutia count",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr so stdout only carries the report."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    """Main CLI entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    detector = PeriodicityDetector(normalize_by_count=args.normalized)

    try:
        grid = load_density_grid(args.input_path, args.grid_size)
        result = detector.analyze_grid(grid, args.input_path)
    except UsageError as e:
        # parser.error exits with status 2 after printing usage
        parser.error(str(e))
    except (ScreenerError, ValueError) as e:
        logger.error(f"Screening failed: {e}")
        return EXIT_ERROR

    for line in format_report(args.input_path, Decision(result.periodic, result.score)):
        print(line)
    if args.normalized:
        print(f"{result.normalized_score:.{SCORE_DECIMALS}f}")

    if args.plot:
        import matplotlib

        # Non-interactive backend, the plot is only written to disk
        matplotlib.use("Agg")
        from minutia_screener.visualization import create_spectrum_plot

        create_spectrum_plot(
            result,
            detector.suppression_radius,
            output_path=Path(args.plot),
            show_plot=False,
        )

    return EXIT_PERIODIC if result.periodic else EXIT_NOT_PERIODIC


if __name__ == "__main__":
    sys.exit(main())
