"""Threshold decision on the suppressed spectrum and its text report."""

from typing import List

import numpy as np

from minutia_screener.constants import PERIODICITY_THRESHOLD, SCORE_DECIMALS
from minutia_screener.types import Decision

__all__ = ['decide', 'format_report']


def decide(suppressed: np.ndarray) -> Decision:
    """Score is the global max; periodic when score >= PERIODICITY_THRESHOLD."""
    score = float(np.max(suppressed))
    return Decision(periodic=score >= PERIODICITY_THRESHOLD, score=score)


def format_report(input_path: str, decision: Decision) -> List[str]:
    """Three report lines: input, decision (true/false), score."""
    return [
        str(input_path),
        "true" if decision.periodic else "false",
        f"{decision.score:.{SCORE_DECIMALS}f}",
    ]
