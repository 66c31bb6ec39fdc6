"""Code coverage gate.

Current coverage is read from a JSON summary (as written by istanbul's
``json-summary`` reporter) and compared against the baseline recorded in
the manifest. Any drop fails the gate; there is no tolerance band.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pr_bumper.exceptions import CoverageDroppedError, MissingCoverageInfoError

logger = logging.getLogger(__name__)

#: Returned by coverage sources when no report is available.
NO_COVERAGE = -1.0

_CATEGORIES = ("statements", "branches", "functions", "lines")


def _is_count(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def get_current_coverage(summary_file: Path) -> float:
    """Compute the aggregate coverage percentage from a JSON summary.

    Covered and total counts of every category present under ``total``
    are summed before dividing.

    Returns:
        Percentage rounded to two places, or ``NO_COVERAGE``
    """
    if not summary_file.is_file():
        logger.debug("No coverage summary at %s", summary_file)
        return NO_COVERAGE

    try:
        summary = json.loads(summary_file.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Could not parse coverage summary %s", summary_file)
        return NO_COVERAGE

    totals = summary.get("total") if isinstance(summary, dict) else None
    if not isinstance(totals, dict):
        logger.warning("No totals in coverage summary %s", summary_file)
        return NO_COVERAGE

    covered = total = 0
    for category in _CATEGORIES:
        counts = totals.get(category)
        if not isinstance(counts, dict):
            continue
        category_covered = counts.get("covered", 0)
        category_total = counts.get("total", 0)
        if not (_is_count(category_covered) and _is_count(category_total)):
            continue
        covered += category_covered
        total += category_total

    if total == 0:
        return NO_COVERAGE

    return round(100 * covered / total, 2)


@dataclass(frozen=True)
class FileCoverageSource:
    """Coverage source backed by a summary file on disk."""

    summary_file: Path

    def get_current_coverage(self) -> float:
        return get_current_coverage(self.summary_file)


def format_coverage_message(current: float, baseline: float) -> str:
    """Describe how coverage moved relative to the baseline."""
    delta = current - baseline

    if delta < 0:
        return f"Code Coverage: `{current:.2f}%` (dropped `{-delta:.2f}%` from `{baseline:.2f}%`)"
    if delta == 0:
        return f"Code Coverage: `{current:.2f}%` (no change)"
    return f"Code Coverage: `{current:.2f}%` (increased `{delta:.2f}%` from `{baseline:.2f}%`)"


def evaluate_coverage(current: float, baseline: float | None) -> str:
    """Run the coverage gate.

    Args:
        current: Current coverage, or ``NO_COVERAGE``
        baseline: Recorded baseline coverage, if any

    Returns:
        Informational message when coverage held or increased

    Raises:
        MissingCoverageInfoError: If baseline or current coverage is unavailable
        CoverageDroppedError: If current coverage is below the baseline
    """
    if baseline is None:
        raise MissingCoverageInfoError("baseline")

    if current == NO_COVERAGE:
        raise MissingCoverageInfoError("current")

    message = format_coverage_message(current, baseline)
    if current < baseline:
        raise CoverageDroppedError(message, current=current, baseline=baseline)

    return message
