"""Tests for the code coverage gate."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from pr_bumper.core.coverage import (
    NO_COVERAGE,
    FileCoverageSource,
    evaluate_coverage,
    format_coverage_message,
    get_current_coverage,
)
from pr_bumper.exceptions import CoverageDroppedError, MissingCoverageInfoError

if TYPE_CHECKING:
    from pathlib import Path


def _write_summary(path: Path, **totals: dict[str, int]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"total": totals}))
    return path


class TestGetCurrentCoverage:
    """Tests for get_current_coverage()."""

    def test_missing_file(self, tmp_path: Path):
        assert get_current_coverage(tmp_path / "nope.json") == NO_COVERAGE

    def test_aggregates_categories(self, tmp_path: Path):
        """Covered and total counts are summed across categories."""
        summary = _write_summary(
            tmp_path / "coverage" / "coverage-summary.json",
            statements={"total": 100, "covered": 90},
            branches={"total": 50, "covered": 40},
            functions={"total": 30, "covered": 30},
            lines={"total": 120, "covered": 100},
        )

        # 260 / 300
        assert get_current_coverage(summary) == 86.67

    def test_no_totals(self, tmp_path: Path):
        summary = _write_summary(tmp_path / "summary.json")
        assert get_current_coverage(summary) == NO_COVERAGE

    def test_invalid_json(self, tmp_path: Path):
        summary = tmp_path / "summary.json"
        summary.write_text("{not json")
        assert get_current_coverage(summary) == NO_COVERAGE

    @pytest.mark.parametrize(
        "content",
        ['{"total": [1, 2]}', '{"total": "all of it"}', "[]", "null"],
        ids=["list-totals", "string-totals", "list-summary", "null-summary"],
    )
    def test_unusable_summary(self, content: str, tmp_path: Path):
        summary = tmp_path / "summary.json"
        summary.write_text(content)
        assert get_current_coverage(summary) == NO_COVERAGE

    def test_not_utf8(self, tmp_path: Path):
        summary = tmp_path / "summary.json"
        summary.write_bytes(b"\xff\xfe{")
        assert get_current_coverage(summary) == NO_COVERAGE

    def test_ignores_non_numeric_counts(self, tmp_path: Path):
        """Categories with malformed counts are left out of the aggregate."""
        summary = _write_summary(
            tmp_path / "summary.json",
            statements={"total": "100", "covered": 90},
            branches={"total": 10, "covered": None},
            lines={"total": 4, "covered": 3},
        )

        assert get_current_coverage(summary) == 75.0

    def test_file_source(self, tmp_path: Path):
        summary = _write_summary(tmp_path / "summary.json", lines={"total": 4, "covered": 3})
        assert FileCoverageSource(summary).get_current_coverage() == 75.0


class TestFormatCoverageMessage:
    """Tests for format_coverage_message()."""

    def test_dropped(self):
        assert (
            format_coverage_message(84.99, 85.93)
            == "Code Coverage: `84.99%` (dropped `0.94%` from `85.93%`)"
        )

    def test_no_change(self):
        assert format_coverage_message(85.93, 85.93) == "Code Coverage: `85.93%` (no change)"

    def test_increased(self):
        assert (
            format_coverage_message(88.01, 85.93)
            == "Code Coverage: `88.01%` (increased `2.08%` from `85.93%`)"
        )

    def test_two_decimal_places(self):
        assert format_coverage_message(90, 80) == (
            "Code Coverage: `90.00%` (increased `10.00%` from `80.00%`)"
        )


class TestEvaluateCoverage:
    """Tests for evaluate_coverage()."""

    def test_no_baseline(self):
        with pytest.raises(MissingCoverageInfoError, match="No baseline coverage info found!"):
            evaluate_coverage(88.0, None)

    def test_no_current(self):
        with pytest.raises(MissingCoverageInfoError, match="No current coverage info found!"):
            evaluate_coverage(NO_COVERAGE, 85.93)

    def test_drop_fails(self):
        with pytest.raises(CoverageDroppedError) as exc_info:
            evaluate_coverage(84.99, 85.93)

        assert str(exc_info.value) == "Code Coverage: `84.99%` (dropped `0.94%` from `85.93%`)"
        assert exc_info.value.current == 84.99
        assert exc_info.value.baseline == 85.93

    def test_any_drop_fails(self):
        """There is no tolerance band."""
        with pytest.raises(CoverageDroppedError):
            evaluate_coverage(85.92, 85.93)

    def test_no_change_passes(self):
        assert evaluate_coverage(85.93, 85.93) == "Code Coverage: `85.93%` (no change)"

    def test_increase_passes(self):
        assert evaluate_coverage(88.01, 85.93).endswith("(increased `2.08%` from `85.93%`)")
