"""Core business logic for pr-bumper.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Scope and changelog resolution from pull requests
- Changelog entry formatting
- The code coverage gate
- Release state and pipeline outcomes

The release pipeline itself lives in ``pr_bumper.core.pipeline``,
``pr_bumper.core.stages`` and ``pr_bumper.core.bumper``.
"""

from __future__ import annotations

from pr_bumper.core.changelog import format_changelog_entry, prepend_changelog
from pr_bumper.core.coverage import (
    NO_COVERAGE,
    FileCoverageSource,
    evaluate_coverage,
    format_coverage_message,
    get_current_coverage,
)
from pr_bumper.core.scope import get_changelog_for_pr, get_scope_for_pr
from pr_bumper.core.state import Cancelled, Failed, Outcome, ReleaseState, Skipped, Succeeded
from pr_bumper.core.version import Scope, Version, bump_version

__all__ = [
    # Coverage
    "NO_COVERAGE",
    # State
    "Cancelled",
    "Failed",
    "FileCoverageSource",
    "Outcome",
    "ReleaseState",
    # Version
    "Scope",
    "Skipped",
    "Succeeded",
    "Version",
    "bump_version",
    "evaluate_coverage",
    # Changelog
    "format_changelog_entry",
    "format_coverage_message",
    "get_changelog_for_pr",
    "get_current_coverage",
    # Scope
    "get_scope_for_pr",
    "prepend_changelog",
]
