"""Tests for scope and changelog resolution from pull requests."""

from __future__ import annotations

import pytest

from pr_bumper.core.scope import find_scopes, get_changelog_for_pr, get_scope_for_pr
from pr_bumper.core.version import Scope
from pr_bumper.exceptions import ChangelogNotFoundError, MultipleScopesError, ScopeNotFoundError
from pr_bumper.vcs.models import PullRequest


class TestGetScopeForPr:
    """Tests for get_scope_for_pr()."""

    @pytest.mark.parametrize(
        ("marker", "expected"),
        [
            ("#none#", Scope.NONE),
            ("#patch#", Scope.PATCH),
            ("#fix#", Scope.PATCH),
            ("#minor#", Scope.MINOR),
            ("#feature#", Scope.MINOR),
            ("#major#", Scope.MAJOR),
            ("#breaking#", Scope.MAJOR),
        ],
    )
    def test_description_markers(self, marker: str, expected: Scope):
        """Scope markers in the description are recognized."""
        pr = PullRequest(number="1", description=f"Some change {marker}")
        assert get_scope_for_pr(pr) is expected

    def test_marker_case_insensitive(self):
        pr = PullRequest(number="1", description="#MINOR#")
        assert get_scope_for_pr(pr) is Scope.MINOR

    def test_label(self):
        """Labels declare scopes too."""
        pr = PullRequest(number="1", labels=("documentation", "Major"))
        assert get_scope_for_pr(pr) is Scope.MAJOR

    def test_label_and_marker_agree(self):
        """Aliases of the same scope count once."""
        pr = PullRequest(number="1", description="#patch#", labels=("fix",))
        assert get_scope_for_pr(pr) is Scope.PATCH

    def test_multiple_scopes(self):
        """Conflicting scopes are rejected."""
        pr = PullRequest(number="7", description="#patch# and also #major#")

        with pytest.raises(MultipleScopesError, match="PR #7: patch, major"):
            get_scope_for_pr(pr)

    def test_unknown_markers_ignored(self):
        pr = PullRequest(number="1", description="#wip# #minor#")
        assert get_scope_for_pr(pr) is Scope.MINOR

    def test_default_scope(self):
        """The configured default applies when nothing is declared."""
        pr = PullRequest(number="1", description="No markers here")
        assert get_scope_for_pr(pr, Scope.PATCH) is Scope.PATCH

    def test_no_scope_no_default(self):
        pr = PullRequest(number="3", description="No markers here")

        with pytest.raises(ScopeNotFoundError, match="PR #3"):
            get_scope_for_pr(pr)

    def test_pure_function_of_input(self):
        """Resolving twice gives the same answer."""
        pr = PullRequest(number="1", description="#minor#")
        assert get_scope_for_pr(pr) == get_scope_for_pr(pr)


class TestFindScopes:
    """Tests for find_scopes()."""

    def test_labels_before_markers(self):
        pr = PullRequest(number="1", description="#minor#", labels=("patch",))
        assert find_scopes(pr) == [Scope.PATCH, Scope.MINOR]


class TestGetChangelogForPr:
    """Tests for get_changelog_for_pr()."""

    def test_changelog_section(self):
        """Text under the CHANGELOG heading is returned."""
        pr = PullRequest(
            number="1",
            description="Summary #patch#\n\n## CHANGELOG\n* Fixed a bug\n* Fixed another\n",
        )
        assert get_changelog_for_pr(pr) == "* Fixed a bug\n* Fixed another"

    def test_heading_case_insensitive(self):
        pr = PullRequest(number="1", description="# Changelog\nStuff")
        assert get_changelog_for_pr(pr) == "Stuff"

    def test_missing_section(self):
        pr = PullRequest(number="9", description="#patch#")

        with pytest.raises(ChangelogNotFoundError, match="PR #9"):
            get_changelog_for_pr(pr)
