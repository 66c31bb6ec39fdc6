"""Release orchestration.

``Bumper`` runs the two CI flows:

- ``check`` on pull-request builds reports the bump scope of the PR
  (``check_coverage`` additionally gates on code coverage);
- ``bump`` on merge builds runs the release pipeline for the PR that was
  just merged.

Collaborators (VCS, CI, compliance reporter, coverage source) are passed
in explicitly, which is also how tests substitute them.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from pr_bumper import TOOL_NAME
from pr_bumper.ci.git import run_command
from pr_bumper.core.coverage import NO_COVERAGE, FileCoverageSource, evaluate_coverage
from pr_bumper.core.pipeline import StageContext, run_pipeline
from pr_bumper.core.scope import get_changelog_for_pr, get_scope_for_pr
from pr_bumper.core.stages import BUMP_STAGES, COMMIT_PREFIX
from pr_bumper.core.state import Cancelled, ReleaseState, Skipped, Succeeded
from pr_bumper.core.version import Scope
from pr_bumper.dependencies import DependencyReporter
from pr_bumper.exceptions import CoverageDroppedError, MissingCoverageInfoError, PrNotFoundError
from pr_bumper.vcs.comments import maybe_post_comment, maybe_post_comment_on_error

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from pr_bumper.config.models import PrBumperConfig
    from pr_bumper.core.pipeline import (
        CiClient,
        ComplianceReporter,
        CoverageSource,
        Stage,
        VcsClient,
    )
    from pr_bumper.core.state import Outcome
    from pr_bumper.vcs.models import PullRequest

logger = logging.getLogger(__name__)

#: How far back in history to look for the merged pull request.
MERGE_LOOKBACK = 10

_MERGE_COMMIT = re.compile(r"Merge pull request #(\d+)")
_SQUASH_COMMIT = re.compile(r"\(#(\d+)\)\s*$")


def parse_merged_pr_number(log: str) -> str:
    """Find the most recent PR number in ``git log --oneline`` output.

    Both merge commits (``Merge pull request #12 from ...``) and
    squash merges (``Fix the thing (#12)``) are recognized.

    Raises:
        PrNotFoundError: If no line references a pull request
    """
    for line in log.splitlines():
        match = _MERGE_COMMIT.search(line) or _SQUASH_COMMIT.search(line)
        if match:
            return match.group(1)

    raise PrNotFoundError(f"Could not find a merged PR in the last {MERGE_LOOKBACK} commits")


class Bumper:
    """Runs the check and bump flows for one CI build."""

    def __init__(
        self,
        config: PrBumperConfig,
        *,
        vcs: VcsClient,
        ci: CiClient,
        reporter: ComplianceReporter | None = None,
        coverage: CoverageSource | None = None,
        cwd: Path | None = None,
        stages: Sequence[Stage] = BUMP_STAGES,
        runner: Callable[..., str] = run_command,
    ) -> None:
        self.config = config
        self.vcs = vcs
        self.ci = ci
        self.cwd = cwd or Path.cwd()
        self.reporter = reporter or DependencyReporter()
        self.coverage = coverage or FileCoverageSource(self.cwd / config.coverage_summary_file)
        self.stages = tuple(stages)
        self.runner = runner

    @property
    def context(self) -> StageContext:
        return StageContext(
            config=self.config,
            vcs=self.vcs,
            ci=self.ci,
            reporter=self.reporter,
            coverage=self.coverage,
            cwd=self.cwd,
            runner=self.runner,
        )

    # Flows

    def check(self) -> Outcome:
        """Report the bump scope of the PR under test."""
        if not self.config.is_pr:
            reason = "Not a PR build, skipping check"
            logger.info(reason)
            return Skipped(reason)

        state = self.get_open_pr_info()
        logger.info("Found a %s bump for the current PR", state.scope)
        return Succeeded(state)

    def check_coverage(self) -> str:
        """Compare current coverage with the baseline and report it on the PR.

        Returns:
            Message describing the unchanged or increased coverage

        Raises:
            MissingCoverageInfoError: If baseline or current coverage is unavailable
            CoverageDroppedError: If coverage dropped
        """
        baseline = self.config.baseline_coverage
        current = self.coverage.get_current_coverage() if baseline is not None else NO_COVERAGE

        try:
            message = evaluate_coverage(current, baseline)
        except MissingCoverageInfoError as e:
            maybe_post_comment(self.config, self.vcs, str(e), is_error=True)
            raise
        except CoverageDroppedError as e:
            maybe_post_comment(self.config, self.vcs, str(e))
            raise

        logger.info(message)
        maybe_post_comment(self.config, self.vcs, message)
        return message

    def bump(self) -> Outcome:
        """Run the release pipeline for the PR that was just merged."""
        if self.config.is_pr:
            reason = "Not a merge build, skipping bump"
            logger.info(reason)
            return Skipped(reason)

        # A bump commit triggers a build of its own; it must not bump again.
        if self.ci.get_last_commit_msg().startswith(COMMIT_PREFIX):
            reason = f"Skipping bump on {TOOL_NAME} commit."
            logger.info(reason)
            return Cancelled(reason)

        state = self.get_merged_pr_info()
        logger.info("Found a %s bump for the merged PR", state.scope)
        return run_pipeline(self.stages, self.context, state)

    # Pull request lookups

    def get_last_pr(self) -> PullRequest:
        """Fetch the PR whose merge produced the current build."""
        number = parse_merged_pr_number(self.ci.get_recent_commits(MERGE_LOOKBACK))
        return self.vcs.get_pr(number)

    def get_merged_pr_info(self) -> ReleaseState:
        pr = self.get_last_pr()
        scope = get_scope_for_pr(pr, self.config.default_scope)

        changelog = ""
        if self.config.prepend_changelog and scope != Scope.NONE:
            changelog = get_changelog_for_pr(pr)

        return ReleaseState(scope=scope, changelog=changelog)

    def get_open_pr_info(self) -> ReleaseState:
        """Resolve scope and changelog of the open PR, commenting on failures."""
        if not self.config.pr_number:
            raise PrNotFoundError("PR build without a PR number")

        pr = self.vcs.get_pr(self.config.pr_number)
        scope = maybe_post_comment_on_error(
            self.config, self.vcs, lambda: get_scope_for_pr(pr, self.config.default_scope)
        )

        changelog = ""
        if self.config.prepend_changelog and scope != Scope.NONE:
            changelog = maybe_post_comment_on_error(
                self.config, self.vcs, lambda: get_changelog_for_pr(pr)
            )

        return ReleaseState(scope=scope, changelog=changelog)
