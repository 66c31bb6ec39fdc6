"""Conditional release pipeline.

A pipeline is an ordered tuple of stages folded left to right over a
ReleaseState. Each stage pairs a pure skip predicate with an effectful
action, so skip decisions can be tested without touching git, npm or the
file system.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from pr_bumper.ci.git import run_command
from pr_bumper.core.state import Failed, Succeeded

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from pr_bumper.config.models import PrBumperConfig
    from pr_bumper.core.state import Outcome, ReleaseState
    from pr_bumper.vcs.models import PullRequest

logger = logging.getLogger(__name__)


class VcsClient(Protocol):
    """Version-control service (pull requests and comments)."""

    @property
    def push_url(self) -> str | None: ...

    def get_pr(self, number: str) -> PullRequest: ...

    def post_comment(self, number: str, body: str) -> None: ...


class CiClient(Protocol):
    """CI platform and git plumbing of the working tree."""

    def get_last_commit_msg(self) -> str: ...

    def get_recent_commits(self, count: int) -> str: ...

    def setup_git_env(self) -> None: ...

    def add(self, files: Sequence[str]) -> None: ...

    def commit(self, subject: str, body: str) -> None: ...

    def tag(self, name: str, message: str) -> None: ...

    def push(self, vcs: VcsClient) -> None: ...


class ComplianceReporter(Protocol):
    """Generates the dependency compliance report."""

    def run(self, cwd: Path, output_path: Path, config: PrBumperConfig) -> None: ...


class CoverageSource(Protocol):
    """Reports the current build's coverage, or -1 when unavailable."""

    def get_current_coverage(self) -> float: ...


@dataclass(frozen=True)
class StageContext:
    """Configuration and collaborators available to stage actions."""

    config: PrBumperConfig
    vcs: VcsClient
    ci: CiClient
    reporter: ComplianceReporter
    coverage: CoverageSource
    cwd: Path = field(default_factory=Path.cwd)
    runner: Callable[..., str] = run_command

    def resolve(self, path: Path | str) -> Path:
        """Resolve a configured path against the project directory."""
        return self.cwd / path


@dataclass(frozen=True)
class Stage:
    """One conditional pipeline step.

    Attributes:
        name: Short identifier used in logs and failures
        skip_reason: Returns why the stage must be skipped, or None to run it
        action: Performs the stage and returns the (possibly extended) state
    """

    name: str
    skip_reason: Callable[[PrBumperConfig, ReleaseState], str | None]
    action: Callable[[StageContext, ReleaseState], ReleaseState]

    def should_run(self, config: PrBumperConfig, state: ReleaseState) -> bool:
        return self.skip_reason(config, state) is None


def run_if(stage: Stage, ctx: StageContext, state: ReleaseState) -> ReleaseState:
    """Run ``stage`` unless its predicate gives a reason to skip it."""
    reason = stage.skip_reason(ctx.config, state)
    if reason is not None:
        logger.info(reason)
        return state

    logger.debug("Running stage %s", stage.name)
    return stage.action(ctx, state)


def run_pipeline(stages: Iterable[Stage], ctx: StageContext, state: ReleaseState) -> Outcome:
    """Fold ``stages`` over ``state`` in order.

    The first stage to raise stops the pipeline; its error is returned in
    a Failed outcome rather than raised.
    """
    for stage in stages:
        try:
            state = run_if(stage, ctx, state)
        except Exception as e:
            logger.error("Stage %s failed: %s", stage.name, e)
            return Failed(error=e, stage=stage.name)

    return Succeeded(state)
