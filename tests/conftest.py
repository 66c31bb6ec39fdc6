"""Shared fixtures for pr-bumper tests."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest

from pr_bumper.config.models import CiConfig, PrBumperConfig
from pr_bumper.core.pipeline import StageContext
from pr_bumper.vcs.models import PullRequest

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _capture_pr_bumper_logs(caplog: pytest.LogCaptureFixture):
    """Let caplog see pr-bumper's info messages, even after the CLI reconfigured logging."""
    logger = logging.getLogger("pr_bumper")
    logger.handlers[:] = []
    logger.propagate = True
    caplog.set_level(logging.DEBUG, logger="pr_bumper")
    yield


@pytest.fixture
def make_config() -> Callable[..., PrBumperConfig]:
    """Factory for configs with a known build number."""

    def factory(**overrides: Any) -> PrBumperConfig:
        overrides.setdefault("ci", CiConfig(build_number="12345"))
        return PrBumperConfig(**overrides)

    return factory


@pytest.fixture
def config(make_config: Callable[..., PrBumperConfig]) -> PrBumperConfig:
    return make_config()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A project directory with a package.json at version 1.2.3."""
    manifest = {
        "name": "my-project",
        "version": "1.2.3",
        "pr-bumper": {"coverage": 85.93},
    }
    (tmp_path / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    return tmp_path


@pytest.fixture
def ci() -> MagicMock:
    ci = MagicMock(name="ci")
    ci.get_last_commit_msg.return_value = "Merge pull request #30 from someone/branch"
    ci.get_recent_commits.return_value = (
        "edf85e0 Merge pull request #30 from job13er/remove-newline\n"
        "fa066f2 Removed newline from parsed PR number\n"
    )
    return ci


@pytest.fixture
def vcs() -> MagicMock:
    vcs = MagicMock(name="vcs")
    vcs.push_url = None
    vcs.get_pr.return_value = PullRequest(
        number="30",
        description="Fixes the parser #minor#\n\n## CHANGELOG\n* Fixed the parser",
    )
    return vcs


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock(name="reporter")


@pytest.fixture
def coverage() -> MagicMock:
    coverage = MagicMock(name="coverage")
    coverage.get_current_coverage.return_value = 88.01
    return coverage


@pytest.fixture
def runner() -> MagicMock:
    return MagicMock(name="runner", return_value="")


@pytest.fixture
def make_context(
    config: PrBumperConfig,
    project: Path,
    vcs: MagicMock,
    ci: MagicMock,
    reporter: MagicMock,
    coverage: MagicMock,
    runner: MagicMock,
) -> Callable[..., StageContext]:
    """Factory for stage contexts over the ``project`` directory."""

    def factory(stage_config: PrBumperConfig | None = None) -> StageContext:
        return StageContext(
            config=stage_config or config,
            vcs=vcs,
            ci=ci,
            reporter=reporter,
            coverage=coverage,
            cwd=project,
            runner=runner,
        )

    return factory
