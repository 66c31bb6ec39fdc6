"""Git plumbing for the CI working tree.

``GitCi`` reads the recent history that identifies the merged pull
request and writes the release commit and tag back to the build branch.
``run_command`` is also the runner the snapshot stage hands npm to.
"""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

from pr_bumper.exceptions import CommandError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from pr_bumper.config.models import PrBumperConfig
    from pr_bumper.core.pipeline import VcsClient

logger = logging.getLogger(__name__)


def run_command(args: Sequence[str], cwd: Path | None = None) -> str:
    """Run a command and return its stripped stdout.

    Only the program and its subcommand are logged or reported, so
    credentials embedded in later arguments never leak.

    Raises:
        CommandError: If the program is missing or exits non-zero
    """
    name = " ".join(args[:2])
    logger.debug("Running %s", name)

    try:
        result = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise CommandError(f"{args[0]} not found") from e
    except subprocess.CalledProcessError as e:
        raise CommandError(
            f"{name} failed with exit code {e.returncode}",
            stderr=e.stderr,
        ) from e

    return result.stdout.strip()


class GitCi:
    """CI client operating on the git checkout at ``cwd``."""

    def __init__(
        self,
        config: PrBumperConfig,
        cwd: Path | None = None,
        runner: Callable[..., str] = run_command,
    ) -> None:
        self.config = config
        self.cwd = cwd
        self._runner = runner

    def _git(self, *args: str) -> str:
        return self._runner(["git", *args], cwd=self.cwd)

    def get_last_commit_msg(self) -> str:
        return self._git("log", "-1", "--pretty=%B")

    def get_recent_commits(self, count: int) -> str:
        return self._git("log", f"-{count}", "--oneline")

    def setup_git_env(self) -> None:
        """Configure the commit identity and leave detached HEAD.

        CI platforms check out merge builds as a detached HEAD; the build
        branch is (re)created at the current commit so it can be pushed.
        """
        user = self.config.ci.git_user
        self._git("config", "user.name", user.name)
        self._git("config", "user.email", user.email)

        if self.config.ci.branch:
            self._git("checkout", "-B", self.config.ci.branch)

    def add(self, files: Sequence[str]) -> None:
        self._git("add", "--", *files)

    def commit(self, subject: str, body: str) -> None:
        self._git("commit", "-m", subject, "-m", body)

    def tag(self, name: str, message: str) -> None:
        self._git("tag", name, "-a", "-m", message)

    def push(self, vcs: VcsClient) -> None:
        """Push the current branch and all tags to the originating remote."""
        remote = vcs.push_url or "origin"
        branch = self.config.ci.branch
        refspec = f"HEAD:{branch}" if branch else "HEAD"
        self._git("push", remote, refspec, "--tags")
        logger.info("Pushed %s and tags", branch or "HEAD")
