"""Command implementations and the collaborator wiring they share."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from pr_bumper.ci import GitCi
from pr_bumper.config import load_config
from pr_bumper.config.loader import find_manifest
from pr_bumper.core.bumper import Bumper
from pr_bumper.vcs import GitHub

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console


@contextmanager
def load_bumper(path: str | None, err_console: Console) -> Iterator[Bumper]:
    """Load configuration and build a Bumper for the project at ``path``.

    The GitHub client is closed when the block exits. Exits with status 1
    if the configuration cannot be loaded.
    """
    project_path = Path(path) if path else Path.cwd()

    try:
        root = find_manifest(project_path).parent
        config = load_config(project_path)
    except Exception as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    with GitHub(config) as github:
        yield Bumper(
            config,
            vcs=github,
            ci=GitCi(config, cwd=root),
            cwd=root,
        )
