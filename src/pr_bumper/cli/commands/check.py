"""Implementation of the 'check' and 'check-coverage' commands.

Both run on pull-request builds: 'check' reports the bump scope the PR
declares, 'check-coverage' fails the build when coverage dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from pr_bumper.cli.commands import load_bumper
from pr_bumper.core.state import Succeeded
from pr_bumper.exceptions import CoverageDroppedError, PrBumperError

if TYPE_CHECKING:
    from rich.console import Console


def run_check(path: str | None, console: Console, err_console: Console) -> None:
    """Run the check command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output
    """
    with load_bumper(path, err_console) as bumper:
        try:
            outcome = bumper.check()
        except PrBumperError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    if not isinstance(outcome, Succeeded):
        console.print(f"[yellow]{escape(outcome.reason)}[/]")
        return

    state = outcome.state
    console.print(f"Found a [green]{state.scope}[/] bump for PR #{bumper.config.pr_number}")
    if state.changelog:
        console.print(f"\n[bold]Changelog:[/]\n{escape(state.changelog)}")


def run_check_coverage(path: str | None, console: Console, err_console: Console) -> None:
    """Run the check-coverage command."""
    with load_bumper(path, err_console) as bumper:
        try:
            message = bumper.check_coverage()
        except CoverageDroppedError as e:
            err_console.print(f"[red]{escape(str(e))}[/]")
            raise SystemExit(1) from e
        except PrBumperError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    console.print(f"[green]{escape(message)}[/]")
