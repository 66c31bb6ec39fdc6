"""Implementation of the 'bump' command.

The bump command runs the release pipeline on merge builds: version,
changelog, dependency snapshot, coverage baseline, commit, tag,
compliance report and push.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from pr_bumper.cli.commands import load_bumper
from pr_bumper.core.state import Cancelled, Failed, Skipped
from pr_bumper.exceptions import PrBumperError

if TYPE_CHECKING:
    from rich.console import Console


def run_bump(path: str | None, console: Console, err_console: Console) -> None:
    """Run the bump command.

    Args:
        path: Optional path to project directory
        console: Console for standard output
        err_console: Console for error output
    """
    with load_bumper(path, err_console) as bumper:
        try:
            outcome = bumper.bump()
        except PrBumperError as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}")
            raise SystemExit(1) from e

    if isinstance(outcome, Skipped | Cancelled):
        console.print(f"[yellow]{escape(outcome.reason)}[/]")
        return

    if isinstance(outcome, Failed):
        err_console.print(f"[red]Error in {outcome.stage} stage:[/] {escape(str(outcome.error))}")
        raise SystemExit(1) from outcome.error

    state = outcome.state
    if state.version:
        summary = f"[green]Released version {state.version}![/]"
    else:
        summary = f"[green]No release for a [cyan]{state.scope}[/] scope.[/]"

    files = "\n".join(f"  • {escape(name)}" for name in state.modified_files) or "  (none)"
    console.print(
        Panel(
            f"{summary}\n\nModified files:\n{files}",
            title="[green]Bump Complete[/]",
            border_style="green",
        )
    )
