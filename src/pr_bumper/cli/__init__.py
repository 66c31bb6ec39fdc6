"""Command line interface for pr-bumper."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from pr_bumper import __version__
from pr_bumper.log import configure_logging

app = typer.Typer(
    name="pr-bumper",
    help="Semantic-version release automation for pull-request driven CI.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (defaults to the current directory)."),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pr-bumper {__version__}")
        raise typer.Exit


@app.callback()
def _main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug output.")] = False,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version."),
    ] = False,
) -> None:
    configure_logging(verbose, err_console)


@app.command()
def check(path: PathOption = None) -> None:
    """Report the version-bump scope of the current pull request."""
    from pr_bumper.cli.commands.check import run_check

    run_check(path, console, err_console)


@app.command("check-coverage")
def check_coverage(path: PathOption = None) -> None:
    """Fail if code coverage dropped below the recorded baseline."""
    from pr_bumper.cli.commands.check import run_check_coverage

    run_check_coverage(path, console, err_console)


@app.command()
def bump(path: PathOption = None) -> None:
    """Bump the version, update the changelog, commit, tag and push."""
    from pr_bumper.cli.commands.bump import run_bump

    run_bump(path, console, err_console)


def main() -> None:
    app()
