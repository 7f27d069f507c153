"""Typer application for the coco-py command line."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from coco_py import __version__
from coco_py.core.lint import Severity
from coco_py.logging import configure_logging

app = typer.Typer(
    name="coco-py",
    help="Lint conventional commits and derive semantic versions from them.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

PathOption = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Project directory (defaults to the current directory)"),
]
ExecuteOption = Annotated[
    bool,
    typer.Option("--execute", help="Apply the changes instead of previewing them"),
]


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"coco-py {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug output")
    ] = False,
    debug: Annotated[
        bool, typer.Option("--debug", "-d", help="Debug output with call-site information")
    ] = False,
    json_log: Annotated[
        bool, typer.Option("--json-log", help="Emit log records as JSON")
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = False,
) -> None:
    """coco-py: conventional commit linting and semantic versioning."""
    configure_logging(verbose=verbose, debug=debug, json_log=json_log)


@app.command()
def lint(
    message: Annotated[
        str | None,
        typer.Option("--commit-message", "--message", "-m", help="Commit message to lint"),
    ] = None,
    path: PathOption = None,
    level: Annotated[
        Severity | None,
        typer.Option(
            "--level",
            "-l",
            case_sensitive=False,
            help="Lowest severity that fails the check (overrides the config)",
        ),
    ] = None,
) -> None:
    """Lint a commit message, or the last commit of the repository."""
    from coco_py.cli.commands.lint import run_lint

    run_lint(message, path, level, console, err_console)


@app.command()
def bump(
    path: PathOption = None,
    execute: ExecuteOption = False,
    prerelease: Annotated[
        str | None,
        typer.Option("--prerelease", help="Pre-release identifier, e.g. 'rc.1'"),
    ] = None,
) -> None:
    """Bump the manifest version by the commits since the last release."""
    from coco_py.cli.commands.bump import run_bump

    run_bump(path, execute, prerelease, console, err_console)


@app.command()
def rollback(
    path: PathOption = None,
    execute: ExecuteOption = False,
) -> None:
    """Roll the manifest version back by the last commit."""
    from coco_py.cli.commands.rollback import run_rollback

    run_rollback(path, execute, console, err_console)


@app.command()
def changelog(path: PathOption = None) -> None:
    """Print the changelog section for the unreleased commits."""
    from coco_py.cli.commands.changelog import run_changelog

    run_changelog(path, console, err_console)
