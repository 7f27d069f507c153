"""Implementation of the 'rollback' command.

Undoes the version increment caused by the last commit of the repository.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from coco_py.cli.utils import (
    EXIT_DATAERR,
    load_config_or_exit,
    open_repository_or_exit,
    print_lint_result,
    read_version_or_exit,
)
from coco_py.core.lint import lint
from coco_py.exceptions import CocoError, VersionUnderflowError
from coco_py.project import update_manifest_version

if TYPE_CHECKING:
    from rich.console import Console


def run_rollback(
    path: str | None,
    execute: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run the rollback command.

    Args:
        path: Optional path to project directory
        execute: Whether to actually write the manifest
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()
    config = load_config_or_exit(project_path, err_console)
    repo = open_repository_or_exit(project_path, err_console)
    manifest, current_version = read_version_or_exit(project_path, config, err_console)

    last = repo.get_last_commit()
    if last is None:
        err_console.print(f"[red]Error:[/] no commits to roll back in {repo.path}")
        raise SystemExit(1)

    result = lint(last.message)
    if result.commit is None:
        err_console.print(
            f"[red]Error:[/] last commit {last.short_sha} is not a conventional commit"
        )
        print_lint_result(result, err_console)
        raise SystemExit(EXIT_DATAERR)

    previous = current_version.copy()
    try:
        result.commit.rollback(previous)
    except VersionUnderflowError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    if previous == current_version:
        console.print(
            f"[yellow]Commit {last.short_sha} ({result.commit.type_name}) "
            "did not change the version. Nothing to do.[/]"
        )
        return

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    console.print(
        f"\n{mode_str} - Rolling back from [cyan]{current_version}[/] to [green]{previous}[/]\n"
    )

    if not execute:
        console.print(
            Panel(
                f"[bold]Would update the version in [cyan]{manifest.name}[/].[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    try:
        update_manifest_version(manifest, previous)
    except CocoError as e:
        err_console.print(f"[red]Error updating {manifest.name}:[/] {e}")
        raise SystemExit(1) from e
    console.print(f"  [green]✓[/] Rolled back version in {manifest.name} to {previous}")
