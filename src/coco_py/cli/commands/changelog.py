"""Implementation of the 'changelog' command.

Prints the changelog section the next ``bump`` would prepend, without
touching any file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from coco_py.cli.utils import (
    load_config_or_exit,
    open_repository_or_exit,
    plan_from_repository,
    read_version_or_exit,
)
from coco_py.core.changelog import render_changelog
from coco_py.exceptions import CocoError

if TYPE_CHECKING:
    from rich.console import Console


def run_changelog(path: str | None, console: Console, err_console: Console) -> None:
    """Run the changelog command."""
    project_path = Path(path) if path else Path.cwd()
    config = load_config_or_exit(project_path, err_console)
    repo = open_repository_or_exit(project_path, err_console)
    _, current_version = read_version_or_exit(project_path, config, err_console)

    try:
        plan = plan_from_repository(repo, current_version, config)
    except CocoError as e:
        err_console.print(f"[red]Error reading history:[/] {e}")
        raise SystemExit(1) from e

    section = render_changelog(plan.next, plan.commits)
    if not section:
        console.print("[yellow]No conventional commits found since last release.[/]")
        return

    # Markdown goes out verbatim so it can be redirected into a file.
    console.print(section, markup=False, highlight=False, emoji=False)
