"""Implementation of the 'bump' command.

The bump command applies the commits since the last release tag to the
manifest version and prepends a changelog section.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from coco_py.cli.utils import (
    load_config_or_exit,
    open_repository_or_exit,
    plan_from_repository,
    read_version_or_exit,
)
from coco_py.core.changelog import render_changelog
from coco_py.core.version import is_valid_pre_release
from coco_py.exceptions import CocoError
from coco_py.logging import get_logger
from coco_py.project import update_manifest_version

if TYPE_CHECKING:
    from rich.console import Console

log = get_logger(__name__)


def run_bump(
    path: str | None,
    execute: bool,
    prerelease: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        path: Optional path to project directory
        execute: Whether to actually apply changes
        prerelease: Pre-release identifier (e.g., "alpha", "rc.1")
        console: Console for standard output
        err_console: Console for error output
    """
    if prerelease is not None and not is_valid_pre_release(prerelease):
        err_console.print(
            f"[red]Error:[/] invalid pre-release identifier {escape(repr(prerelease))}; "
            "expected dot-separated alphanumeric identifiers such as 'rc.1'"
        )
        raise SystemExit(1)

    project_path = Path(path) if path else Path.cwd()
    config = load_config_or_exit(project_path, err_console)
    repo = open_repository_or_exit(project_path, err_console)
    manifest, current_version = read_version_or_exit(project_path, config, err_console)

    try:
        plan = plan_from_repository(repo, current_version, config, prerelease)
    except CocoError as e:
        err_console.print(f"[red]Error reading history:[/] {e}")
        raise SystemExit(1) from e

    for skipped in plan.skipped:
        subject = escape(skipped.subject)
        console.print(f"[dim]Skipping non-conventional commit {skipped.short_sha}: {subject}[/]")

    if not plan.commits and not plan.is_first_release:
        console.print("[yellow]No conventional commits found since last release. Nothing to do.[/]")
        return

    if not plan.has_changes:
        console.print(
            "[yellow]No releasable changes found (only commit types without version impact).[/]"
        )
        return

    mode_str = "[green]EXECUTING[/]" if execute else "[yellow]DRY-RUN[/]"
    if plan.is_first_release:
        console.print(f"\n{mode_str} - First release! Setting version to [green]{plan.next}[/]\n")
    else:
        console.print(
            f"\n{mode_str} - Updating from [cyan]{plan.current}[/] to [green]{plan.next}[/]\n"
        )

    changelog_path = project_path / config.changelog_path
    if not execute:
        console.print(
            Panel(
                "[bold]Would make the following changes:[/]\n\n"
                f"  • Update version in [cyan]{manifest.name}[/]\n"
                f"  • Prepend {len(plan.commits)} commit(s) to [cyan]{config.changelog_path}[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        console.print("\n[dim]Run with [cyan]--execute[/] to apply these changes.[/]")
        return

    try:
        update_manifest_version(manifest, plan.next)
        console.print(f"  [green]✓[/] Updated version in {manifest.name}")
    except CocoError as e:
        err_console.print(f"[red]Error updating {manifest.name}:[/] {e}")
        raise SystemExit(1) from e

    section = render_changelog(plan.next, plan.commits)
    if section:
        try:
            existing = changelog_path.read_text(encoding="utf-8") if changelog_path.exists() else ""
            changelog_path.write_text(section + "\n" + existing, encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]Error writing changelog:[/] {e}")
            raise SystemExit(1) from e
        console.print(f"  [green]✓[/] Updated {config.changelog_path}")
        log.info("prepended changelog section", path=str(changelog_path), version=str(plan.next))

    tag = f"{config.effective_tag_prefix}{plan.next}"
    console.print(
        Panel(
            f"[green]Successfully updated to version {plan.next}![/]\n\n"
            "Next steps:\n"
            "  1. Review the changes\n"
            f"  2. Commit: [cyan]git commit -am 'chore(release): prepare {plan.next}'[/]\n"
            f"  3. Tag: [cyan]git tag {tag}[/]",
            title="[green]Bump Complete[/]",
            border_style="green",
        )
    )
