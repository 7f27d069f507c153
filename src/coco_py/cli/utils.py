"""Helpers shared by the CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.markup import escape

from coco_py.config import load_config
from coco_py.core.lint import LintResult, Severity, lint
from coco_py.core.version import Version
from coco_py.exceptions import CocoError
from coco_py.logging import get_logger
from coco_py.project import find_manifest, read_manifest_version
from coco_py.vcs import GitRepository

if TYPE_CHECKING:
    from pathlib import Path

    from rich.console import Console

    from coco_py.config.models import CocoConfig
    from coco_py.core.commits import Commit
    from coco_py.vcs.git import GitCommit

log = get_logger(__name__)

# sysexits.h EX_DATAERR: the input data was incorrect.
EXIT_DATAERR = 65

SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
    Severity.SUGGESTION: "dim",
}


def print_lint_result(result: LintResult, console: Console) -> None:
    """Print every diagnostic of ``result`` with its severity color."""
    if not result.diagnostics:
        console.print("[green]✔[/] Your commit is flawless, go ahead and push!")
        return

    for violation in result.diagnostics:
        style = SEVERITY_STYLES[violation.severity]
        console.print(
            f"[{style}]{violation.severity.value.upper():<10}[/] {escape(violation.message)}"
        )
        if violation.description:
            for line in violation.description.splitlines():
                console.print(f"           [dim]{escape(line)}[/]")


@dataclass
class ReleasePlan:
    """Next version computed from the commits since the last release."""

    current: Version
    next: Version
    commits: list[Commit] = field(default_factory=list)
    skipped: list[GitCommit] = field(default_factory=list)
    is_first_release: bool = False

    @property
    def has_changes(self) -> bool:
        return str(self.current) != str(self.next)


def parse_history(
    commits: list[GitCommit],
) -> tuple[list[Commit], list[GitCommit]]:
    """Lint every commit message.

    Returns:
        ``(parsed, skipped)``: the conventional commits in the given order
        and the raw commits that could not be parsed
    """
    parsed: list[Commit] = []
    skipped: list[GitCommit] = []
    for raw in commits:
        result = lint(raw.message)
        if result.commit is None:
            log.debug(
                "skipping non-conventional commit",
                sha=raw.short_sha,
                errors=[v.message for v in result.errors],
            )
            skipped.append(raw)
        else:
            parsed.append(result.commit)
    return parsed, skipped


def plan_release(
    current: Version,
    history: list[GitCommit],
    config: CocoConfig,
    *,
    is_first_release: bool = False,
    prerelease: str | None = None,
) -> ReleasePlan:
    """Apply every parsed commit of ``history`` to a copy of ``current``.

    On the first release the configured initial version is used instead.
    The pre-release identifier is only attached when the release moves
    ``major.minor.patch``; a pre-release of an unchanged core would sort
    below ``current``.

    Raises:
        InvalidPreReleaseError: If ``prerelease`` is malformed
    """
    parsed, skipped = parse_history(history)

    if is_first_release:
        next_version = Version.parse(config.version.initial_version) or Version()
    else:
        next_version = current.copy()
        for commit in parsed:
            next_version.bump(commit)

    effective_prerelease = prerelease or config.version.pre_release
    if effective_prerelease and (is_first_release or next_version.core > current.core):
        next_version = next_version.with_prerelease(effective_prerelease)

    log.debug(
        "planned release",
        current=str(current),
        next=str(next_version),
        commits=len(parsed),
        skipped=len(skipped),
    )
    return ReleasePlan(
        current=current,
        next=next_version,
        commits=parsed,
        skipped=skipped,
        is_first_release=is_first_release,
    )


# =============================================================================
# Project state shared by bump, rollback and changelog
# =============================================================================


def load_config_or_exit(project_path: Path, err_console: Console) -> CocoConfig:
    try:
        return load_config(project_path)
    except CocoError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e


def open_repository_or_exit(project_path: Path, err_console: Console) -> GitRepository:
    try:
        return GitRepository(project_path)
    except CocoError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e


def read_version_or_exit(
    project_path: Path,
    config: CocoConfig,
    err_console: Console,
) -> tuple[Path, Version]:
    """Locate the manifest below ``project_path`` and read its version."""
    try:
        manifest = find_manifest(
            project_path,
            name=config.version.manifest,
            ignore_dirs=config.ignore_dirs,
        )
        return manifest, read_manifest_version(manifest)
    except CocoError as e:
        err_console.print(f"[red]Error getting version:[/] {e}")
        raise SystemExit(1) from e


def plan_from_repository(
    repo: GitRepository,
    current: Version,
    config: CocoConfig,
    prerelease: str | None = None,
) -> ReleasePlan:
    """Plan the next release from the commits since the latest release tag."""
    latest_tag = repo.get_latest_tag(f"{config.effective_tag_prefix}*")
    history = repo.get_commits_since_tag(latest_tag)
    return plan_release(
        current,
        history,
        config,
        is_first_release=latest_tag is None,
        prerelease=prerelease,
    )
