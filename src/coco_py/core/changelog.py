"""Changelog rendering from parsed commits.

Builds a markdown section for one release out of the commits that went
into it. Rendering is pure: collecting the commits and writing the file is
left to the caller.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from coco_py.core.commit_type import CommitType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coco_py.core.commits import Commit
    from coco_py.core.version import Version

# Section order; breaking changes are rendered first, separately.
SECTION_ORDER: tuple[CommitType, ...] = (
    CommitType.FEATURE,
    CommitType.FIX,
    CommitType.PERFORMANCE,
    CommitType.REFACTOR,
    CommitType.DOCS,
    CommitType.TEST,
    CommitType.BUILD,
    CommitType.CI,
    CommitType.STYLE,
    CommitType.CHORE,
    CommitType.OTHER,
)


def group_commits_by_type(commits: Iterable[Commit]) -> dict[CommitType, list[Commit]]:
    """Group commits by their type, keeping their order."""
    groups: dict[CommitType, list[Commit]] = {}
    for commit in commits:
        groups.setdefault(commit.commit_type, []).append(commit)
    return groups


def get_breaking_changes(commits: Iterable[Commit]) -> list[Commit]:
    return [commit for commit in commits if commit.breaking]


def format_commit_for_changelog(commit: Commit, *, include_scope: bool = True) -> str:
    """Format one commit as a markdown list item.

    Args:
        commit: Parsed commit
        include_scope: Prefix the entry with the bold scope

    Returns:
        A line such as ``- **parser:** handle trailing commas``
    """
    scope = f"**{commit.scope}:** " if include_scope and commit.scope else ""
    line = f"- {scope}{commit.header}"
    if commit.commit_type is CommitType.OTHER and commit.raw_type:
        line += f" ({commit.raw_type.lower()})"
    return line


def render_changelog(
    version: Version,
    commits: Iterable[Commit],
    *,
    release_date: date | None = None,
) -> str:
    """Render the changelog section for ``version``.

    Args:
        version: Version being released
        commits: Parsed commits of the release
        release_date: Date shown in the heading, defaults to today

    Returns:
        Markdown text, or an empty string if there are no commits
    """
    commits = list(commits)
    if not commits:
        return ""

    release_date = release_date or date.today()
    lines = [f"## [{version}] - {release_date.isoformat()}", ""]

    breaking = get_breaking_changes(commits)
    if breaking:
        lines.extend(["### Breaking Changes", ""])
        lines.extend(format_commit_for_changelog(commit) for commit in breaking)
        lines.append("")

    grouped = group_commits_by_type(c for c in commits if not c.breaking)
    for commit_type in SECTION_ORDER:
        entries = grouped.get(commit_type)
        if not entries:
            continue
        lines.extend([f"### {commit_type.title}", ""])
        lines.extend(format_commit_for_changelog(commit) for commit in entries)
        lines.append("")

    return "\n".join(lines)
