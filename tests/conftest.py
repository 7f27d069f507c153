"""Shared fixtures for coco-py tests."""

from __future__ import annotations

import shutil
import subprocess
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from coco_py.core.commit_type import CommitType
from coco_py.core.commits import Commit
from coco_py.vcs.git import GitCommit

if TYPE_CHECKING:
    from pathlib import Path


PYPROJECT = """\
[project]
name = "test-project"
version = "1.0.0"

[tool.coco-py]
changelog_path = "CHANGELOG.md"

[tool.coco-py.version]
manifest = "apax.yml"
tag_prefix = "v"
"""

MANIFEST = """\
name: "@sample/library"
version: 1.2.3
type: lib
"""


def git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit(repo: Path, message: str) -> None:
    """Create an empty commit with ``message``."""
    git(repo, "commit", "--allow-empty", "-q", "-m", message)


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """An initialized git repository without commits."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = tmp_path / "repo"
    repo.mkdir()
    git(repo, "init", "-q")
    git(repo, "config", "user.name", "Test User")
    git(repo, "config", "user.email", "test@example.com")
    git(repo, "config", "commit.gpgsign", "false")
    git(repo, "config", "tag.gpgsign", "false")
    return repo


@pytest.fixture
def temp_git_repo_with_pyproject(temp_git_repo: Path) -> Path:
    """A git repository with pyproject.toml, apax.yml and an initial commit."""
    (temp_git_repo / "pyproject.toml").write_text(PYPROJECT)
    (temp_git_repo / "apax.yml").write_text(MANIFEST)
    git(temp_git_repo, "add", ".")
    commit(temp_git_repo, "chore: initial commit")
    return temp_git_repo


@pytest.fixture
def released_repo(temp_git_repo_with_pyproject: Path) -> Path:
    """A repository tagged ``v1.2.3`` followed by a fix and a feature."""
    repo = temp_git_repo_with_pyproject
    git(repo, "tag", "v1.2.3")
    commit(repo, "fix(io): close file handles")
    commit(repo, "feat(cli): add --json flag\n\nPrints machine readable output.")
    return repo


@pytest.fixture
def run_git():
    """The ``git`` helper, for tests that shape repositories further."""
    return git


@pytest.fixture
def make_commit():
    """The ``commit`` helper."""
    return commit


@pytest.fixture
def make_git_commit():
    """Factory for :class:`GitCommit` values."""

    def _make(message: str, sha: str = "abc1234def5678") -> GitCommit:
        return GitCommit(
            sha=sha,
            message=message,
            author_name="Test",
            author_email="test@example.com",
            date=datetime(2024, 1, 15, tzinfo=UTC),
        )

    return _make


@pytest.fixture
def feat_commit() -> Commit:
    return Commit("add login", commit_type=CommitType.FEATURE, scope="auth")


@pytest.fixture
def fix_commit() -> Commit:
    return Commit("handle null response", commit_type=CommitType.FIX, scope="api")


@pytest.fixture
def breaking_commit() -> Commit:
    return Commit("drop python 3.10", commit_type=CommitType.CHORE, breaking=True)


@pytest.fixture
def docs_commit() -> Commit:
    return Commit("fix typo", commit_type=CommitType.DOCS)
