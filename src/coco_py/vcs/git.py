"""Git integration through the ``git`` executable.

Only the handful of read operations coco-py needs: locating the work
tree, finding the latest release tag and reading commit messages.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from coco_py.exceptions import GitError, GitNotInstalledError, NotARepositoryError
from coco_py.logging import get_logger

log = get_logger(__name__)

# Field and record separators for `git log --format`.
_FS = "\x1f"
_RS = "\x1e"
_LOG_FORMAT = f"%H{_FS}%an{_FS}%ae{_FS}%ct{_FS}%B{_RS}"
_NO_COMMITS_MESSAGES = ("does not have any commits", "bad default revision")


@dataclass(frozen=True)
class GitCommit:
    """A commit as read from git, before conventional parsing."""

    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def subject(self) -> str:
        return self.message.split("\n", 1)[0].strip()


def is_git_installed() -> bool:
    """Check whether ``git --version`` can be executed."""
    try:
        subprocess.run(["git", "--version"], capture_output=True, check=True)
    except (OSError, subprocess.CalledProcessError):
        log.warning("git executable not available")
        return False
    return True


class GitRepository:
    """Read access to a git work tree.

    Args:
        path: Any directory inside the work tree

    Raises:
        GitNotInstalledError: If git cannot be executed
        NotARepositoryError: If ``path`` is not inside a work tree
    """

    def __init__(self, path: Path) -> None:
        if not path.is_dir():
            raise NotARepositoryError(f"{path} does not exist or is not a directory")
        if not is_git_installed():
            raise GitNotInstalledError("git is not installed or not on PATH")

        try:
            toplevel = self._git(path, "rev-parse", "--show-toplevel")
        except GitError as e:
            raise NotARepositoryError(f"{path} is not a git repository", stderr=e.stderr) from e

        self.path = Path(toplevel)
        log.debug("opened repository", root=str(self.path))

    @staticmethod
    def _git(cwd: Path, *args: str) -> str:
        command = ["git", *args]
        log.debug("running git", command=" ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"'{' '.join(command)}' failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def run(self, *args: str) -> str:
        """Run a git command in the repository root and return stdout."""
        return self._git(self.path, *args)

    def get_latest_tag(self, pattern: str = "*") -> str | None:
        """Return the most recent tag reachable from HEAD matching ``pattern``."""
        try:
            return self.run("describe", "--tags", "--abbrev=0", "--match", pattern) or None
        except GitError:
            log.debug("no tag found", pattern=pattern)
            return None

    def get_commits_since_tag(self, tag: str | None) -> list[GitCommit]:
        """Return commits after ``tag`` (all commits if ``None``), oldest first."""
        args = ["log", "--reverse", f"--format={_LOG_FORMAT}"]
        if tag:
            args.append(f"{tag}..HEAD")
        try:
            output = self.run(*args)
        except GitError as e:
            # A repository without any commit has no HEAD yet.
            if e.stderr and any(m in e.stderr for m in _NO_COMMITS_MESSAGES):
                return []
            raise
        return _parse_log(output)

    def get_last_commit(self) -> GitCommit | None:
        """Return the commit HEAD points to."""
        try:
            output = self.run("log", "-1", f"--format={_LOG_FORMAT}")
        except GitError:
            return None
        commits = _parse_log(output)
        return commits[0] if commits else None


def _parse_log(output: str) -> list[GitCommit]:
    commits = []
    for record in output.split(_RS):
        record = record.strip("\n")
        if not record:
            continue
        sha, name, email, timestamp, message = record.split(_FS, 4)
        commits.append(
            GitCommit(
                sha=sha,
                message=message.strip(),
                author_name=name,
                author_email=email,
                date=datetime.fromtimestamp(int(timestamp), tz=UTC),
            )
        )
    return commits
