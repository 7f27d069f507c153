"""Version control integration for coco-py."""

from __future__ import annotations

from coco_py.vcs.git import GitCommit, GitRepository, is_git_installed

__all__ = ["GitCommit", "GitRepository", "is_git_installed"]
