"""Core business logic for coco-py.

This module contains the fundamental building blocks:
- Semantic version parsing, ordering and commit-driven bump/rollback
- Conventional commit tokenizing, linting and parsing
- Changelog rendering

Nothing in here performs I/O, spawns processes or logs.
"""

from __future__ import annotations

from coco_py.core.changelog import render_changelog
from coco_py.core.commit_type import CommitType
from coco_py.core.commits import Commit
from coco_py.core.footer import split_body_and_footer
from coco_py.core.grammar import Token, TokenKind, tokenize
from coco_py.core.lint import LintResult, Severity, Violation, lint
from coco_py.core.version import Version, rollback

__all__ = [
    # Commits
    "Commit",
    "CommitType",
    # Lint
    "LintResult",
    "Severity",
    "Token",
    "TokenKind",
    # Version
    "Version",
    "Violation",
    "lint",
    # Changelog
    "render_changelog",
    "rollback",
    "split_body_and_footer",
    "tokenize",
]
