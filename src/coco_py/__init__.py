"""coco-py: conventional commit linting and semantic versioning.

Lints commit messages against the Conventional Commits convention and
uses the parsed commits to bump or roll back a semantic version.
"""

from __future__ import annotations

from coco_py.core import Commit, CommitType, LintResult, Severity, Version, Violation, lint

__version__ = "0.1.0"

__all__ = [
    "Commit",
    "CommitType",
    "LintResult",
    "Severity",
    "Version",
    "Violation",
    "__version__",
    "lint",
]
