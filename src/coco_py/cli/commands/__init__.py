"""CLI command implementations."""

from __future__ import annotations

from coco_py.cli.commands.bump import run_bump
from coco_py.cli.commands.changelog import run_changelog
from coco_py.cli.commands.lint import run_lint
from coco_py.cli.commands.rollback import run_rollback

__all__ = ["run_bump", "run_changelog", "run_lint", "run_rollback"]
