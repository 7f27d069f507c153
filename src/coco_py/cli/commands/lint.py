"""Implementation of the 'lint' command.

Lints a given commit message, or the message of the last commit of a
repository, and fails when the result does not meet the configured level.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from coco_py.cli.utils import (
    EXIT_DATAERR,
    load_config_or_exit,
    open_repository_or_exit,
    print_lint_result,
)
from coco_py.core.lint import lint
from coco_py.logging import get_logger

if TYPE_CHECKING:
    from rich.console import Console

    from coco_py.core.lint import Severity

log = get_logger(__name__)


def run_lint(
    message: str | None,
    path: str | None,
    level: Severity | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the lint command.

    Args:
        message: Commit message to lint; takes precedence over ``path``
        path: Repository whose last commit message is linted
        level: Lowest severity that fails the command, overrides the config
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()
    config = load_config_or_exit(project_path, err_console)

    if message is None:
        repo = open_repository_or_exit(project_path, err_console)
        last = repo.get_last_commit()
        if last is None:
            err_console.print(f"[red]Error:[/] no commits to lint in {repo.path}")
            raise SystemExit(1)
        log.debug("linting last commit", sha=last.short_sha)
        message = last.message
        console.print(f"[dim]Linting {last.short_sha}: {escape(last.subject)}[/]")

    result = lint(message)
    print_lint_result(result, console)

    threshold = level or config.lint.fail_level
    if result.fails_at(threshold):
        raise SystemExit(EXIT_DATAERR)

    if config.lint.require_scope and result.commit is not None and result.commit.scope is None:
        err_console.print("[red]Error:[/] a scope is required by the configuration")
        raise SystemExit(EXIT_DATAERR)
