"""Parsed conventional commits.

A :class:`Commit` is the structured form of one commit message following
the `Conventional Commits <https://www.conventionalcommits.org/en/v1.0.0/>`_
convention. It is built by the lint engine and drives version bumps and
changelog generation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from coco_py.core.commit_type import CommitType
from coco_py.core.version import rollback

if TYPE_CHECKING:
    from coco_py.core.lint import LintResult
    from coco_py.core.version import Version


@dataclass(frozen=True)
class Commit:
    """A commit message split into its conventional parts.

    Attributes:
        breaking: Whether the change breaks the public API, annotated by
            ``!`` before the colon or by the ``BREAKING CHANGE`` type
        commit_type: Type of the change, e.g. ``fix`` or ``feat``
        scope: Optional part of the code base the change applies to
        header: Short summary after ``type(scope)!:``
        body: Free text after the header, without the footer block
        footer: ``Key: value`` pairs from the end of the message
        raw_type: The literal type token when ``commit_type`` is
            :attr:`CommitType.OTHER`, kept for changelog rendering
    """

    header: str
    commit_type: CommitType = CommitType.OTHER
    breaking: bool = False
    scope: str | None = None
    body: str | None = None
    footer: dict[str, str] | None = None
    raw_type: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.header:
            raise ValueError("Commit header must not be empty")
        if self.commit_type is CommitType.BREAKING_CHANGE and not self.breaking:
            object.__setattr__(self, "breaking", True)

    @classmethod
    def parse(cls, message: str) -> Commit | None:
        """Parse a commit message, discarding the diagnostics.

        Returns:
            The commit, or ``None`` if the message has lint errors.
        """
        from coco_py.core.lint import lint

        return lint(message).commit

    @staticmethod
    def lint(message: str) -> LintResult:
        """Lint a commit message. See :func:`coco_py.core.lint.lint`."""
        from coco_py.core.lint import lint

        return lint(message)

    @property
    def type_name(self) -> str:
        """The type as written, falling back to the canonical token."""
        if self.commit_type is CommitType.OTHER and self.raw_type:
            return self.raw_type.lower()
        return self.commit_type.value

    def bump(self, version: Version) -> None:
        """Bump ``version`` in place according to this commit."""
        version.bump(self)

    def rollback(self, version: Version) -> None:
        """Roll ``version`` back in place by this commit.

        Raises:
            VersionUnderflowError: If a component would drop below zero
        """
        rollback(version, self.breaking, self.commit_type)

    def format(self) -> str:
        """Render the commit back into a conventional commit message."""
        header = self.type_name
        if self.scope:
            header += f"({self.scope})"
        if self.breaking and self.commit_type is not CommitType.BREAKING_CHANGE:
            header += "!"
        header += f": {self.header}"

        parts = [header]
        if self.body:
            parts.extend(["", self.body])
        if self.footer:
            parts.append("")
            parts.extend(f"{key}: {value}" for key, value in self.footer.items())
        return "\n".join(parts)
