"""Conventional commit type tags."""

from __future__ import annotations

from enum import Enum


class CommitType(str, Enum):
    """Closed set of conventional commit types.

    The value is the canonical token as it appears in a commit message.
    Unknown tokens are never rejected; they map to :attr:`OTHER`.
    """

    FIX = "fix"
    FEATURE = "feat"
    BREAKING_CHANGE = "breaking change"
    BUILD = "build"
    CHORE = "chore"
    CI = "ci"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    PERFORMANCE = "perf"
    TEST = "test"
    OTHER = "other"

    @classmethod
    def default(cls) -> CommitType:
        return cls.OTHER

    @classmethod
    def from_token(cls, token: str) -> CommitType:
        """Classify a type token case-insensitively.

        >>> CommitType.from_token("FEAT")
        <CommitType.FEATURE: 'feat'>
        >>> CommitType.from_token("BREAKING-CHANGE")
        <CommitType.BREAKING_CHANGE: 'breaking change'>
        >>> CommitType.from_token("wip")
        <CommitType.OTHER: 'other'>
        """
        normalized = token.strip().lower().replace("-", " ")
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER

    @property
    def title(self) -> str:
        """Section title used when rendering changelogs."""
        return _TITLES[self]

    @property
    def affects_version(self) -> bool:
        """Whether a commit of this type moves the version on its own."""
        return self in (CommitType.FIX, CommitType.FEATURE, CommitType.BREAKING_CHANGE)


_TITLES: dict[CommitType, str] = {
    CommitType.FIX: "Bug Fixes",
    CommitType.FEATURE: "Features",
    CommitType.BREAKING_CHANGE: "Breaking Changes",
    CommitType.BUILD: "Build",
    CommitType.CHORE: "Chores",
    CommitType.CI: "CI",
    CommitType.DOCS: "Documentation",
    CommitType.STYLE: "Style",
    CommitType.REFACTOR: "Refactoring",
    CommitType.PERFORMANCE: "Performance",
    CommitType.TEST: "Tests",
    CommitType.OTHER: "Other",
}
