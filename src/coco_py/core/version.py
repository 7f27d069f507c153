"""Semantic version value type.

Implements the `Semantic Versioning 2.0.0 <https://semver.org/>`_ shape
``major.minor.patch[-pre_release][+metadata]`` together with the
commit-driven state transitions used by coco-py:

- :meth:`Version.bump` advances the version according to a parsed commit.
- :meth:`Version.rollback` (and the free-standing :func:`rollback`) undoes
  such a step.
- :meth:`Version.compare` orders versions by semver precedence; build
  metadata never takes part in ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from coco_py.core.commit_type import CommitType
from coco_py.exceptions import InvalidPreReleaseError, VersionUnderflowError

if TYPE_CHECKING:
    from coco_py.core.commits import Commit

_IDENTIFIERS = r"[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*"

VERSION_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<major>[0-9]+)\.(?P<minor>[0-9]+)\.(?P<patch>[0-9]+)"
    rf"(?P<pre_release>-{_IDENTIFIERS})?"
    rf"(?P<metadata>\+{_IDENTIFIERS})?"
)

_IDENTIFIERS_PATTERN: re.Pattern[str] = re.compile(rf"^{_IDENTIFIERS}$")


def is_valid_pre_release(identifier: str) -> bool:
    """Whether ``identifier`` may follow the ``-`` of a version."""
    return _IDENTIFIERS_PATTERN.match(identifier) is not None


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _compare_pre_release(left: str, right: str) -> int:
    """Compare two pre-release strings identifier by identifier.

    Numeric identifiers compare numerically and rank below alphanumeric
    ones. When one list is a prefix of the other, the shorter one ranks
    lower.
    """
    left_ids = left.split(".")
    right_ids = right.split(".")

    for a, b in zip(left_ids, right_ids, strict=False):
        if a == b:
            continue
        a_numeric, b_numeric = a.isdigit(), b.isdigit()
        if a_numeric and b_numeric:
            return _cmp(int(a), int(b))
        if a_numeric:
            return -1
        if b_numeric:
            return 1
        return _cmp(a, b)

    return _cmp(len(left_ids), len(right_ids))


@dataclass
class Version:
    """A semantic version, mutated in place by bump and rollback.

    Attributes:
        major: Incremented for changes breaking the public API; resets
            minor and patch.
        minor: Incremented for backwards compatible features; resets patch.
        patch: Incremented for backwards compatible bug fixes.
        pre_release: Dot-separated identifiers marking an unstable build,
            without the leading ``-``.
        metadata: Build metadata without the leading ``+``. Ignored for
            precedence.

    ``==`` is dataclass equality and does compare ``metadata``, while
    :meth:`compare` and the ordering operators do not. ``1.0.0+a`` and
    ``1.0.0+b`` are therefore unequal, yet neither is ``<`` the other and
    both ``<=`` and ``>=`` hold. Use ``compare(other) == 0`` to test for
    equal precedence.
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    pre_release: str | None = None
    metadata: str | None = None

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        for name in ("pre_release", "metadata"):
            value = getattr(self, name)
            if value is not None and not _IDENTIFIERS_PATTERN.match(value):
                raise ValueError(
                    f"{name} must be dot-separated alphanumeric identifiers, got {value!r}"
                )

    @classmethod
    def parse(cls, text: str) -> Version | None:
        """Parse the first semantic version found in ``text``.

        The match is not anchored, so ``"version: 1.2.3"`` parses as
        ``1.2.3``; callers are expected to trim their input.

        Args:
            text: String containing a version such as ``1.2.3-alpha.1+d408340``

        Returns:
            The parsed version, or ``None`` if major, minor and patch are
            not all present.

        >>> str(Version.parse("1.2.3-alpha+d408340"))
        '1.2.3-alpha+d408340'
        >>> Version.parse("2.3") is None
        True
        """
        match = VERSION_PATTERN.search(text)
        if match is None:
            return None

        try:
            major = int(match.group("major"))
            minor = int(match.group("minor"))
            patch = int(match.group("patch"))
        except ValueError:
            return None

        pre_release = match.group("pre_release")
        metadata = match.group("metadata")

        return cls(
            major=major,
            minor=minor,
            patch=patch,
            pre_release=pre_release[1:] if pre_release else None,
            metadata=metadata[1:] if metadata else None,
        )

    def __str__(self) -> str:
        version = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release is not None:
            version += f"-{self.pre_release}"
        if self.metadata is not None:
            version += f"+{self.metadata}"
        return version

    @property
    def is_prerelease(self) -> bool:
        return self.pre_release is not None

    def copy(self) -> Version:
        return replace(self)

    def with_prerelease(self, identifier: str) -> Version:
        """Return a copy carrying ``identifier`` as pre-release tag.

        Raises:
            InvalidPreReleaseError: If ``identifier`` is not made of
                dot-separated alphanumeric identifiers
        """
        if not is_valid_pre_release(identifier):
            raise InvalidPreReleaseError(
                f"Invalid pre-release identifier {identifier!r}: "
                "expected dot-separated alphanumeric identifiers such as 'rc.1'"
            )
        return replace(self, pre_release=identifier)

    @property
    def core(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def reset(self) -> None:
        """Reset every field to ``0.0.0`` without pre-release or metadata."""
        self.major = 0
        self.minor = 0
        self.patch = 0
        self.pre_release = None
        self.metadata = None

    # -------------------------------------------------------------------------
    # Commit-driven transitions
    # -------------------------------------------------------------------------

    def bump(self, commit: Commit) -> None:
        """Advance the version according to ``commit``.

        A breaking commit increments major and resets everything else.
        ``fix`` increments patch, ``feat`` increments minor and resets
        patch. Other types leave the version, including its pre-release
        and metadata, untouched.
        """
        if commit.breaking:
            major = self.major + 1
            self.reset()
            self.major = major
            return

        if commit.commit_type is CommitType.FIX:
            self.patch += 1
        elif commit.commit_type is CommitType.FEATURE:
            self.minor += 1
            self.patch = 0
        elif commit.commit_type is CommitType.BREAKING_CHANGE:
            self.major += 1
            self.minor = 0
            self.patch = 0
        else:
            return

        self.pre_release = None
        self.metadata = None

    def rollback(self, commit: Commit) -> None:
        """Undo the component increment ``commit`` caused.

        Raises:
            VersionUnderflowError: If a component would drop below zero.
                The version is left unchanged.
        """
        rollback(self, commit.breaking, commit.commit_type)

    # -------------------------------------------------------------------------
    # Precedence
    # -------------------------------------------------------------------------

    def compare(self, other: Version) -> int:
        """Compare by semver precedence.

        Returns:
            A negative number, zero or a positive number when ``self`` has
            lower, equal or higher precedence than ``other``.
        """
        core = _cmp(
            (self.major, self.minor, self.patch),
            (other.major, other.minor, other.patch),
        )
        if core:
            return core

        if self.pre_release is None and other.pre_release is None:
            return 0
        if self.pre_release is None:
            return 1
        if other.pre_release is None:
            return -1
        return _compare_pre_release(self.pre_release, other.pre_release)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0


def rollback(version: Version, breaking: bool, commit_type: CommitType) -> None:
    """Roll ``version`` back by one commit of the given kind.

    Breaking commits and ``BREAKING CHANGE`` types decrement major,
    ``fix`` decrements patch and ``feat`` decrements minor. Other types
    are a no-op.

    Args:
        version: Version to mutate in place
        breaking: Whether the commit was marked as breaking
        commit_type: Type of the commit being rolled back

    Raises:
        VersionUnderflowError: If the component is already zero
    """
    if breaking or commit_type is CommitType.BREAKING_CHANGE:
        component = "major"
    elif commit_type is CommitType.FIX:
        component = "patch"
    elif commit_type is CommitType.FEATURE:
        component = "minor"
    else:
        return

    current = getattr(version, component)
    if current == 0:
        raise VersionUnderflowError(
            f"Cannot roll back {version}: {component} is already 0",
            component=component,
        )
    setattr(version, component, current - 1)
