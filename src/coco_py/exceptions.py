"""Exception hierarchy for coco-py.

Lint findings are never raised: they are returned as
:class:`~coco_py.core.lint.Violation` values. Exceptions are reserved for
conditions the caller has to handle explicitly, such as rolling a version
back below zero or a missing manifest.
"""

from __future__ import annotations


class CocoError(Exception):
    """Base class for all coco-py errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# Versioning
# =============================================================================


class VersionError(CocoError):
    """Base class for version manipulation errors."""


class VersionUnderflowError(VersionError):
    """A rollback would decrement a version component below zero."""

    def __init__(self, message: str, *, component: str) -> None:
        super().__init__(message)
        self.component = component


class InvalidPreReleaseError(VersionError):
    """A pre-release identifier is not a list of semver identifiers."""


class VersionNotFoundError(VersionError):
    """No version could be found where one was expected."""


# =============================================================================
# Configuration
# =============================================================================


class ConfigError(CocoError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """The configuration file does not exist."""


class ConfigValidationError(ConfigError):
    """The configuration exists but is invalid."""


# =============================================================================
# Project / manifest
# =============================================================================


class ProjectError(CocoError):
    """Reading or updating a project file failed."""


class ManifestNotFoundError(ProjectError):
    """No manifest file was found below the given path."""


# =============================================================================
# Git
# =============================================================================


class GitError(CocoError):
    """A git command failed."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}\n{self.stderr.strip()}"
        return self.message


class GitNotInstalledError(GitError):
    """The git executable cannot be found."""


class NotARepositoryError(GitError):
    """The path is not inside a git work tree."""
