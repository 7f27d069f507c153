"""Pydantic models for the ``[tool.coco-py]`` configuration table."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coco_py.core.lint import Severity
from coco_py.core.version import Version, is_valid_pre_release


class LintConfig(BaseModel):
    """Policy applied by ``coco-py lint`` on top of the lint result."""

    model_config = ConfigDict(extra="forbid")

    fail_level: Severity = Field(
        default=Severity.ERROR,
        description="Lowest severity that makes the lint command fail",
    )
    require_scope: bool = Field(
        default=False,
        description="Fail when a commit has no scope",
    )


class VersionConfig(BaseModel):
    """Where the version lives and how releases are tagged."""

    model_config = ConfigDict(extra="forbid")

    manifest: str = Field(
        default="apax.yml",
        description="File name of the manifest that holds the version",
    )
    tag_prefix: str = Field(default="v", description="Prefix of release tags")
    initial_version: str = Field(
        default="0.1.0",
        description="Version of the first release, when no release tag exists",
    )
    pre_release: str | None = Field(
        default=None,
        description="Pre-release identifier appended after bumping, e.g. 'rc.1'",
    )

    @field_validator("initial_version")
    @classmethod
    def _check_initial_version(cls, value: str) -> str:
        if Version.parse(value.strip()) is None:
            raise ValueError(f"not a semantic version: {value!r}")
        return value.strip()

    @field_validator("pre_release")
    @classmethod
    def _check_pre_release(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_pre_release(value):
            raise ValueError(
                f"not a pre-release identifier: {value!r} "
                "(expected dot-separated alphanumeric identifiers such as 'rc.1')"
            )
        return value


class CocoConfig(BaseModel):
    """Root configuration for coco-py."""

    model_config = ConfigDict(extra="forbid")

    lint: LintConfig = Field(default_factory=LintConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)
    ignore_dirs: list[str] = Field(
        default_factory=lambda: [".apax", ".git", "node_modules"],
        description="Directory names skipped while searching for the manifest",
    )
    changelog_path: Path = Field(default=Path("CHANGELOG.md"))

    @property
    def effective_tag_prefix(self) -> str:
        return self.version.tag_prefix
