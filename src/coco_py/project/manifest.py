"""Manifest discovery and version manipulation.

The version of a project lives in a manifest file: a YAML manifest such
as ``apax.yml`` with a top-level ``version: 1.2.3`` line, or a
``pyproject.toml`` with ``version = "1.2.3"`` in ``[project]`` or
``[tool.poetry]``.

Formatting and comments are preserved by replacing only the version
string with a targeted regex instead of parsing and rewriting the file.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from coco_py.core.version import Version
from coco_py.exceptions import ManifestNotFoundError, ProjectError, VersionNotFoundError
from coco_py.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = get_logger(__name__)

# Top-level `version: 1.2.3`, optionally quoted.
_YAML_VERSION = re.compile(
    r"""^(?P<prefix>version:[ \t]*)(?P<quote>["']?)(?P<version>[^"'\s#]+)(?P=quote)""",
    re.MULTILINE,
)
_TOML_VERSION = re.compile(
    r"""^(?P<prefix>version\s*=\s*)(?P<quote>["'])(?P<version>[^"']+)(?P=quote)""",
    re.MULTILINE,
)
_TOML_SECTIONS = (r"^\[project\]", r"^\[tool\.poetry\]")


def _is_toml(path: Path) -> bool:
    return path.suffix == ".toml"


def find_manifest(
    path: Path,
    name: str = "apax.yml",
    ignore_dirs: Iterable[str] = (".apax",),
) -> Path:
    """Locate the manifest file.

    Args:
        path: The manifest itself, or a directory to search depth-first
        name: File name of the manifest
        ignore_dirs: Directory names that are never entered

    Returns:
        Path to the manifest

    Raises:
        ManifestNotFoundError: If no manifest is found
    """
    ignored = set(ignore_dirs)

    if path.is_file():
        if path.name == name:
            return path
        raise ManifestNotFoundError(f"{path} is not a {name} manifest")

    if path.is_dir():
        found = _search(path, name, ignored)
        if found is not None:
            log.debug("found manifest", path=str(found))
            return found

    raise ManifestNotFoundError(f"No {name} found in {path}")


def _search(directory: Path, name: str, ignored: set[str]) -> Path | None:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        log.debug("skipping unreadable directory", path=str(directory), error=str(e))
        return None

    for entry in entries:
        if entry.is_file() and entry.name == name:
            return entry
    for entry in entries:
        if entry.is_dir() and entry.name not in ignored:
            found = _search(entry, name, ignored)
            if found is not None:
                return found
    return None


def _toml_section(content: str, header: str) -> re.Match[str] | None:
    return re.search(rf"{header}.*?(?=^\[|\Z)", content, re.MULTILINE | re.DOTALL)


def read_manifest_version(path: Path) -> Version:
    """Read the version from a manifest.

    Raises:
        ProjectError: If the manifest does not exist
        VersionNotFoundError: If there is no valid version in it
    """
    if not path.is_file():
        raise ProjectError(f"Manifest not found: {path}")

    content = path.read_text(encoding="utf-8")
    match: re.Match[str] | None = None

    if _is_toml(path):
        for header in _TOML_SECTIONS:
            section = _toml_section(content, header)
            if section and (match := _TOML_VERSION.search(section.group(0))):
                break
    else:
        match = _YAML_VERSION.search(content)

    if match is None:
        raise VersionNotFoundError(f"Could not find a version field in {path}")

    version = Version.parse(match.group("version"))
    if version is None:
        raise VersionNotFoundError(
            f"Version {match.group('version')!r} in {path} is not a semantic version"
        )
    return version


def update_manifest_version(path: Path, new_version: Version | str) -> Path:
    """Replace the version in a manifest.

    Args:
        path: Manifest to update
        new_version: Version to write

    Returns:
        The updated path

    Raises:
        VersionNotFoundError: If there is no version field to replace
        ProjectError: If the manifest does not exist or already holds
            ``new_version``
    """
    if not path.is_file():
        raise ProjectError(f"Manifest not found: {path}")

    content = path.read_text(encoding="utf-8")
    replacement = str(new_version)

    def substitute(match: re.Match[str]) -> str:
        quote = match.group("quote")
        return f"{match.group('prefix')}{quote}{replacement}{quote}"

    if _is_toml(path):
        new_content = content
        for header in _TOML_SECTIONS:
            section = _toml_section(content, header)
            if section is None:
                continue
            updated, count = _TOML_VERSION.subn(substitute, section.group(0), count=1)
            if count:
                new_content = content[: section.start()] + updated + content[section.end() :]
                break
        else:
            count = 0
    else:
        new_content, count = _YAML_VERSION.subn(substitute, content, count=1)

    if count == 0:
        raise VersionNotFoundError(f"Could not find a version field to update in {path}")
    if new_content == content:
        raise ProjectError(f"Version in {path} was not updated. It may already be {replacement}.")

    path.write_text(new_content, encoding="utf-8")
    log.info("updated manifest version", path=str(path), version=replacement)
    return path
