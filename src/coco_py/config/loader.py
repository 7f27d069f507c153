"""Configuration loading from pyproject.toml.

coco-py reads its settings from the ``[tool.coco-py]`` table of the
nearest ``pyproject.toml``. Projects without one, or without the table,
get the defaults.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from coco_py.config.models import CocoConfig
from coco_py.exceptions import ConfigNotFoundError, ConfigValidationError

TOOL_KEY = "coco-py"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Args:
        start: Directory to start from, defaults to the working directory

    Returns:
        Path to the closest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_coco_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.coco-py]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_KEY, {})


def load_config(path: Path | None = None) -> CocoConfig:
    """Load the coco-py configuration for a project.

    Args:
        path: Project directory or pyproject.toml path

    Returns:
        Validated configuration, defaults if nothing is configured

    Raises:
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and path.is_file():
        pyproject_path = path
    else:
        try:
            pyproject_path = find_pyproject_toml(path)
        except ConfigNotFoundError:
            return CocoConfig()

    data = extract_coco_config(load_pyproject_toml(pyproject_path))

    try:
        return CocoConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{TOOL_KEY}] in {pyproject_path}:\n{e}") from e
