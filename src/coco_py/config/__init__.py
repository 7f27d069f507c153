"""Configuration management for coco-py."""

from __future__ import annotations

from coco_py.config.loader import load_config
from coco_py.config.models import CocoConfig, LintConfig, VersionConfig

__all__ = [
    "CocoConfig",
    "LintConfig",
    "VersionConfig",
    "load_config",
]
