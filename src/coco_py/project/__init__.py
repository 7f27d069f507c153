"""Project file handling for coco-py."""

from __future__ import annotations

from coco_py.project.manifest import find_manifest, read_manifest_version, update_manifest_version

__all__ = ["find_manifest", "read_manifest_version", "update_manifest_version"]
