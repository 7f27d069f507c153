"""Command line interface for coco-py."""

from __future__ import annotations

from coco_py.cli.app import app

__all__ = ["app"]
