"""Manifest rendering and writing."""

from .manifest import build_manifest_tree, render_manifest
from .writer import write_manifest

__all__ = ["build_manifest_tree", "render_manifest", "write_manifest"]
