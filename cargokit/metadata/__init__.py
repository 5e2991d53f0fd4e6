"""
Workspace metadata resolution.

This package locates the governing Cargo.toml for a directory, expands
workspace member patterns, loads member manifests and reports problems as
diagnostics instead of failing.
"""

from .diagnostics import DiagKind, Diagnostic, Diagnostics
from .packages import Package, Packages, Workspace
from .patterns import (
    apply_exclude_patterns,
    apply_member_patterns,
    expand_manifest_pattern,
)
from .resolver import Metadata, find_manifest, resolve

__all__ = [
    "DiagKind",
    "Diagnostic",
    "Diagnostics",
    "Package",
    "Packages",
    "Workspace",
    "apply_exclude_patterns",
    "apply_member_patterns",
    "expand_manifest_pattern",
    "Metadata",
    "find_manifest",
    "resolve",
]
