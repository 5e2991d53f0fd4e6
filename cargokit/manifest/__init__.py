"""
Cargo.toml document model.

Usage:
    from cargokit.manifest import parse_manifest

    doc = parse_manifest(Path("Cargo.toml").read_bytes())
    if doc.has_package:
        print(doc.package.name, doc.package.version)
"""

from .document import MANIFEST_FILE_NAME, ManifestDocument, Target, parse_manifest
from .package import Edition, PackageInfo
from .workspace import WorkspaceInfo

__all__ = [
    "MANIFEST_FILE_NAME",
    "ManifestDocument",
    "Target",
    "parse_manifest",
    "Edition",
    "PackageInfo",
    "WorkspaceInfo",
]
