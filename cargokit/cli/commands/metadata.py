"""
Metadata command: resolve and print the Cargo workspace.

Prints the workspace root, its member packages (the active one marked
with ``*``) and every diagnostic found while resolving.
"""

import json
import logging
from typing import Any, Dict

from cargokit.core import console
from cargokit.core.exceptions import MetadataError
from cargokit.metadata import Metadata

logger = logging.getLogger(__name__)


def metadata_to_dict(metadata: Metadata) -> Dict[str, Any]:
    """JSON-friendly summary of a resolved workspace."""
    active = metadata.packages.active_index
    return {
        "workspace_root": (
            str(metadata.workspace.directory) if metadata.workspace.directory else None
        ),
        "members": list(metadata.workspace.members),
        "packages": [
            {
                "name": package.name,
                "version": package.version,
                "manifest_path": str(package.path),
                "active": i == active,
            }
            for i, package in enumerate(metadata.packages)
        ],
        "diagnostics": [
            {
                "kind": d.kind.value,
                "path": str(d.path) if d.path is not None else None,
                "message": d.message,
                "error": str(d.error) if d.error is not None else None,
            }
            for d in metadata.diagnostics
        ],
    }


def run(args) -> int:
    """
    Run metadata command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        metadata = Metadata.from_dir(args.project_root)
    except MetadataError as e:
        console.error(str(e))
        return 1

    if getattr(args, "json", False):
        print(json.dumps(metadata_to_dict(metadata), indent=2))
    else:
        print(f"workspace: {metadata.workspace.directory}")
        active = metadata.packages.active_index
        for i, package in enumerate(metadata.packages):
            marker = "*" if i == active else " "
            print(f"{marker} {package.name} v{package.version} ({package.path})")

        for diagnostic in metadata.diagnostics:
            console.report_diagnostic(diagnostic)

    if getattr(args, "strict", False) and len(metadata.diagnostics) > 0:
        logger.error(f"{len(metadata.diagnostics)} diagnostic(s) reported")
        return 1
    return 0
