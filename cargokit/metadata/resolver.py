"""
Workspace resolution.

Given a directory, find the governing Cargo.toml and work out which
workspace it belongs to, which packages are members, and which package is
the one being worked on ("active").

Only a missing manifest is a hard error. Everything found after that is
reported through Diagnostics and resolution carries on with what it has.

Usage:
    from cargokit.metadata import Metadata

    metadata = Metadata.from_current_dir()
    for package in metadata.packages:
        print(package.name, package.path)
    for diagnostic in metadata.diagnostics:
        print(diagnostic)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from cargokit.core.exceptions import (
    ManifestFormatError,
    ManifestNotFoundError,
    MetadataError,
)
from cargokit.core.path import normalize
from cargokit.manifest import (
    MANIFEST_FILE_NAME,
    ManifestDocument,
    WorkspaceInfo,
    parse_manifest,
)
from cargokit.metadata.diagnostics import DiagKind, Diagnostics
from cargokit.metadata.packages import Package, Packages, Workspace
from cargokit.metadata.patterns import apply_exclude_patterns, apply_member_patterns

logger = logging.getLogger(__name__)


def find_manifest(start_directory: Union[str, Path]) -> Path:
    """
    Find the nearest Cargo.toml at or above ``start_directory``.

    Raises:
        MetadataError: If the directory cannot be canonicalized
        ManifestNotFoundError: If no ancestor holds a Cargo.toml
    """
    try:
        directory = Path(start_directory).resolve(strict=True)
    except OSError as e:
        raise MetadataError(f"{start_directory}: unable to canonicalize path: {e}") from e

    for candidate in (directory, *directory.parents):
        manifest = candidate / MANIFEST_FILE_NAME
        try:
            found = manifest.exists()
        except OSError as e:
            raise MetadataError(f"{manifest}: unable to check for manifest: {e}") from e
        if found:
            logger.debug(f"Found manifest: {manifest}")
            return manifest

    raise ManifestNotFoundError(
        f"{directory}: {MANIFEST_FILE_NAME} not found in directory nor ancestors"
    )


@dataclass
class Metadata:
    """
    Result of resolving a workspace.

    Attributes:
        packages: Workspace members in load order, with the active package marked
        workspace: Workspace root directory and its declaration
        diagnostics: Everything that looked wrong along the way
    """

    packages: Packages = field(default_factory=Packages)
    workspace: Workspace = field(default_factory=Workspace)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    @classmethod
    def from_current_dir(cls) -> "Metadata":
        return cls.from_dir(Path.cwd())

    @classmethod
    def from_dir(cls, directory: Union[str, Path]) -> "Metadata":
        """
        Resolve the workspace governing ``directory``.

        Raises:
            MetadataError: If no manifest can be found at all
        """
        return cls.from_file(find_manifest(directory))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Metadata":
        """Resolve starting from a specific Cargo.toml."""
        path = normalize(Path(path).resolve())
        logger.debug(f"Resolving metadata from {path}")

        metadata = cls(workspace=Workspace(directory=path.parent))
        doc = metadata._read_manifest(path)
        if doc is None:
            return metadata

        if doc.has_workspace:
            metadata = cls._from_workspace(path, doc)
            if doc.has_package:
                metadata._set_active(path)
        elif doc.has_package:
            metadata = cls._from_package(path, doc)
        else:
            metadata.diagnostics.push(
                path,
                "expected [package] or [workspace] table in manifest file",
                DiagKind.MALFORMED,
            )

        logger.debug(
            f"Resolved {len(metadata.packages)} package(s) "
            f"with {len(metadata.diagnostics)} diagnostic(s)"
        )
        return metadata

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    @classmethod
    def _from_workspace(cls, path: Path, doc: ManifestDocument) -> "Metadata":
        """Expand members/exclude of a workspace manifest and load every match."""
        directory = path.parent
        metadata = cls(workspace=Workspace(directory=directory, info=doc.workspace))

        matched = set()
        apply_member_patterns(
            matched, directory, doc.workspace.members, path, metadata.diagnostics
        )
        apply_exclude_patterns(
            matched, directory, doc.workspace.exclude, path, metadata.diagnostics
        )

        for manifest_path in sorted(matched):
            metadata._load_package(manifest_path)
        return metadata

    @classmethod
    def _from_package(cls, path: Path, doc: ManifestDocument) -> "Metadata":
        """Find the workspace a package-only manifest belongs to."""
        pointer = doc.package.workspace
        if pointer is not None:
            ws_directory = normalize(path.parent / pointer)
            return cls._from_workspace_pointer(path, doc, ws_directory)

        for directory in path.parent.parents:
            candidate = directory / MANIFEST_FILE_NAME
            try:
                found = candidate.exists()
            except OSError as e:
                standalone = cls._standalone(path, doc)
                standalone.diagnostics.push(
                    candidate, "unable to read manifest file", DiagKind.IO, e
                )
                return standalone
            if not found:
                continue

            standalone = cls._standalone(path, doc)
            ws_doc = standalone._read_manifest(candidate)
            if ws_doc is None:
                return standalone
            if not ws_doc.has_workspace:
                continue
            return cls._join_workspace(path, candidate, ws_doc)

        return cls._standalone(path, doc)

    @classmethod
    def _from_workspace_pointer(
        cls, path: Path, doc: ManifestDocument, ws_directory: Path
    ) -> "Metadata":
        ws_path = ws_directory / MANIFEST_FILE_NAME
        try:
            members = [str(path.parent.relative_to(ws_directory))]
        except ValueError:
            members = []

        fallback = cls._standalone(path, doc, ws_directory, members)
        ws_doc = fallback._read_manifest(ws_path)
        if ws_doc is None:
            return fallback
        if not ws_doc.has_workspace:
            fallback.diagnostics.push(ws_path, "expected a [workspace]", DiagKind.MALFORMED)
            return fallback
        return cls._join_workspace(path, ws_path, ws_doc)

    @classmethod
    def _join_workspace(
        cls, path: Path, ws_path: Path, ws_doc: ManifestDocument
    ) -> "Metadata":
        metadata = cls._from_workspace(ws_path, ws_doc)
        metadata._set_active(path)
        if ws_doc.has_package:
            metadata._expect_contains(ws_path)
        return metadata

    @classmethod
    def _standalone(
        cls,
        path: Path,
        doc: ManifestDocument,
        directory: Optional[Path] = None,
        members: Optional[List[str]] = None,
    ) -> "Metadata":
        """A single-package result with the package marked active."""
        info = WorkspaceInfo(members=["."] if members is None else members)
        metadata = cls(workspace=Workspace(directory=directory or path.parent, info=info))
        metadata.packages.insert(Package(path, doc))
        metadata.packages.mark_active(path)
        return metadata

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_manifest(self, path: Path) -> Optional[ManifestDocument]:
        try:
            data = path.read_bytes()
        except OSError as e:
            self.diagnostics.push(path, "unable to read manifest file", DiagKind.IO, e)
            return None

        try:
            return parse_manifest(data)
        except ManifestFormatError as e:
            self.diagnostics.push(path, "unable to parse manifest file", DiagKind.FORMAT, e)
            return None

    def _load_package(self, path: Path) -> None:
        doc = self._read_manifest(path)
        if doc is None:
            return
        if not doc.has_package:
            self.diagnostics.push(path, "missing [package] in manifest", DiagKind.MALFORMED)
            return

        name = doc.package.name
        name_collision, path_collision = self.packages.insert(Package(path, doc))
        if name_collision is not None:
            self.diagnostics.push(
                path, f'multiple workspace packages named "{name}"', DiagKind.MALFORMED
            )
            self.diagnostics.push(
                self.packages[name_collision].path,
                f'previous package named "{name}"',
                DiagKind.MALFORMED,
            )
        if path_collision is not None:
            self.diagnostics.push(path, "multiple packages at path", DiagKind.BUG)

    def _set_active(self, path: Path) -> None:
        if not self.packages.mark_active(path):
            self.diagnostics.push(
                path,
                "is expected to be the active project, but it is not part of the workspace",
                DiagKind.MALFORMED,
            )

    def _expect_contains(self, path: Path) -> None:
        if path not in self.packages:
            self.diagnostics.push(
                path,
                "is expected to be part of the workspace, but it is not",
                DiagKind.MALFORMED,
            )


def resolve(start_directory: Union[str, Path]) -> Metadata:
    """Shorthand for Metadata.from_dir()."""
    return Metadata.from_dir(start_directory)
