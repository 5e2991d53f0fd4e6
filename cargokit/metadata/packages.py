"""Workspace and package index types."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from cargokit.manifest import ManifestDocument, PackageInfo, WorkspaceInfo


@dataclass(frozen=True)
class Package:
    """
    A workspace member: absolute manifest path plus its parsed manifest.

    The manifest is guaranteed to have a ``[package]`` section.
    """

    path: Path
    manifest: ManifestDocument

    @property
    def package(self) -> PackageInfo:
        return self.manifest.package

    @property
    def name(self) -> str:
        return self.manifest.package.name

    @property
    def version(self) -> str:
        return self.manifest.package.version

    @property
    def directory(self) -> Path:
        return self.path.parent


@dataclass
class Workspace:
    """
    Resolved workspace root.

    Attributes:
        directory: Directory holding the workspace manifest
        info: Workspace section (members, exclude, ...)
    """

    directory: Optional[Path] = None
    info: WorkspaceInfo = field(default_factory=WorkspaceInfo)

    @property
    def members(self) -> List[str]:
        return self.info.members

    @property
    def exclude(self) -> List[str]:
        return self.info.exclude

    @property
    def default_members(self) -> List[str]:
        return self.info.default_members

    @property
    def metadata(self) -> Optional[Dict[str, Any]]:
        return self.info.metadata


PackageKey = Union[int, str, Path]


class Packages:
    """
    Ordered package list indexed by name and manifest path.

    Insertion order is kept. When two packages share a name or a path, the
    first one inserted stays reachable through the maps, and both remain in
    the list.
    """

    def __init__(self):
        self._list: List[Package] = []
        self._by_name: Dict[str, int] = {}
        self._by_path: Dict[Path, int] = {}
        self._active: Optional[int] = None

    def insert(self, package: Package) -> Tuple[Optional[int], Optional[int]]:
        """
        Append a package.

        Returns:
            (index of an earlier package with the same name or None,
             index of an earlier package at the same path or None)
        """
        index = len(self._list)
        self._list.append(package)

        name_collision = self._by_name.get(package.name)
        if name_collision is None:
            self._by_name[package.name] = index

        path_collision = self._by_path.get(package.path)
        if path_collision is None:
            self._by_path[package.path] = index

        return name_collision, path_collision

    def get(self, key: PackageKey) -> Optional[Package]:
        """
        Look a package up by list position, name or manifest path.

        Returns:
            The package, or None if there is no match
        """
        if isinstance(key, bool):
            raise TypeError("package key must be int, str or Path")
        if isinstance(key, int):
            return self._list[key] if 0 <= key < len(self._list) else None
        if isinstance(key, str):
            index = self._by_name.get(key)
        elif isinstance(key, Path):
            index = self._by_path.get(key)
        else:
            raise TypeError(f"package key must be int, str or Path, not {type(key).__name__}")
        return self._list[index] if index is not None else None

    def index_of(self, key: PackageKey) -> Optional[int]:
        package = self.get(key)
        if package is None:
            return None
        if isinstance(key, int):
            return key
        return self._by_name[key] if isinstance(key, str) else self._by_path[key]

    def mark_active(self, path: Path) -> bool:
        """
        Mark the package at ``path`` as the active project.

        Returns:
            False if no package has that manifest path

        Raises:
            RuntimeError: If an active package was already marked
        """
        if self._active is not None:
            raise RuntimeError("active package already set")
        index = self._by_path.get(path)
        if index is None:
            return False
        self._active = index
        return True

    @property
    def active(self) -> Optional[Package]:
        return self._list[self._active] if self._active is not None else None

    @property
    def active_index(self) -> Optional[int]:
        return self._active

    def names(self) -> List[str]:
        return [p.name for p in self._list]

    def is_empty(self) -> bool:
        return not self._list

    def __len__(self) -> int:
        return len(self._list)

    def __iter__(self) -> Iterator[Package]:
        return iter(self._list)

    def __getitem__(self, key: PackageKey) -> Package:
        package = self.get(key)
        if package is None:
            raise KeyError(key)
        return package

    def __contains__(self, key: PackageKey) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"Packages({[str(p.path) for p in self._list]!r}, active={self._active!r})"
