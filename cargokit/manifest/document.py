"""
Cargo.toml document model.

Parsing goes through tomlkit so manifests are read the same way cargo
reads them (TOML 1.0). The typed model covers the sections cargokit looks
at. Dependency, target, profile and similar tables stay opaque, and unknown
top-level keys are preserved in ``extra`` so a document can be written
back out unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError

from cargokit.core.exceptions import ManifestFormatError
from cargokit.manifest.fields import (
    as_bool,
    as_model,
    as_model_list,
    as_str,
    as_str_list,
    as_table,
    dump_table,
    parse_table,
    toml_field,
)
from cargokit.manifest.package import Edition, PackageInfo
from cargokit.manifest.workspace import WorkspaceInfo

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "Cargo.toml"


@dataclass
class Target:
    """A ``[lib]``, ``[[bin]]``, ``[[example]]``, ``[[test]]`` or ``[[bench]]`` entry."""

    name: Optional[str] = toml_field(as_str, default=None)
    path: Optional[str] = toml_field(as_str, default=None)
    test: Optional[bool] = toml_field(as_bool, default=None)
    doctest: Optional[bool] = toml_field(as_bool, default=None)
    bench: Optional[bool] = toml_field(as_bool, default=None)
    doc: Optional[bool] = toml_field(as_bool, default=None)
    plugin: Optional[bool] = toml_field(as_bool, default=None)
    proc_macro: Optional[bool] = toml_field(as_bool, default=None)
    harness: Optional[bool] = toml_field(as_bool, default=None)
    edition: Optional[Edition] = toml_field(Edition.parse, dump=str, default=None)
    crate_type: List[str] = toml_field(as_str_list, default_factory=list)
    required_features: List[str] = toml_field(as_str_list, default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)


def _dump_targets(targets: List[Target]) -> List[Dict[str, Any]]:
    return [dump_table(t) for t in targets]


@dataclass
class ManifestDocument:
    """
    Parsed Cargo.toml.

    A manifest may declare a package, a workspace, both or (invalidly)
    neither; ``has_package`` and ``has_workspace`` classify it.
    """

    cargo_features: List[str] = toml_field(as_str_list, default_factory=list)
    package: Optional[PackageInfo] = toml_field(
        as_model(PackageInfo), dump=dump_table, default=None
    )
    lib: Optional[Target] = toml_field(as_model(Target), dump=dump_table, default=None)
    bins: List[Target] = toml_field(
        as_model_list(Target), key="bin", dump=_dump_targets, default_factory=list
    )
    examples: List[Target] = toml_field(
        as_model_list(Target), key="example", dump=_dump_targets, default_factory=list
    )
    tests: List[Target] = toml_field(
        as_model_list(Target), key="test", dump=_dump_targets, default_factory=list
    )
    benches: List[Target] = toml_field(
        as_model_list(Target), key="bench", dump=_dump_targets, default_factory=list
    )
    dependencies: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    dev_dependencies: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    build_dependencies: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    target: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    badges: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    features: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    patch: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    replace: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    profile: Dict[str, Any] = toml_field(as_table, default_factory=dict)
    workspace: Optional[WorkspaceInfo] = toml_field(
        as_model(WorkspaceInfo), dump=dump_table, default=None
    )
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_package(self) -> bool:
        return self.package is not None

    @property
    def has_workspace(self) -> bool:
        return self.workspace is not None

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form with Cargo's key names."""
        return dump_table(self)

    def to_toml(self) -> str:
        return tomlkit.dumps(self.to_dict())


def parse_manifest(data: Union[bytes, str]) -> ManifestDocument:
    """
    Parse Cargo.toml content into a ManifestDocument.

    Args:
        data: Raw file bytes or already-decoded text

    Returns:
        Parsed document

    Raises:
        ManifestFormatError: If the content is not UTF-8, is not valid TOML,
            or a known field has the wrong shape
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ManifestFormatError(f"manifest is not valid UTF-8: {e}", e) from e

    try:
        table = tomlkit.parse(data).unwrap()
    except TOMLKitError as e:
        raise ManifestFormatError(f"invalid TOML: {e}", e) from e

    return parse_table(ManifestDocument, table, "")
