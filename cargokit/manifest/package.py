"""The ``[package]`` section of a Cargo.toml."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from cargokit.core.exceptions import ManifestFormatError
from cargokit.manifest.fields import (
    as_any,
    as_bool,
    as_str,
    as_str_list,
    as_table,
    toml_field,
)


class Edition(Enum):
    """Rust language edition."""

    E2015 = "2015"
    E2018 = "2018"
    E2021 = "2021"

    @classmethod
    def parse(cls, value: Any, context: str) -> "Edition":
        text = as_str(value, context)
        try:
            return cls(text)
        except ValueError:
            known = ", ".join(e.value for e in cls)
            raise ManifestFormatError(
                f"unknown edition {text!r} for `{context}` (expected one of {known})"
            ) from None

    def __str__(self) -> str:
        return self.value


def _package_name(value: Any, context: str) -> str:
    name = as_str(value, context)
    if not name:
        raise ManifestFormatError(f"`{context}` must not be empty")
    return name


def _publish(value: Any, context: str) -> Union[bool, List[str]]:
    if isinstance(value, bool):
        return value
    if isinstance(value, list):
        return as_str_list(value, context)
    raise ManifestFormatError(
        f"invalid type for `{context}`: expected a boolean or an array of registry names"
    )


@dataclass
class PackageInfo:
    """
    Package metadata.

    Only ``name`` and ``version`` are required. ``metadata`` is kept
    opaque, and keys this model does not know end up in ``extra``.
    """

    name: str = toml_field(_package_name, required=True)
    version: str = toml_field(as_str, required=True)
    authors: List[str] = toml_field(as_str_list, default_factory=list)
    edition: Edition = toml_field(Edition.parse, dump=str, default=Edition.E2015)
    description: Optional[str] = toml_field(as_str, default=None)
    documentation: Optional[str] = toml_field(as_str, default=None)
    readme: Optional[str] = toml_field(as_str, default=None)
    homepage: Optional[str] = toml_field(as_str, default=None)
    repository: Optional[str] = toml_field(as_str, default=None)
    license: Optional[str] = toml_field(as_str, default=None)
    license_file: Optional[str] = toml_field(as_str, default=None)
    keywords: List[str] = toml_field(as_str_list, default_factory=list)
    categories: List[str] = toml_field(as_str_list, default_factory=list)
    workspace: Optional[str] = toml_field(as_str, default=None)
    build: Optional[Any] = toml_field(as_any, default=None)
    links: Optional[str] = toml_field(as_str, default=None)
    exclude: List[str] = toml_field(as_str_list, default_factory=list)
    include: List[str] = toml_field(as_str_list, default_factory=list)
    publish: Union[bool, List[str]] = toml_field(_publish, default=True)
    metadata: Optional[Dict[str, Any]] = toml_field(as_table, default=None)
    default_run: Optional[str] = toml_field(as_str, default=None)
    autobins: Optional[bool] = toml_field(as_bool, default=None)
    autoexamples: Optional[bool] = toml_field(as_bool, default=None)
    autotests: Optional[bool] = toml_field(as_bool, default=None)
    autobenches: Optional[bool] = toml_field(as_bool, default=None)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def publishable(self) -> bool:
        """False when publish is disabled or limited to an empty registry list."""
        if isinstance(self.publish, bool):
            return self.publish
        return bool(self.publish)

    # Target auto-discovery is on unless explicitly disabled.

    @property
    def autobins_enabled(self) -> bool:
        return self.autobins is not False

    @property
    def autoexamples_enabled(self) -> bool:
        return self.autoexamples is not False

    @property
    def autotests_enabled(self) -> bool:
        return self.autotests is not False

    @property
    def autobenches_enabled(self) -> bool:
        return self.autobenches is not False
