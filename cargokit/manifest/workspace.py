"""The ``[workspace]`` section of a Cargo.toml."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from cargokit.manifest.fields import as_str_list, as_table, toml_field


@dataclass
class WorkspaceInfo:
    """
    Workspace declaration.

    ``members`` and ``exclude`` are glob patterns relative to the directory
    holding the manifest. Only ``*`` and literal segments are supported.
    """

    members: List[str] = toml_field(as_str_list, default_factory=list)
    exclude: List[str] = toml_field(as_str_list, default_factory=list)
    default_members: List[str] = toml_field(as_str_list, default_factory=list)
    metadata: Optional[Dict[str, Any]] = toml_field(as_table, default=None)
    extra: Dict[str, Any] = field(default_factory=dict)
