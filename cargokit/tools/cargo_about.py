"""Wrapper for `cargo-about` (https://github.com/EmbarkStudios/cargo-about)."""

from typing import Optional

from cargokit.core.locking import LockManager
from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

TOOL = ToolWrapper("cargo-about", ["cargo", "about", "--version"], crate="cargo-about")


def version() -> ToolVersion:
    """Parse `cargo about --version`."""
    return TOOL.version()


def install_at_least(requested: str, lock_manager: Optional[LockManager] = None) -> bool:
    return TOOL.install_at_least(requested, lock_manager=lock_manager)
