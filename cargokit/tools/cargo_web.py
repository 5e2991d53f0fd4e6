"""Wrapper for `cargo-web` (https://github.com/koute/cargo-web)."""

from typing import Optional

from cargokit.core.locking import LockManager
from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

TOOL = ToolWrapper("cargo-web", ["cargo", "web", "--version"], crate="cargo-web")


def version() -> ToolVersion:
    """Parse `cargo web --version`."""
    return TOOL.version()


def install_at_least(requested: str, lock_manager: Optional[LockManager] = None) -> bool:
    return TOOL.install_at_least(requested, lock_manager=lock_manager)
