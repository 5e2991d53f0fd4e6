"""Wrapper for `wasm-pack` (https://github.com/rustwasm/wasm-pack)."""

from typing import Optional

from cargokit.core.locking import LockManager
from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

TOOL = ToolWrapper("wasm-pack", ["wasm-pack", "--version"], crate="wasm-pack")


def version() -> ToolVersion:
    """Parse `wasm-pack --version`."""
    return TOOL.version()


def install_at_least(requested: str, lock_manager: Optional[LockManager] = None) -> bool:
    """Install wasm-pack if `wasm-pack --version` is older than ``requested``."""
    return TOOL.install_at_least(requested, lock_manager=lock_manager)
