"""Wrapper for `wasm-bindgen` (https://github.com/rustwasm/wasm-bindgen)."""

from typing import Optional

from cargokit.core.locking import LockManager
from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

# The binary ships in the wasm-bindgen-cli crate, not wasm-bindgen.
TOOL = ToolWrapper("wasm-bindgen", ["wasm-bindgen", "--version"], crate="wasm-bindgen-cli")


def version() -> ToolVersion:
    """Parse `wasm-bindgen --version`."""
    return TOOL.version()


def install_at_least(requested: str, lock_manager: Optional[LockManager] = None) -> bool:
    """
    Install wasm-bindgen-cli if `wasm-bindgen --version` is older than ``requested``.

    Keep ``requested`` in step with the wasm-bindgen dependency in
    Cargo.toml; the CLI refuses to process output of a different version.
    """
    return TOOL.install_at_least(requested, lock_manager=lock_manager)
