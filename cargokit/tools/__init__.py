"""
Wrappers for Rust command line tools.

``TOOLS`` maps tool names to their ToolWrapper; ``get_tool`` looks one up.
"""

from typing import Dict

from cargokit.core.exceptions import ToolNotFoundError

from . import cargo, cargo_about, cargo_web, rustc, rustup, wasm_bindgen, wasm_pack
from .base import ToolWrapper
from .rustup import Rustup, RustupToolchains, Toolchain, ToolchainTargets
from .vscode import list_extensions

TOOLS: Dict[str, ToolWrapper] = {
    module.TOOL.name: module.TOOL
    for module in (cargo, rustc, rustup, wasm_pack, wasm_bindgen, cargo_web, cargo_about)
}


def get_tool(name: str) -> ToolWrapper:
    """
    Look up a tool wrapper by name.

    Raises:
        ToolNotFoundError: If the name is not a known tool
    """
    try:
        return TOOLS[name]
    except KeyError:
        known = ", ".join(sorted(TOOLS))
        raise ToolNotFoundError(f"Unknown tool: {name} (known tools: {known})") from None


__all__ = [
    "TOOLS",
    "get_tool",
    "ToolWrapper",
    "Rustup",
    "RustupToolchains",
    "Toolchain",
    "ToolchainTargets",
    "list_extensions",
]
