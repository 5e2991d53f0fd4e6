"""Wrapper for `rustc`."""

from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

TOOL = ToolWrapper("rustc", ["rustc", "--version"])


def version() -> ToolVersion:
    """Parse `rustc --version`."""
    return TOOL.version()
