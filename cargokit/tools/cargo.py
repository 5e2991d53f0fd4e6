"""Wrapper for `cargo`."""

from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

# cargo may print rustup override notices on stderr
TOOL = ToolWrapper("cargo", ["cargo", "--version"], quiet=True)


def version() -> ToolVersion:
    """
    Parse `cargo --version`.

    Example:
        >>> version().tool_name
        'cargo'
    """
    return TOOL.version()
