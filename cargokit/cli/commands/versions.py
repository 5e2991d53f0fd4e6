"""
Versions command: report installed Rust tool versions.
"""

import logging

from cargokit.core.exceptions import CommandError, VersionParseError
from cargokit.tools import TOOLS

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run versions command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (always 0; missing tools are reported, not fatal)
    """
    width = max(len(name) for name in TOOLS)
    for name, tool in TOOLS.items():
        try:
            version = tool.version()
        except CommandError as e:
            logger.debug(f"{name}: {e}")
            print(f"{name:<{width}}  not installed")
            continue
        except VersionParseError as e:
            print(f"{name:<{width}}  unrecognised version output ({e})")
            continue
        print(f"{name:<{width}}  {version}")
    return 0
