"""
Visual Studio Code integration.

Lists the extensions installed in the user's VS Code, e.g. to suggest
rust-analyzer when it is missing.
"""

import logging
import os
from typing import Set

from cargokit.core.command import Command
from cargokit.core.exceptions import CommandError

logger = logging.getLogger(__name__)

RUST_ANALYZER = "rust-lang.rust-analyzer"

IS_WINDOWS = os.name == "nt"


def list_extensions_command() -> Command:
    if IS_WINDOWS:
        # `code` is a .cmd shim on Windows and must go through cmd.exe
        return Command("cmd").args(["/C", "call code --list-extensions"])
    return Command("code").arg("--list-extensions")


def list_extensions() -> Set[str]:
    """
    Parse `code --list-extensions`.

    Returns:
        Installed extension identifiers (e.g. {"rust-lang.rust-analyzer"});
        empty if VS Code is not installed
    """
    try:
        output = list_extensions_command().stdout0_no_stderr()
    except CommandError as e:
        logger.debug(f"Could not list VS Code extensions: {e}")
        return set()
    return {line.strip() for line in output.splitlines() if line.strip()}
