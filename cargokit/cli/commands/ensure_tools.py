"""
Ensure-tools command: install tools older than configured minimums.
"""

import logging

from cargokit.config import load_config
from cargokit.core import console
from cargokit.core.exceptions import CargoKitError, ConfigError
from cargokit.core.locking import LockManager, LockTimeout
from cargokit.tools import get_tool

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run ensure-tools command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every tool is satisfied, 1 otherwise)
    """
    try:
        config = load_config(args.project_root, getattr(args, "config", None))
    except ConfigError as e:
        console.error(f"invalid configuration: {e}")
        return 1

    if not config.tools:
        logger.info("No tools configured")
        return 0

    dry_run = getattr(args, "dry_run", False)
    lock_manager = None if dry_run else LockManager(config.install.lock_dir)

    failures = 0
    for requirement in config.tools:
        tool = get_tool(requirement.name)
        minimum = str(requirement.version)

        if dry_run:
            installed = tool.installed_version()
            if installed is not None and installed.version >= requirement.version:
                console.status("Fresh", f"{tool.name} {installed.version}")
            else:
                console.status("Would install", f"{tool.crate} ^{minimum}")
            continue

        try:
            if tool.install_at_least(
                minimum,
                lock_manager=lock_manager,
                timeout=config.install.lock_timeout,
            ):
                console.status("Installed", f"{tool.crate} ^{minimum}")
            else:
                console.status("Fresh", f"{tool.name} >= {minimum}")
        except (CargoKitError, LockTimeout) as e:
            console.error(str(e))
            failures += 1

    return 1 if failures else 0
