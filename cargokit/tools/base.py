"""
Base wrapper for Rust command line tools.

A ToolWrapper knows how to ask a tool for its version and, for tools
distributed as crates, how to bring an outdated install up to a minimum
version with `cargo install`.
"""

import logging
from typing import List, Optional

from cargokit.core import console
from cargokit.core.command import Command
from cargokit.core.exceptions import (
    CommandError,
    ToolError,
    ToolInstallError,
    VersionParseError,
)
from cargokit.core.locking import LockManager
from cargokit.core.version import SemVer, ToolVersion

logger = logging.getLogger(__name__)


class ToolWrapper:
    """
    A Rust tool reachable on PATH.

    Attributes:
        name: Tool name as users know it (e.g. "wasm-bindgen")
        version_args: argv that prints the version (e.g. ["cargo", "web", "--version"])
        crate: Crate `cargo install` builds the tool from, or None if the
            tool is not installable that way
        quiet: Discard stderr of the version command
    """

    def __init__(
        self,
        name: str,
        version_args: List[str],
        crate: Optional[str] = None,
        quiet: bool = False,
    ):
        self.name = name
        self.version_args = list(version_args)
        self.crate = crate
        self.quiet = quiet

    def __repr__(self) -> str:
        return f"ToolWrapper({self.name!r}, crate={self.crate!r})"

    @property
    def installable(self) -> bool:
        return self.crate is not None

    def version_command(self) -> Command:
        return Command(self.version_args[0]).args(self.version_args[1:])

    def version(self) -> ToolVersion:
        """
        Run the version command and parse its output.

        Raises:
            CommandError: If the tool is missing or exits unsuccessfully
            VersionParseError: If the output is not recognised
        """
        cmd = self.version_command()
        output = cmd.stdout0_no_stderr() if self.quiet else cmd.stdout0()
        version = ToolVersion.parse(output)
        logger.debug(f"{self.name} version: {version}")
        return version

    def installed_version(self) -> Optional[ToolVersion]:
        """Parsed version, or None when the tool is missing or unrecognisable."""
        try:
            return self.version()
        except (CommandError, VersionParseError) as e:
            logger.debug(f"{self.name} not usable: {e}")
            return None

    def is_installed(self) -> bool:
        return self.installed_version() is not None

    def install_command(self, requested: SemVer) -> Command:
        return Command("cargo").args(["install", "--version", f"^{requested}", self.crate])

    def install_at_least(
        self,
        requested: str,
        lock_manager: Optional[LockManager] = None,
        timeout: float = 300,
    ) -> bool:
        """
        Make sure at least version ``requested`` is installed.

        Nothing runs when the installed version already satisfies the
        request. Otherwise the tool is installed with
        `cargo install --version ^<requested> <crate>` under an install lock.

        Args:
            requested: Minimum semantic version, e.g. "0.9.1"
            lock_manager: Lock manager to serialize installs (default: global)
            timeout: Seconds to wait for another process's install

        Returns:
            True if an install ran, False if the tool was already new enough

        Raises:
            InvalidVersionError: If ``requested`` is not a semantic version
            ToolError: If the tool is not installable with cargo
            ToolInstallError: If `cargo install` fails
            LockTimeout: If the install lock cannot be acquired
        """
        minimum = SemVer.parse(requested)
        if not self.installable:
            raise ToolError(f"{self.name} cannot be installed with `cargo install`")

        if self._satisfies(minimum):
            return False

        lock_manager = lock_manager or LockManager()
        with lock_manager.install_lock(self.crate, timeout=timeout):
            # Another process may have finished the install while we waited.
            if self._satisfies(minimum):
                return False

            cmd = self.install_command(minimum)
            console.status("Installing", f"{self.crate} ^{minimum}")
            try:
                cmd.status0()
            except CommandError as e:
                raise ToolInstallError(
                    f"Failed to install {self.crate} {requested}: {e}\n\n"
                    "Troubleshooting:\n"
                    "  1. Check that cargo is on PATH: cargo --version\n"
                    "  2. Check network access to crates.io\n"
                    f"  3. Try manually: cargo install --version ^{minimum} {self.crate}"
                ) from e

        logger.info(f"Installed {self.crate} ^{minimum}")
        return True

    def _satisfies(self, minimum: SemVer) -> bool:
        installed = self.installed_version()
        if installed is not None and installed.version >= minimum:
            logger.debug(f"{self.name} {installed.version} satisfies >= {minimum}")
            return True
        return False
