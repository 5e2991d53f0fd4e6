"""
Wrappers to manipulate rustup (https://rustup.rs/).

Usage:
    from cargokit.tools.rustup import Rustup

    rustup = Rustup.default()
    active = rustup.toolchains().active()
    if "wasm32-unknown-unknown" not in active.targets().installed():
        active.targets().add("wasm32-unknown-unknown")
    active.cargo().args(["build", "--release"]).status0()
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from cargokit.core.command import Command
from cargokit.core.exceptions import CommandError, ToolError, ToolNotFoundError
from cargokit.core.version import ToolVersion
from cargokit.tools.base import ToolWrapper

logger = logging.getLogger(__name__)

TOOL = ToolWrapper("rustup", ["rustup", "--version"], quiet=True)


def version() -> ToolVersion:
    """Parse `rustup --version`."""
    return TOOL.version()


def _first_word(text: str) -> Optional[str]:
    # "stable-x86_64-pc-windows-msvc (default)" -> "stable-x86_64-pc-windows-msvc"
    words = text.strip().split(" ")
    return words[0] or None


def _first_words(text: str) -> Set[str]:
    return {w for w in (_first_word(line) for line in text.splitlines()) if w}


class Rustup:
    """A rustup executable that was available when constructed."""

    def __init__(self, rustup: str = "rustup"):
        """
        Wrap ``rustup`` after checking that `rustup --version` succeeds.

        Raises:
            ToolNotFoundError: If rustup cannot be run
        """
        try:
            Command(rustup).arg("--version").output0()
        except CommandError as e:
            raise ToolNotFoundError(f"rustup is not available: {e}") from e
        self.rustup = rustup

    @classmethod
    def default(cls) -> "Rustup":
        """rustup from PATH."""
        return cls("rustup")

    @classmethod
    def unchecked(cls, rustup: str = "rustup") -> "Rustup":
        """Wrap ``rustup`` without running it."""
        instance = cls.__new__(cls)
        instance.rustup = rustup
        return instance

    def is_available(self) -> bool:
        """True if `rustup --version` still succeeds."""
        try:
            return Command(self.rustup).arg("--version").output().returncode == 0
        except CommandError:
            return False

    def toolchains(self) -> "RustupToolchains":
        return RustupToolchains(self.rustup)

    def __repr__(self) -> str:
        return f"Rustup({self.rustup!r})"


class RustupToolchains:
    """Toolchains rustup knows about."""

    def __init__(self, rustup: str):
        self.rustup = rustup

    def _cmd(self, *args: str) -> Command:
        return Command(self.rustup).args(args)

    def active(self) -> Optional["Toolchain"]:
        """Toolchain selected for the current directory, or None."""
        try:
            output = self._cmd("show", "active-toolchain").stdout0_no_stderr()
        except CommandError as e:
            logger.debug(f"No active toolchain: {e}")
            return None
        name = _first_word(output)
        return Toolchain(name, self.rustup) if name else None

    def default(self) -> Optional["Toolchain"]:
        """
        Default toolchain from `rustup default`.

        Raises:
            CommandError: If rustup fails
        """
        name = _first_word(self._cmd("default").stdout0_no_stderr())
        return Toolchain(name, self.rustup) if name else None

    def installed(self) -> List["Toolchain"]:
        """
        Installed toolchains from `rustup toolchain list`, sorted by name.

        Raises:
            CommandError: If rustup fails
        """
        output = self._cmd("toolchain", "list").stdout0()
        return sorted(Toolchain(name, self.rustup) for name in _first_words(output))

    def get(self, toolchain: str) -> Optional["Toolchain"]:
        """
        Look up an installed toolchain by name (e.g. "stable" or "nightly-2020-11-24").

        Returns:
            The fully qualified toolchain, or None if it is not installed
        """
        # RUSTUP_TOOLCHAIN would win over +toolchain and mask missing toolchains
        cmd = self._cmd(f"+{toolchain}", "show", "active-toolchain").env_remove(
            "RUSTUP_TOOLCHAIN"
        )
        try:
            output = cmd.stdout0_no_stderr()
        except CommandError as e:
            logger.debug(f"Toolchain {toolchain} not found: {e}")
            return None
        name = _first_word(output)
        return Toolchain(name, self.rustup) if name else None

    def install(self, toolchain: str) -> "Toolchain":
        """
        `rustup toolchain install <toolchain>`.

        Raises:
            CommandError: If the install fails
            ToolError: If the toolchain cannot be found after installing
        """
        self._cmd("toolchain", "install", toolchain).stdout0()
        installed = self.get(toolchain)
        if installed is None:
            raise ToolError(f"unable to find toolchain {toolchain}")
        return installed

    def uninstall(self, toolchain: str) -> None:
        """`rustup toolchain uninstall <toolchain>`."""
        self._cmd("toolchain", "uninstall", toolchain).status0()


@dataclass(frozen=True, order=True)
class Toolchain:
    """A rustup-installed toolchain; compares by name."""

    name: str
    rustup: str = field(default="rustup", compare=False)

    def __str__(self) -> str:
        return self.name

    def targets(self) -> "ToolchainTargets":
        return ToolchainTargets(self)

    def run(self, command: str) -> Command:
        """`rustup run <toolchain> <command>`."""
        return Command(self.rustup).args(["run", self.name, command])

    def cargo(self) -> Command:
        return self.run("cargo")

    def rustc(self) -> Command:
        return self.run("rustc")


class ToolchainTargets:
    """Compilation targets of one toolchain."""

    def __init__(self, toolchain: Toolchain):
        self.toolchain = toolchain

    def _cmd(self, *args: str) -> Command:
        return (
            Command(self.toolchain.rustup)
            .args(args)
            .args(["--toolchain", self.toolchain.name])
        )

    def all(self) -> Set[str]:
        """Every target the toolchain knows, installed or not."""
        return _first_words(self._cmd("target", "list").stdout0())

    def installed(self) -> Set[str]:
        return _first_words(self._cmd("target", "list", "--installed").stdout0())

    def get(self, target: str) -> Optional[str]:
        """``target`` if it is installed, otherwise None."""
        return target if target in self.installed() else None

    def add(self, target: str) -> None:
        self._cmd("target", "add", target).status0()

    def remove(self, target: str) -> None:
        self._cmd("target", "remove", target).status0()
