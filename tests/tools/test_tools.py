"""
Unit tests for tool wrappers and cargo-install upgrades.

All processes are faked through the mock_run fixture.
"""

import pytest

from cargokit.core.exceptions import (
    InvalidVersionError,
    ToolError,
    ToolInstallError,
    ToolNotFoundError,
)
from cargokit.core.locking import LockManager
from cargokit.core.version import SemVer
from cargokit.tools import TOOLS, get_tool
from cargokit.tools import cargo, cargo_web, rustc, wasm_bindgen, wasm_pack
from cargokit.tools.base import ToolWrapper
from tests.fixtures.processes import completed


class FakeToolchain:
    """Answers `<tool> --version` with the currently "installed" version."""

    def __init__(self, installed):
        self.installed = dict(installed)

    def __call__(self, argv, **kwargs):
        if argv[:2] == ["cargo", "install"]:
            crate = argv[-1]
            self.installed[crate] = argv[3].lstrip("^")
            return completed(argv)
        version = self.installed.get(argv[0])
        if version is None:
            raise FileNotFoundError(2, "No such file or directory", argv[0])
        return completed(argv, stdout=f"{argv[0]} {version}\n".encode())


@pytest.fixture
def lock_manager(tmp_path):
    return LockManager(tmp_path / "locks")


class TestRegistry:
    """Tests for TOOLS/get_tool()."""

    def test_known_tools(self):
        """Test the known tool table."""
        assert set(TOOLS) == {
            "cargo",
            "rustc",
            "rustup",
            "wasm-pack",
            "wasm-bindgen",
            "cargo-web",
            "cargo-about",
        }
        assert get_tool("wasm-bindgen").crate == "wasm-bindgen-cli"
        assert not get_tool("rustc").installable

    def test_unknown_tool(self):
        """Test an unknown tool name is rejected."""
        with pytest.raises(ToolNotFoundError, match="Unknown tool: nope"):
            get_tool("nope")


class TestVersion:
    """Tests for version queries."""

    def test_cargo_version_discards_stderr(self, mock_run):
        """Test cargo version probing ignores stderr."""
        mock_run.results.append(completed(stdout=b"cargo 1.47.0 (f3c7e066a 2020-08-28)\n"))

        v = cargo.version()

        assert v.version == SemVer(1, 47, 0)
        argv, kwargs = mock_run.calls[0]
        assert argv == ["cargo", "--version"]
        assert kwargs["stderr"] is not None

    def test_rustc_version(self, mock_run):
        """Test reading the rustc version."""
        mock_run.results.append(completed(stdout=b"rustc 1.50.0-nightly (1c389ffef 2020-11-24)\n"))
        assert rustc.version().version.is_prerelease

    def test_cargo_web_is_a_subcommand(self, mock_run):
        """Test cargo-web is run as a cargo subcommand."""
        mock_run.results.append(completed(stdout=b"cargo-web 0.6.26\n"))
        assert str(cargo_web.version().version) == "0.6.26"
        assert mock_run.argvs == [["cargo", "web", "--version"]]

    def test_installed_version_missing_tool(self, mock_run):
        """Test a missing tool has no installed version."""
        mock_run.results.append(FileNotFoundError(2, "No such file or directory"))
        assert wasm_pack.TOOL.installed_version() is None
        mock_run.results.append(completed(stdout=b"garbage"))
        assert not wasm_pack.TOOL.is_installed()


class TestInstallAtLeast:
    """Tests for ToolWrapper.install_at_least()."""

    def test_already_new_enough(self, mock_run, lock_manager):
        """Test no install when the tool is new enough."""
        mock_run.handler = FakeToolchain({"wasm-pack": "0.9.1"})

        assert wasm_pack.install_at_least("0.9.0", lock_manager=lock_manager) is False
        assert mock_run.argvs == [["wasm-pack", "--version"]]

    def test_installs_when_missing(self, mock_run, lock_manager, capsys):
        """Test installing a missing tool."""
        mock_run.handler = FakeToolchain({})

        assert wasm_pack.install_at_least("0.9.1", lock_manager=lock_manager) is True

        assert ["cargo", "install", "--version", "^0.9.1", "wasm-pack"] in mock_run.argvs
        assert "Installing wasm-pack ^0.9.1" in capsys.readouterr().err

    def test_installs_when_outdated(self, mock_run, lock_manager):
        """Test installing over an outdated tool."""
        mock_run.handler = FakeToolchain({"wasm-bindgen": "0.2.60"})

        assert wasm_bindgen.install_at_least("0.2.68", lock_manager=lock_manager)
        assert mock_run.argvs[-1] == [
            "cargo",
            "install",
            "--version",
            "^0.2.68",
            "wasm-bindgen-cli",
        ]

    def test_nightly_of_requested_version_is_not_enough(self, mock_run, lock_manager):
        """Test a nightly build does not satisfy its release."""
        mock_run.handler = FakeToolchain({"wasm-pack": "0.9.1-alpha"})
        assert wasm_pack.install_at_least("0.9.1", lock_manager=lock_manager)

    def test_install_failure(self, mock_run, lock_manager):
        """Test a failed install raises."""
        def handler(argv, **kwargs):
            if argv[0] == "cargo":
                return completed(argv, returncode=101)
            raise FileNotFoundError(2, "No such file or directory")

        mock_run.handler = handler

        with pytest.raises(ToolInstallError) as exc_info:
            wasm_pack.install_at_least("0.9.1", lock_manager=lock_manager)
        assert "exit code 101" in str(exc_info.value)
        assert "Troubleshooting" in str(exc_info.value)

    def test_invalid_request(self, mock_run, lock_manager):
        """Test an invalid version request is rejected."""
        with pytest.raises(InvalidVersionError):
            wasm_pack.install_at_least("latest", lock_manager=lock_manager)
        assert mock_run.calls == []

    def test_not_installable(self, mock_run, lock_manager):
        """Test a tool without an installer is rejected."""
        with pytest.raises(ToolError, match="cannot be installed"):
            ToolWrapper("rustc", ["rustc", "--version"]).install_at_least(
                "1.0.0", lock_manager=lock_manager
            )

