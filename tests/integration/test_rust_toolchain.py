"""
Integration tests against a real Rust installation.

Run with: pytest --integration
"""

import json
import shutil

import pytest

from cargokit.core.command import Command
from cargokit.metadata import Metadata
from cargokit.tools import cargo, rustc
from cargokit.tools.rustup import Rustup

pytestmark = pytest.mark.integration

needs_cargo = pytest.mark.skipif(shutil.which("cargo") is None, reason="cargo not on PATH")
needs_rustup = pytest.mark.skipif(shutil.which("rustup") is None, reason="rustup not on PATH")


@needs_cargo
def test_cargo_and_rustc_versions_parse():
    """Test real cargo and rustc versions parse."""
    assert cargo.version().tool_name == "cargo"
    assert rustc.version().tool_name == "rustc"


@needs_rustup
def test_active_toolchain_has_host_target():
    """Test the active toolchain reports installed targets."""
    toolchain = Rustup.default().toolchains().active()
    assert toolchain is not None
    assert toolchain.targets().installed()


@needs_cargo
def test_resolved_members_match_cargo_metadata(crates_workspace):
    """Test resolved members agree with `cargo metadata`."""
    for name in ("a", "b"):
        (crates_workspace / "crates" / name / "src").mkdir()
        (crates_workspace / "crates" / name / "src" / "lib.rs").write_text("")

    output = (
        Command("cargo")
        .args(["metadata", "--format-version", "1", "--no-deps", "--offline"])
        .current_dir(crates_workspace)
        .stdout0_no_stderr()
    )
    expected = sorted(p["name"] for p in json.loads(output)["packages"])

    assert sorted(Metadata.from_dir(crates_workspace).packages.names()) == expected
