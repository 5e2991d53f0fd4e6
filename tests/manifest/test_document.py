"""
Unit tests for Cargo.toml parsing.

Tests cover:
- Package and workspace classification
- Field defaults and unknown key preservation
- Format errors
- Writing a document back out
"""

import pytest
import tomlkit

from cargokit.core.exceptions import ManifestError, ManifestFormatError
from cargokit.manifest import Edition, ManifestDocument, parse_manifest


FULL_MANIFEST = """
cargo-features = ["edition2021"]

[package]
name = "demo"
version = "0.3.1"
authors = ["Jane <jane@example.com>"]
edition = "2018"
publish = ["internal"]
autobins = false
rust-version = "1.56"

[package.metadata.docs]
all-features = true

[lib]
name = "demo"
crate-type = ["cdylib", "rlib"]

[[bin]]
name = "demo-cli"
path = "src/main.rs"

[dependencies]
serde = { version = "1", features = ["derive"] }

[dev-dependencies]
tempfile = "3"

[features]
default = ["std"]
std = []

[profile.release]
lto = true

[workspace]
members = ["crates/*"]
exclude = ["crates/old"]
"""


class TestParseManifest:
    """Tests for parse_manifest()."""

    def test_full_manifest(self):
        """Test parsing a manifest using every section."""
        doc = parse_manifest(FULL_MANIFEST.encode())

        assert doc.has_package
        assert doc.has_workspace
        assert doc.cargo_features == ["edition2021"]

        package = doc.package
        assert package.name == "demo"
        assert package.version == "0.3.1"
        assert package.edition is Edition.E2018
        assert package.publish == ["internal"]
        assert package.publishable
        assert not package.autobins_enabled
        assert package.autotests_enabled
        assert package.metadata == {"docs": {"all-features": True}}

        assert doc.lib.crate_type == ["cdylib", "rlib"]
        assert [b.name for b in doc.bins] == ["demo-cli"]
        assert doc.dependencies["serde"]["features"] == ["derive"]
        assert doc.dev_dependencies == {"tempfile": "3"}
        assert doc.features["default"] == ["std"]
        assert doc.profile["release"]["lto"] is True

        assert doc.workspace.members == ["crates/*"]
        assert doc.workspace.exclude == ["crates/old"]

    def test_accepts_text(self):
        """Test text input is accepted."""
        doc = parse_manifest('[package]\nname = "x"\nversion = "1.0.0"\n')
        assert doc.package.name == "x"

    def test_defaults(self):
        """Test defaults for omitted fields."""
        doc = parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\n')
        package = doc.package
        assert package.edition is Edition.E2015
        assert package.publish is True
        assert package.authors == []
        assert package.workspace is None
        assert doc.workspace is None
        assert not doc.has_workspace

    def test_workspace_only(self):
        """Test a workspace-only manifest."""
        doc = parse_manifest(b"[workspace]\n")
        assert doc.has_workspace
        assert not doc.has_package
        assert doc.workspace.members == []

    def test_neither_section(self):
        """Test a manifest with neither package nor workspace."""
        doc = parse_manifest(b'[dependencies]\nlog = "0.4"\n')
        assert not doc.has_package
        assert not doc.has_workspace

    def test_unknown_keys_preserved(self):
        """Test unknown keys are kept in `extra`."""
        doc = parse_manifest(FULL_MANIFEST)
        assert doc.package.extra == {"rust-version": "1.56"}

        doc = parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\n[lints]\nfoo = 1\n')
        assert doc.extra == {"lints": {"foo": 1}}

    def test_publish_false(self):
        """Test `publish = false`."""
        doc = parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\npublish = false\n')
        assert not doc.package.publishable

    def test_workspace_pointer(self):
        """Test the `package.workspace` pointer."""
        doc = parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\nworkspace = "../.."\n')
        assert doc.package.workspace == "../.."


class TestManifestErrors:
    """Tests for malformed manifests."""

    @pytest.mark.parametrize(
        "content",
        [
            b"[package\n",
            b'[package]\nname = "x"\nname = "y"\n',
            b"\xff\xfe[package]",
        ],
    )
    def test_not_toml(self, content):
        """Test input that is not valid TOML."""
        with pytest.raises(ManifestFormatError) as exc_info:
            parse_manifest(content)
        assert exc_info.value.error is not None

    def test_missing_version(self):
        """Test a package without a version."""
        with pytest.raises(ManifestFormatError, match="missing field `version` in `package`"):
            parse_manifest(b'[package]\nname = "x"\n')

    def test_empty_name(self):
        """Test an empty package name."""
        with pytest.raises(ManifestFormatError, match="must not be empty"):
            parse_manifest(b'[package]\nname = ""\nversion = "1.0.0"\n')

    def test_wrong_type(self):
        """Test a field with the wrong type."""
        with pytest.raises(ManifestFormatError, match="package.authors"):
            parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\nauthors = "me"\n')

    def test_unknown_edition(self):
        """Test an unknown edition."""
        with pytest.raises(ManifestFormatError, match="unknown edition"):
            parse_manifest(b'[package]\nname = "x"\nversion = "1.0.0"\nedition = "2030"\n')

    def test_members_must_be_strings(self):
        """Test non-string workspace members."""
        with pytest.raises(ManifestFormatError, match=r"workspace.members\[0\]"):
            parse_manifest(b"[workspace]\nmembers = [1]\n")

    def test_format_error_is_manifest_error(self):
        """Test ManifestFormatError is a ManifestError."""
        with pytest.raises(ManifestError):
            parse_manifest(b"=")


class TestWriteBack:
    """Tests for to_dict()/to_toml()."""

    def test_to_dict_uses_cargo_keys(self):
        """Test to_dict() uses Cargo's key spelling."""
        doc = parse_manifest(FULL_MANIFEST)
        data = doc.to_dict()
        assert data["cargo-features"] == ["edition2021"]
        assert data["package"]["edition"] == "2018"
        assert data["package"]["rust-version"] == "1.56"
        assert data["bin"] == [{"name": "demo-cli", "path": "src/main.rs"}]
        assert data["dev-dependencies"] == {"tempfile": "3"}
        assert "build-dependencies" not in data

    def test_to_toml_reparses(self):
        """Test to_toml() output parses back to the same document."""
        doc = parse_manifest(FULL_MANIFEST)
        again = parse_manifest(doc.to_toml())
        assert again == doc

    def test_default_document_is_empty(self):
        """Test an empty document serializes to nothing."""
        assert ManifestDocument().to_dict() == {}
        assert tomlkit.parse(ManifestDocument().to_toml()) == {}
