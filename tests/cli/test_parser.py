"""
Tests for CLI argument parser.
"""

import pytest
from unittest.mock import patch
from pathlib import Path

from cargokit.cli.parser import CLI


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_creation(self):
        """Test CLI can be created."""
        cli = CLI()
        assert cli.parser is not None

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "CargoKit" in capsys.readouterr().out

    def test_global_options(self, tmp_path):
        """Test global options are parsed before the command."""
        args = CLI().parse_args(
            ["-v", "--config", "ck.yaml", "--project-root", str(tmp_path), "versions"]
        )

        assert args.verbose is True
        assert args.config == Path("ck.yaml")
        assert args.project_root == tmp_path
        assert args.command == "versions"


class TestCommandParsing:
    """Test subcommand parsing."""

    def test_metadata_defaults(self):
        """Test metadata command defaults."""
        args = CLI().parse_args(["metadata"])

        assert args.command == "metadata"
        assert args.json is False
        assert args.strict is False

    def test_metadata_flags(self):
        """Test metadata --json --strict."""
        args = CLI().parse_args(["metadata", "--json", "--strict"])

        assert args.json is True
        assert args.strict is True

    def test_ensure_tools_dry_run(self):
        """Test ensure-tools --dry-run."""
        args = CLI().parse_args(["ensure-tools", "--dry-run"])

        assert args.command == "ensure-tools"
        assert args.dry_run is True

    def test_unknown_command(self):
        """Test that unknown commands are rejected by argparse."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["frobnicate"])


class TestDispatch:
    """Test command dispatch."""

    def test_dispatches_to_module(self):
        """Test that commands reach their module's run()."""
        with patch("cargokit.cli.commands.versions.run", return_value=0) as mock_run:
            assert CLI().run(["versions"]) == 0
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0].command == "versions"

    def test_exception_becomes_exit_code(self):
        """Test that unexpected errors return 1."""
        with patch(
            "cargokit.cli.commands.metadata.run", side_effect=RuntimeError("boom")
        ):
            assert CLI().run(["metadata"]) == 1

    def test_keyboard_interrupt(self):
        """Test that Ctrl+C returns 130."""
        with patch(
            "cargokit.cli.commands.metadata.run", side_effect=KeyboardInterrupt
        ):
            assert CLI().run(["metadata"]) == 130

    def test_main_exits_with_code(self):
        """Test main() passes the exit code to sys.exit."""
        from cargokit.cli.parser import main

        with patch("sys.argv", ["cargokit"]), pytest.raises(SystemExit) as exc_info:
            main()
        assert exc_info.value.code == 1
