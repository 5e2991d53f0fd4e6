"""
CargoKit CLI argument parser.

This module implements the command-line interface for CargoKit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cargokit import __version__

logger = logging.getLogger(__name__)


class CLI:
    """CargoKit command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="cargokit",
            description="CargoKit - Cargo workspace inspection and Rust tool management",
            epilog='Use "cargokit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"CargoKit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./cargokit.yaml)",
        )
        parser.add_argument(
            "--project-root",
            type=Path,
            metavar="PATH",
            default=Path.cwd(),
            help="Project root directory (default: current directory)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_metadata_command(subparsers)
        self._add_versions_command(subparsers)
        self._add_ensure_tools_command(subparsers)

        return parser

    def _add_metadata_command(self, subparsers):
        """Add 'metadata' subcommand."""
        parser = subparsers.add_parser(
            "metadata",
            help="Show workspace members and manifest problems",
            description="Resolve the Cargo workspace containing the project root",
        )
        parser.add_argument(
            "--json", action="store_true", help="Print machine-readable JSON"
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Exit with an error if any diagnostics were reported",
        )

    def _add_versions_command(self, subparsers):
        """Add 'versions' subcommand."""
        subparsers.add_parser(
            "versions",
            help="Show versions of installed Rust tools",
            description="Run each known tool's --version and report the result",
        )

    def _add_ensure_tools_command(self, subparsers):
        """Add 'ensure-tools' subcommand."""
        parser = subparsers.add_parser(
            "ensure-tools",
            help="Install tools older than the configured minimum",
            description="Run `cargo install` for every tool in cargokit.yaml "
            "whose installed version is too old",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would be installed without installing",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "metadata": "cargokit.cli.commands.metadata",
            "versions": "cargokit.cli.commands.versions",
            "ensure-tools": "cargokit.cli.commands.ensure_tools",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logger.error(f"Failed to load command module: {e}")
            if args.verbose:
                import traceback

                traceback.print_exc()
            return 1

        if not hasattr(module, "run"):
            logger.error(f"Command module {module_name} has no run() function")
            return 1

        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
