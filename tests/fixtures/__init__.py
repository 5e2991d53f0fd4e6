"""Test fixtures for CargoKit tests.

This package provides reusable pytest fixtures for testing CargoKit components.
Fixtures are organized by type:

- workspaces: Cargo.toml trees on disk (standalone package, virtual and rooted workspaces)
- processes: Fake subprocess.run for code built on cargokit.core.command

Import fixtures in your tests using:
    from tests.fixtures.workspaces import write_manifest, package_toml
    from tests.fixtures.processes import completed
"""

__all__ = [
    "workspaces",
    "processes",
]
