"""
Configuration for CargoKit.

cargokit.yaml pins minimum versions of Rust tools and install settings.
"""

from .parser import (
    CONFIG_FILE_NAME,
    CargoKitConfig,
    InstallConfig,
    ToolRequirement,
    load_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "CargoKitConfig",
    "InstallConfig",
    "ToolRequirement",
    "load_config",
    "parse_config",
]
