"""YAML configuration parser for CargoKit.

This module provides parsing and validation for cargokit.yaml configuration files.

Example cargokit.yaml:

    version: 1
    tools:
      wasm-pack: 0.9.1
      wasm-bindgen: 0.2.70
    install:
      lock_timeout: 300
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from cargokit.core.exceptions import ConfigError, InvalidVersionError, ToolNotFoundError
from cargokit.core.version import SemVer
from cargokit.tools import get_tool

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "cargokit.yaml"


@dataclass
class ToolRequirement:
    """Minimum version of one tool."""

    name: str
    version: SemVer


@dataclass
class InstallConfig:
    """Settings for `cargo install` runs."""

    lock_timeout: float = 300
    lock_dir: Optional[Path] = None


@dataclass
class CargoKitConfig:
    """Complete CargoKit configuration."""

    version: int = 1
    tools: List[ToolRequirement] = field(default_factory=list)
    install: InstallConfig = field(default_factory=InstallConfig)


def parse_config(config_path: Path) -> CargoKitConfig:
    """
    Parse cargokit.yaml configuration file.

    Args:
        config_path: Path to cargokit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> CargoKitConfig:
    """Parse and validate configuration data."""
    if "version" not in data:
        raise ConfigError("Missing required field: version")

    if data["version"] != 1:
        raise ConfigError(f"Unsupported version: {data['version']} (expected 1)")

    tools = data.get("tools")
    install = data.get("install")
    return CargoKitConfig(
        version=1,
        tools=_parse_tools({} if tools is None else tools),
        install=_parse_install({} if install is None else install),
    )


def _parse_tools(data) -> List[ToolRequirement]:
    if not isinstance(data, dict):
        raise ConfigError("'tools' must be a mapping of tool name to minimum version")

    tools = []
    for name, version in data.items():
        try:
            tool = get_tool(name)
        except ToolNotFoundError as e:
            raise ConfigError(str(e))
        if not tool.installable:
            raise ConfigError(f"Tool '{name}' cannot be installed with cargo install")

        try:
            # YAML reads 0.9 as a float; require the full semver string
            tools.append(ToolRequirement(name=name, version=SemVer.parse(str(version))))
        except InvalidVersionError as e:
            raise ConfigError(f"Invalid version for tool '{name}': {e}")
    return tools


def _parse_install(data) -> InstallConfig:
    if not isinstance(data, dict):
        raise ConfigError("'install' must be a mapping")

    timeout = data.get("lock_timeout", 300)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"'install.lock_timeout' must be a positive number, got {timeout!r}")

    lock_dir = data.get("lock_dir")
    return InstallConfig(
        lock_timeout=timeout,
        lock_dir=Path(lock_dir).expanduser() if lock_dir else None,
    )


def load_config(project_root: Path, config_path: Optional[Path] = None) -> CargoKitConfig:
    """
    Load configuration for a project.

    Args:
        project_root: Directory searched for cargokit.yaml
        config_path: Explicit configuration file (must exist)

    Returns:
        Parsed configuration, or defaults if no file exists

    Raises:
        ConfigError: If the configuration file is invalid
    """
    if config_path is not None:
        return parse_config(Path(config_path))

    candidate = Path(project_root) / CONFIG_FILE_NAME
    if not candidate.exists():
        logger.debug(f"Config file not found (optional): {candidate}")
        return CargoKitConfig()

    logger.debug(f"Loading configuration from {candidate}")
    return parse_config(candidate)
