"""
Centralized exception hierarchy for CargoKit.

All custom exceptions raised by cargokit derive from CargoKitError so callers
can catch library failures with a single except clause.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class CargoKitError(Exception):
    """Base exception for all CargoKit errors."""

    pass


# ============================================================================
# Metadata / Manifest Exceptions
# ============================================================================


class MetadataError(CargoKitError):
    """Raised when workspace metadata cannot be resolved at all."""

    pass


class ManifestNotFoundError(MetadataError):
    """Raised when no Cargo.toml exists in a directory or any of its ancestors."""

    pass


class ManifestError(CargoKitError):
    """Base exception for manifest document errors."""

    pass


class ManifestFormatError(ManifestError):
    """
    Raised when manifest content is not valid TOML or does not fit the
    manifest document shape.

    Attributes:
        error: Underlying decoding, parse or validation error (may be None)
    """

    def __init__(self, message: str, error: Exception = None):
        super().__init__(message)
        self.error = error


# ============================================================================
# Process / Environment Exceptions
# ============================================================================


class CommandError(CargoKitError):
    """Raised when a child process cannot be spawned or exits unsuccessfully."""

    pass


class EnvVarError(CargoKitError):
    """
    Base exception for environment variable lookups.

    Attributes:
        name: Name of the environment variable
    """

    def __init__(self, message: str, name: str):
        super().__init__(message)
        self.name = name


class EnvVarNotSetError(EnvVarError):
    """Raised when a required environment variable is not set."""

    pass


class EnvVarInvalidUnicodeError(EnvVarError):
    """Raised when an environment variable does not hold valid unicode."""

    pass


# ============================================================================
# Version Exceptions
# ============================================================================


class VersionParseError(CargoKitError):
    """Raised when `tool --version` output cannot be parsed."""

    pass


class InvalidVersionError(CargoKitError):
    """Raised when a requested version is not a valid semantic version."""

    pass


# ============================================================================
# Tool Exceptions
# ============================================================================


class ToolError(CargoKitError):
    """Base exception for external tool errors."""

    pass


class ToolNotFoundError(ToolError):
    """Raised when an external tool is not installed or not on PATH."""

    pass


class ToolInstallError(ToolError):
    """Raised when `cargo install` of a tool fails."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(CargoKitError):
    """Raised when cargokit.yaml is missing, invalid or inconsistent."""

    pass
