"""
Core functionality for CargoKit.

This package contains the foundational modules that other components depend on.
"""

from .command import Command

from .locking import (
    LockManager,
    LockTimeout,
    get_global_cache_dir,
)

from .path import (
    normalize,
    has_extension,
    has_extension_ignore_ascii_case,
)

from .version import (
    SemVer,
    ToolVersion,
)

from .exceptions import (
    CargoKitError,
    MetadataError,
    ManifestNotFoundError,
    ManifestError,
    ManifestFormatError,
    CommandError,
    EnvVarError,
    EnvVarNotSetError,
    EnvVarInvalidUnicodeError,
    VersionParseError,
    InvalidVersionError,
    ToolError,
    ToolNotFoundError,
    ToolInstallError,
    ConfigError,
)

__all__ = [
    # Process execution
    "Command",
    # Locking
    "LockManager",
    "LockTimeout",
    "get_global_cache_dir",
    # Paths
    "normalize",
    "has_extension",
    "has_extension_ignore_ascii_case",
    # Versions
    "SemVer",
    "ToolVersion",
    # Exceptions
    "CargoKitError",
    "MetadataError",
    "ManifestNotFoundError",
    "ManifestError",
    "ManifestFormatError",
    "CommandError",
    "EnvVarError",
    "EnvVarNotSetError",
    "EnvVarInvalidUnicodeError",
    "VersionParseError",
    "InvalidVersionError",
    "ToolError",
    "ToolNotFoundError",
    "ToolInstallError",
    "ConfigError",
]
