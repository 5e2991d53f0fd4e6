"""
Environment variable accessors.

Three families cover the usual call sites:

- ``var_*`` raise EnvVarError subclasses
- ``req_*`` print a fatal console error and exit when the variable is
  unusable (intended for build scripts)
- ``opt_*`` return None when the variable is unset

Each family has ``str`` (strict unicode), ``lossy`` (invalid sequences
replaced), ``os`` (raw value) and ``path`` variants.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from cargokit.core import console
from cargokit.core.exceptions import (
    EnvVarError,
    EnvVarInvalidUnicodeError,
    EnvVarNotSetError,
)

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


def _display_name(name: str) -> str:
    return f"%{name}%" if IS_WINDOWS else f"${{{name}}}"


def _not_set(name: str) -> EnvVarNotSetError:
    return EnvVarNotSetError(f"{_display_name(name)} is not set", name)


def _invalid_unicode(name: str) -> EnvVarInvalidUnicodeError:
    return EnvVarInvalidUnicodeError(
        f"{_display_name(name)} contains invalid unicode", name
    )


def has_var(name: str) -> bool:
    return name in os.environ


# ============================================================================
# var_*: raise on failure
# ============================================================================


def var_os(name: str) -> str:
    """
    Raw value, as stored by the interpreter.

    On POSIX, bytes that are not valid UTF-8 survive as surrogate escapes.
    """
    try:
        return os.environ[name]
    except KeyError:
        raise _not_set(name) from None


def var_str(name: str) -> str:
    value = var_os(name)
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise _invalid_unicode(name) from None
    return value


def var_lossy(name: str) -> str:
    value = var_os(name)
    return value.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def var_path(name: str) -> Path:
    return Path(var_os(name))


# ============================================================================
# req_*: exit on failure
# ============================================================================


def _required(getter, name: str):
    try:
        return getter(name)
    except EnvVarError as e:
        logger.debug(f"Required environment variable unusable: {name}")
        console.fatal(str(e))


def req_os(name: str) -> str:
    return _required(var_os, name)


def req_str(name: str) -> str:
    return _required(var_str, name)


def req_lossy(name: str) -> str:
    return _required(var_lossy, name)


def req_path(name: str) -> Path:
    return _required(var_path, name)


# ============================================================================
# opt_*: None when unset
# ============================================================================


def opt_os(name: str) -> Optional[str]:
    return os.environ.get(name)


def opt_str(name: str) -> Optional[str]:
    """Value of ``name`` or None; exits if set to invalid unicode."""
    if name not in os.environ:
        return None
    return req_str(name)


def opt_lossy(name: str) -> Optional[str]:
    if name not in os.environ:
        return None
    return var_lossy(name)


def opt_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value is not None else None
