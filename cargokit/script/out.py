"""
Build script output directives.

Each function prints one ``cargo:`` line to stdout, which Cargo reads back.
See https://doc.rust-lang.org/cargo/reference/build-scripts.html#outputs-of-the-build-script
"""

import os
from typing import Optional, Union

StrPath = Union[str, os.PathLike]


def _emit(line: str) -> None:
    print(f"cargo:{line}", flush=True)


def rerun_if_changed(path: StrPath) -> None:
    _emit(f"rerun-if-changed={os.fspath(path)}")


def rerun_if_env_changed(var: str) -> None:
    _emit(f"rerun-if-env-changed={var}")


def rustc_link_lib(kind: Optional[str], name: str) -> None:
    """Link a library; ``kind`` is dylib, static, framework or None."""
    _emit(f"rustc-link-lib={kind}={name}" if kind else f"rustc-link-lib={name}")


def rustc_link_search(kind: Optional[str], path: StrPath) -> None:
    path = os.fspath(path)
    _emit(f"rustc-link-search={kind}={path}" if kind else f"rustc-link-search={path}")


def rustc_flags(flags: str) -> None:
    _emit(f"rustc-flags={flags}")


def rustc_cfg(key: str) -> None:
    _emit(f"rustc-cfg={key}")


def rustc_cfg_val(key: str, value: str) -> None:
    """Emit ``key="value"``, with the value quoted and escaped."""
    quoted = '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    _emit(f"rustc-cfg={key}={quoted}")


def rustc_env(var: str, value: str) -> None:
    _emit(f"rustc-env={var}={value}")


def rustc_cdylib_link_arg(flag: str) -> None:
    _emit(f"rustc-cdylib-link-arg={flag}")


def warning(message: str) -> None:
    # One directive per line
    for line in message.splitlines():
        _emit(f"warning={line.rstrip()}")


def metadata(key: str, value: str) -> None:
    """Metadata for dependents of a ``links`` package."""
    _emit(f"{key}={value}")
