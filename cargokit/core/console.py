"""
Cargo-style console output.

Messages go to stderr in the shape cargo and rustc use, so they blend in
with build output:

    error[E0001]: something went wrong
      --> src/lib.rs:3:7
       Compiling foo v0.1.0
"""

import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

_RESET = "\x1b[0m"
_BOLD = "\x1b[1m"
_RED = "\x1b[1;31m"
_YELLOW = "\x1b[1;33m"
_CYAN = "\x1b[1;36m"
_GREEN = "\x1b[1;32m"
_BLUE = "\x1b[1;34m"

_lock = threading.Lock()


@dataclass
class Stats:
    """Counters for messages printed through this module."""

    errors: int = 0
    warnings: int = 0

    @classmethod
    def get(cls) -> "Stats":
        """Snapshot of the process-wide counters."""
        with _lock:
            return cls(errors=_stats.errors, warnings=_stats.warnings)

    @classmethod
    def reset(cls) -> None:
        with _lock:
            _stats.errors = 0
            _stats.warnings = 0


_stats = Stats()


def use_color(stream=None) -> bool:
    """Colour only interactive terminals, and honour NO_COLOR."""
    stream = stream or sys.stderr
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _paint(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{_RESET}" if enabled else text


def _emit(
    severity: str,
    color: str,
    message: str,
    code: Optional[str],
    at: Optional[Union[str, Path]],
    line: int,
    col: int,
) -> None:
    stream = sys.stderr
    colored = use_color(stream)

    label = f"{severity}[{code}]" if code else severity
    out = f"{_paint(label, color, colored)}{_paint(':', _BOLD, colored)} {message}"
    if at is not None:
        location = str(at)
        if line:
            location += f":{line}"
            if col:
                location += f":{col}"
        out += f"\n  {_paint('-->', _BLUE, colored)} {location}"

    with _lock:
        print(out, file=stream)


def error(
    message: str,
    code: Optional[str] = None,
    at: Optional[Union[str, Path]] = None,
    line: int = 0,
    col: int = 0,
) -> None:
    """Print an ``error:`` line and bump the error counter."""
    with _lock:
        _stats.errors += 1
    _emit("error", _RED, message, code, at, line, col)


def warning(
    message: str,
    code: Optional[str] = None,
    at: Optional[Union[str, Path]] = None,
    line: int = 0,
    col: int = 0,
) -> None:
    """Print a ``warning:`` line and bump the warning counter."""
    with _lock:
        _stats.warnings += 1
    _emit("warning", _YELLOW, message, code, at, line, col)


def info(
    message: str,
    code: Optional[str] = None,
    at: Optional[Union[str, Path]] = None,
    line: int = 0,
    col: int = 0,
) -> None:
    _emit("info", _CYAN, message, code, at, line, col)


def fatal(
    message: str,
    code: Optional[str] = None,
    at: Optional[Union[str, Path]] = None,
    line: int = 0,
    col: int = 0,
) -> None:
    """Print an error and exit the process with status 1."""
    error(message, code=code, at=at, line=line, col=col)
    sys.exit(1)


def status(verb: str, message: str) -> None:
    """
    Print a cargo-style progress line with the verb right-aligned.

    Example:
        >>> status("Installing", "wasm-pack v0.9.1")
          Installing wasm-pack v0.9.1
    """
    stream = sys.stderr
    with _lock:
        print(f"{_paint(f'{verb:>12}', _GREEN, use_color(stream))} {message}", file=stream)


def header(text: str) -> None:
    stream = sys.stderr
    with _lock:
        print(_paint(text, _BOLD, use_color(stream)), file=stream)


def report_diagnostic(diagnostic) -> None:
    """
    Print a metadata Diagnostic.

    Warnings print as ``warning:``; every other kind prints as ``error:``.
    """
    from cargokit.metadata.diagnostics import DiagKind

    message = diagnostic.message
    if diagnostic.error is not None:
        message = f"{message}: {diagnostic.error}"

    if diagnostic.kind is DiagKind.WARNING:
        warning(message, at=diagnostic.path)
    else:
        error(message, code=diagnostic.kind.code, at=diagnostic.path)
