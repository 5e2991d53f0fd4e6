"""
Lexical path utilities.

Nothing in this module touches the filesystem: paths are rewritten purely
from their components, so results are stable for paths that do not exist.
"""

import os
from pathlib import Path, PurePath
from typing import Union

PathLike = Union[str, os.PathLike]

_VERBATIM_PREFIX = "\\\\?\\"


def _clean_anchor(anchor: str) -> str:
    """Strip the verbatim prefix from a Windows disk anchor (\\\\?\\C:\\ -> C:\\)."""
    if anchor.startswith(_VERBATIM_PREFIX):
        rest = anchor[len(_VERBATIM_PREFIX):]
        if len(rest) >= 2 and rest[1] == ":" and rest[0].isalpha():
            return rest
    return anchor


def normalize(path: PathLike) -> Path:
    """
    Lexically clean up a path.

    Collapses ``.`` segments and resolves ``..`` against a preceding normal
    segment. A ``..`` that nothing can absorb is kept. An empty result
    becomes ``.``.

    Args:
        path: Path to clean up

    Returns:
        Cleaned path of the platform's flavour

    Example:
        >>> normalize("a/b/../c/./d")
        PosixPath('a/c/d')
        >>> normalize("../../a/b/../../..")
        PosixPath('../../..')
    """
    path = Path(path)
    anchor = _clean_anchor(path.anchor)
    parts = path.parts[1:] if path.anchor else path.parts

    out = []
    for part in parts:
        if part == ".":
            continue
        if part == "..":
            if out and out[-1] != "..":
                out.pop()
            else:
                out.append("..")
            continue
        out.append(part)

    if not anchor and not out:
        return Path(".")
    return Path(anchor, *out)


def has_extension(path: PathLike, ext: str) -> bool:
    """
    Check whether a file name ends with ``ext``.

    Works for multi-part extensions (``.tar.gz``). The leading dot is
    optional, and the full file name never counts as its own extension.
    """
    return _has_extension(path, ext, lambda a, b: a == b)


def has_extension_ignore_ascii_case(path: PathLike, ext: str) -> bool:
    """Same as has_extension, comparing ASCII letters case-insensitively."""
    return _has_extension(path, ext, lambda a, b: _ascii_lower(a) == _ascii_lower(b))


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


def _has_extension(path: PathLike, ext: str, eq) -> bool:
    if not ext:
        return True
    ext = ext[1:] if ext.startswith(".") else ext

    name = PurePath(path).name
    if len(name) <= len(ext):
        return False

    head, tail = name[: len(name) - len(ext)], name[len(name) - len(ext):]
    return head.endswith(".") and eq(tail, ext)
