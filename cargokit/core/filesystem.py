"""
File system helpers for CargoKit.

This module provides:
- Change-aware writes (only touch a file when its content differs, which
  keeps Cargo's rerun-if-changed tracking quiet)
- Deterministic directory listings in natural (alphanumeric) order
"""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Platform detection
IS_WINDOWS = os.name == "nt"

_DIGITS = re.compile(r"(\d+)")


# ============================================================================
# Change-aware writes
# ============================================================================


def write_if_modified(path: Union[str, Path], data: Union[str, bytes]) -> bool:
    """
    Write ``data`` to ``path`` unless the file already holds exactly that content.

    Args:
        path: File to write
        data: New content (str is encoded as UTF-8)

    Returns:
        True if the file was written, False if it was already up to date

    Example:
        >>> write_if_modified("out/bindings.rs", generated)
        True
    """
    path = Path(path)
    if isinstance(data, str):
        data = data.encode("utf-8")

    try:
        if path.read_bytes() == data:
            logger.debug(f"Unchanged, not writing: {path}")
            return False
    except FileNotFoundError:
        pass

    path.write_bytes(data)
    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return True


def write_text_if_modified(
    path: Union[str, Path], text: str, crlf: Optional[bool] = None
) -> bool:
    """
    Text flavour of write_if_modified.

    ``\\n`` line endings are rewritten to ``\\r\\n`` when ``crlf`` is true,
    which defaults to true on Windows.
    """
    if crlf is None:
        crlf = IS_WINDOWS
    if crlf:
        text = text.replace("\r\n", "\n").replace("\n", "\r\n")
    return write_if_modified(path, text)


# ============================================================================
# Directory listings
# ============================================================================


def natural_sort_key(name: str) -> Tuple:
    """
    Sort key that orders embedded numbers numerically.

    Example:
        >>> sorted(["a10", "a2", "a1"], key=natural_sort_key)
        ['a1', 'a2', 'a10']
    """
    chunks = tuple(
        int(chunk) if i % 2 else chunk.lower()
        for i, chunk in enumerate(_DIGITS.split(name))
    )
    # Exact name breaks ties between case variants
    return chunks, name


def read_dir_sorted(path: Union[str, Path]) -> List[os.DirEntry]:
    """
    List a directory in natural order.

    Raises:
        OSError: If the directory cannot be listed
    """
    with os.scandir(path) as it:
        entries = list(it)
    entries.sort(key=lambda e: natural_sort_key(e.name))
    return entries
