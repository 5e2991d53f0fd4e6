"""
Expansion of workspace ``members``/``exclude`` glob patterns.

Patterns are matched segment by segment against the filesystem:

- a literal segment descends into that name
- ``*`` descends into every subdirectory (symlinks are not followed)
- ``..`` steps up lexically, ``.`` is ignored
- an absolute pattern restarts from its anchor

When the pattern runs out, ``<dir>/Cargo.toml`` is the candidate that gets
added to (or removed from) the shared set of matched manifests.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Iterable, Sequence, Set

from cargokit.core.filesystem import read_dir_sorted
from cargokit.core.path import normalize
from cargokit.manifest import MANIFEST_FILE_NAME
from cargokit.metadata.diagnostics import DiagKind, Diagnostics

logger = logging.getLogger(__name__)


def expand_manifest_pattern(
    insert: bool,
    matched: Set[Path],
    directory: Path,
    pattern: str,
    diagnostics: Diagnostics,
) -> None:
    """
    Apply one pattern to ``matched``.

    Args:
        insert: True to add matches (members), False to remove them (exclude)
        matched: Manifest paths matched so far; updated in place
        directory: Directory the pattern is relative to
        pattern: Glob pattern, e.g. "crates/*"
        diagnostics: Collector for problems found along the way
    """
    parsed = Path(pattern)
    path = Path(directory)
    parts: Sequence[str] = parsed.parts
    if parsed.anchor:
        path = Path(parsed.anchor)
        parts = parts[1:]

    _walk(insert, matched, path, tuple(parts), pattern, diagnostics)


def _walk(insert, matched, path, parts, pattern, diagnostics) -> None:
    while parts:
        part, parts = parts[0], parts[1:]

        if part == ".":
            continue
        if part == "..":
            path = normalize(path / "..")
            continue
        if part != "*":
            path = path / part
            continue

        try:
            entries = read_dir_sorted(path)
        except OSError as e:
            diagnostics.push(
                path,
                f"unable to enumerate (expected by pattern `{pattern}`)",
                DiagKind.IO,
                e,
            )
            return

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                diagnostics.push(
                    path,
                    f"error during enumeration (expected by pattern `{pattern}`)",
                    DiagKind.IO,
                    e,
                )
                continue
            if is_dir:
                _walk(insert, matched, path / entry.name, parts, pattern, diagnostics)
        return

    manifest = path / MANIFEST_FILE_NAME
    if not insert:
        matched.discard(manifest)
        return

    try:
        is_file = manifest.is_file()
    except OSError as e:
        diagnostics.push(manifest, f"expected by pattern `{pattern}`", DiagKind.IO, e)
        return

    if is_file:
        if manifest in matched:
            diagnostics.push(
                manifest,
                f"multiple matches (repeat pattern: `{pattern}`)",
                DiagKind.WARNING,
            )
        matched.add(manifest)
    else:
        diagnostics.push(
            manifest,
            f"expected by pattern `{pattern}`",
            DiagKind.IO,
            FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(manifest)),
        )


def apply_member_patterns(
    matched: Set[Path],
    directory: Path,
    patterns: Iterable[str],
    manifest_path: Path,
    diagnostics: Diagnostics,
) -> None:
    """Insert every member pattern, flagging patterns that add nothing."""
    for pattern in patterns:
        before = len(matched)
        expand_manifest_pattern(True, matched, directory, pattern, diagnostics)
        if len(matched) == before:
            diagnostics.push(
                manifest_path,
                f'member pattern "{pattern}" added no packages',
                DiagKind.MALFORMED,
            )
        logger.debug(f"member pattern {pattern!r}: {len(matched) - before} new")


def apply_exclude_patterns(
    matched: Set[Path],
    directory: Path,
    patterns: Iterable[str],
    manifest_path: Path,
    diagnostics: Diagnostics,
) -> None:
    """Remove every exclude pattern's matches, flagging patterns that remove nothing."""
    for pattern in patterns:
        before = len(matched)
        expand_manifest_pattern(False, matched, directory, pattern, diagnostics)
        if len(matched) == before:
            diagnostics.push(
                manifest_path,
                f'exclude pattern "{pattern}" removed no packages',
                DiagKind.WARNING,
            )
