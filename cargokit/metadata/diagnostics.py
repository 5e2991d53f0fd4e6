"""
Non-fatal problems found while resolving workspace metadata.

Resolution keeps going past broken members, bad patterns and unreadable
files; each problem becomes a Diagnostic so callers can report all of
them at once instead of stopping at the first.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional


class DiagKind(Enum):
    """Category of a Diagnostic."""

    WARNING = "warning"
    MALFORMED = "malformed"
    BUG = "bug"
    IO = "io"
    FORMAT = "format"

    @property
    def code(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """
    One problem with a workspace.

    Attributes:
        path: File or directory the problem is about, if any
        message: Human readable description
        kind: Category
        error: Wrapped OSError (IO) or parse error (FORMAT)
    """

    path: Optional[Path]
    message: str
    kind: DiagKind
    error: Optional[BaseException] = None

    def __str__(self) -> str:
        text = f"{self.path}: {self.message}" if self.path is not None else self.message
        if self.error is not None:
            text += f": {self.error}"
        return text


class Diagnostics:
    """Append-only, ordered collection of Diagnostic records."""

    def __init__(self):
        self._items: List[Diagnostic] = []

    def push(
        self,
        path: Optional[Path],
        message: str,
        kind: DiagKind,
        error: Optional[BaseException] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(path, message, kind, error)
        self._items.append(diagnostic)
        return diagnostic

    def of_kind(self, kind: DiagKind) -> List[Diagnostic]:
        return [d for d in self._items if d.kind is kind]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return f"Diagnostics({self._items!r})"
