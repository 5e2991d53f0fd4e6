"""
Version parsing for Rust tools.

Rust tools report versions as semantic versions, optionally followed by a
commit hash and date:

    cargo 1.47.0 (f3c7e066a 2020-08-28)
    rustc 1.50.0-nightly (1c389ffef 2020-11-24)
    wasm-pack 0.9.1

SemVer implements semver 2.0 precedence, which PEP 440 tooling cannot
express for pre-releases such as ``-nightly``.
"""

import functools
import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from cargokit.core.exceptions import InvalidVersionError, VersionParseError

logger = logging.getLogger(__name__)

_SEMVER = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
_HEX = re.compile(r"^[0-9A-Fa-f]+$")
_DATE = re.compile(r"^[0-9-]+$")


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemVer:
    """
    Semantic version.

    Equality and ordering ignore build metadata, per semver precedence.
    """

    major: int
    minor: int
    patch: int
    pre: Tuple[Union[int, str], ...] = ()
    build: Tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> "SemVer":
        """
        Parse a semantic version string.

        Raises:
            InvalidVersionError: If text is not a semantic version
        """
        match = _SEMVER.match(text.strip())
        if not match:
            raise InvalidVersionError(f"invalid semantic version: {text!r}")

        pre = ()
        if match.group("pre"):
            pre = tuple(
                int(ident) if ident.isdigit() else ident
                for ident in match.group("pre").split(".")
            )
        build = tuple(match.group("build").split(".")) if match.group("build") else ()
        return cls(
            int(match.group("major")),
            int(match.group("minor")),
            int(match.group("patch")),
            pre,
            build,
        )

    @property
    def is_prerelease(self) -> bool:
        return bool(self.pre)

    def _key(self):
        # A release sorts above any of its pre-releases; numeric identifiers
        # sort below alphanumeric ones.
        pre_key = tuple(
            (0, ident, "") if isinstance(ident, int) else (1, 0, ident)
            for ident in self.pre
        )
        return (self.major, self.minor, self.patch, not self.pre, pre_key)

    def __eq__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(str(i) for i in self.pre)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


@dataclass(frozen=True)
class ToolVersion:
    """
    Parsed ``tool --version`` output.

    Attributes:
        tool_name: Name the tool reports for itself (e.g. "cargo")
        version: Semantic version
        hash: Commit hash, when reported
        date: Commit date (YYYY-MM-DD), when reported
    """

    tool_name: str
    version: SemVer
    hash: Optional[str] = None
    date: Optional[str] = None

    @classmethod
    def parse(cls, output: str) -> "ToolVersion":
        """
        Parse the first line of ``tool --version`` output.

        Raises:
            VersionParseError: If the output does not match the expected shape
        """
        line = output.splitlines()[0] if output else ""
        pieces = line.rstrip("\r\n").split(" ", 3)

        tool_name = pieces[0] if pieces and pieces[0] else None
        if tool_name is None:
            raise VersionParseError("missing tool name in version output")
        if len(pieces) < 2 or not pieces[1]:
            raise VersionParseError(f"missing version in {tool_name} version output")

        try:
            version = SemVer.parse(pieces[1])
        except InvalidVersionError as e:
            raise VersionParseError(f"invalid {tool_name} version: {e}") from e

        commit_hash = None
        if len(pieces) > 2:
            raw = pieces[2]
            if not raw.startswith("(") or not _HEX.match(raw[1:]):
                raise VersionParseError(f"invalid {tool_name} commit hash: {raw!r}")
            commit_hash = raw[1:]

        date = None
        if len(pieces) > 3:
            raw = pieces[3]
            if not raw.endswith(")") or not _DATE.match(raw[:-1]):
                raise VersionParseError(f"invalid {tool_name} commit date: {raw!r}")
            date = raw[:-1]

        return cls(tool_name, version, commit_hash, date)

    def is_at_least(self, major: int, minor: int, patch: int) -> bool:
        """
        True when this version meets ``major.minor.patch``.

        A pre-release of exactly that version does not count.
        """
        check = SemVer(major, minor, patch)
        if self.version.is_prerelease:
            return self.version > check
        return self.version >= check

    def is_after(self, major: int, minor: int, patch: int) -> bool:
        return self.version > SemVer(major, minor, patch)

    def __str__(self) -> str:
        text = f"{self.tool_name} {self.version}"
        if self.hash is not None:
            text += f" ({self.hash}"
            if self.date is not None:
                text += f" {self.date}"
            text += ")"
        return text
