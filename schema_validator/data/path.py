"""
Path parser for accessor lookups.

Supports:
- Simple keys: "addr.city"
- Array indices: "phones[0]", "phones.[0]"
- Mixed: "addr.phones.[0].number"

Index segments are kept in their bracketed form (``"[0]"``) so that the
array accessor owns index validation.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto

from ..errors import InvalidPathError


class PathSegmentType(Enum):
    KEY = auto()
    INDEX = auto()


@dataclass(frozen=True)
class PathSegment:
    """Represents a single segment in a path."""

    type: PathSegmentType
    value: str

    @classmethod
    def key(cls, name: str) -> "PathSegment":
        return cls(PathSegmentType.KEY, name)

    @classmethod
    def index(cls, token: str) -> "PathSegment":
        return cls(PathSegmentType.INDEX, token)


class PathParser:
    """Parser for accessor path expressions."""

    KEY_PATTERN = re.compile(r"^[^.\[\]]+")
    BRACKET_PATTERN = re.compile(r"^\[([^\]]*)\]")

    def parse(self, path_str: str) -> list[PathSegment]:
        """Parse a path string into segments. An empty path has none."""
        segments: list[PathSegment] = []
        remaining = path_str

        while remaining:
            if match := self.BRACKET_PATTERN.match(remaining):
                segments.append(PathSegment.index(match.group(0)))
                remaining = remaining[match.end() :]
            elif match := self.KEY_PATTERN.match(remaining):
                segments.append(PathSegment.key(match.group(0)))
                remaining = remaining[match.end() :]
            else:
                raise InvalidPathError(f"Invalid path syntax at: {remaining!r} in {path_str!r}")

            # Skip dot separator if present
            if remaining.startswith("."):
                remaining = remaining[1:]
                if not remaining or remaining.startswith("."):
                    raise InvalidPathError(f"Empty segment in path {path_str!r}")

        return segments


INDEX_TOKEN = re.compile(r"^\[(\d+)\]$")


def parse_index(token: str) -> int:
    """Parse a ``[N]`` token; anything else is a malformed index."""
    match = INDEX_TOKEN.match(token.strip())
    if match is None:
        raise InvalidPathError(f"Invalid array index: {token!r}")
    return int(match.group(1))


def render_path(segments: tuple[str, ...] | list[str]) -> str:
    """Join segments with '.', appending '[N]' segments without a separator."""
    parts: list[str] = []
    for i, segment in enumerate(segments):
        if i > 0 and not segment.startswith("["):
            parts.append(".")
        parts.append(segment)
    return "".join(parts)


_parser = PathParser()


def parse_path(path_str: str) -> list[PathSegment]:
    """Convenience function to parse a path string."""
    return _parser.parse(path_str)
