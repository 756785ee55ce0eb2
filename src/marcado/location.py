"""Source positions carried by document nodes.

The upstream parser annotates nodes with the span of source text they came
from. The compiler never interprets positions; it passes them through to
records it creates (hoisted footnotes) and includes them in error messages.

Thread Safety:
Point and Position are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A single place in the source.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Absolute character offset (0-indexed), if known

    """

    line: int
    column: int
    offset: int | None = None

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Position:
    """Span of source text a node was produced from.

    Examples:
        >>> pos = Position(Point(1, 1), Point(1, 10))
        >>> str(pos)
        '1:1-1:10'

    """

    start: Point
    end: Point
    indent: tuple[int, ...] = ()

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Position:
        """Build a position from the parser's ``{"start": ..., "end": ...}`` shape."""
        start = data["start"]
        end = data.get("end", start)
        return cls(
            start=Point(start["line"], start["column"], start.get("offset")),
            end=Point(end["line"], end["column"], end.get("offset")),
            indent=tuple(data.get("indent") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Inverse of :meth:`from_dict`."""

        def point(p: Point) -> dict[str, Any]:
            out: dict[str, Any] = {"line": p.line, "column": p.column}
            if p.offset is not None:
                out["offset"] = p.offset
            return out

        result: dict[str, Any] = {"start": point(self.start), "end": point(self.end)}
        if self.indent:
            result["indent"] = list(self.indent)
        return result
