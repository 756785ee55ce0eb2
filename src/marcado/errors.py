"""Exception classes for Marcado.

Provides standardized exceptions for error handling throughout Marcado.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from marcado.location import Position


class MarcadoError(Exception):
    """Base exception for all Marcado errors.

    Subclass this for specific error categories.
    """

    pass


class UnsupportedNodeError(MarcadoError):
    """No compiler is registered for a node's kind.

    Fatal to the compilation in progress: the error propagates to the caller
    unmodified and no partial output is returned.
    """

    def __init__(self, kind: str, position: Position | None = None) -> None:
        """Initialize unsupported node error.

        Args:
            kind: Kind of the offending node (e.g., "mystery")
            position: Source span of the node, if the parser recorded one
        """
        self.kind = kind
        self.position = position

        location = f" at {position.start}" if position is not None else ""
        super().__init__(f"Unsupported node kind {kind!r}{location}")


class InvalidNodeError(MarcadoError):
    """A node was built with an illegal structure.

    Raised at construction time, for example when a list is given a
    paragraph as a direct child or a heading has a depth outside 1-6.
    """

    pass


class NestingDepthError(MarcadoError):
    """The tree is nested deeper than the configured ``max_depth``."""

    def __init__(self, max_depth: int, kind: str) -> None:
        self.max_depth = max_depth
        self.kind = kind
        super().__init__(
            f"Nesting depth exceeds max_depth={max_depth} at node kind {kind!r}"
        )
