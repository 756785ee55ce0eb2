"""Per-compilation state: the definition index and the footnote store.

A CompilationContext is built at the start of every root compilation by a
single pre-pass over the tree, threaded through every compiler call, and
dropped when the compilation returns. It is the only mutable state the
compiler touches.

Thread Safety:
    A context belongs to exactly one compilation. Concurrent compilations
    each build their own.

"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from marcado.location import Position
from marcado.nodes import Definition, FootnoteDefinition, FootnoteReference, Node
from marcado.visitor import BaseVisitor


class DefinitionIndex:
    """Case-insensitive identifier -> Definition lookup.

    Later definitions overwrite earlier ones with the same identifier.

    Usage:
        >>> index = DefinitionIndex()
        >>> index.add(Definition(identifier="foo", link="/a"))
        >>> index.resolve("FOO").link
        '/a'

    """

    __slots__ = ("_definitions",)

    def __init__(self) -> None:
        self._definitions: dict[str, Definition] = {}

    def add(self, definition: Definition) -> None:
        self._definitions[definition.identifier.upper()] = definition

    def resolve(self, identifier: str) -> Definition | None:
        return self._definitions.get(identifier.upper())

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.upper() in self._definitions


@dataclass(frozen=True, slots=True)
class FootnoteRecord:
    """One entry of the footnote section."""

    identifier: str
    children: tuple[Node, ...]
    position: Position | None = None


class FootnoteStore:
    """Ordered footnote records with smallest-unused identifier allocation.

    Explicit definitions are appended during the pre-pass, in document order.
    Inline footnotes are appended as the compiler meets them, each taking the
    smallest positive integer not already used as an identifier.

    The allocation cursor only moves forward: identifiers are never released,
    so the smallest unused integer can never decrease.

    """

    __slots__ = ("_records", "_used", "_cursor")

    def __init__(self) -> None:
        self._records: list[FootnoteRecord] = []
        self._used: set[str] = set()
        self._cursor = 1

    def append_explicit(self, record: FootnoteRecord) -> None:
        """Append a record for an explicit footnote definition."""
        self._records.append(record)
        self._used.add(record.identifier)

    def allocate_inline(
        self, children: Sequence[Node], position: Position | None = None
    ) -> FootnoteReference:
        """Hoist an inline footnote and return a reference to it.

        Args:
            children: Content of the inline footnote
            position: Source span of the inline footnote

        Returns:
            FootnoteReference carrying the newly allocated identifier
        """
        while str(self._cursor) in self._used:
            self._cursor += 1
        identifier = str(self._cursor)

        self._records.append(FootnoteRecord(identifier, tuple(children), position))
        self._used.add(identifier)
        return FootnoteReference(identifier=identifier, position=position)

    @property
    def identifiers(self) -> list[str]:
        return [record.identifier for record in self._records]

    def __getitem__(self, index: int) -> FootnoteRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[FootnoteRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)


class _PrePass(BaseVisitor[None]):
    """Collect definitions and explicit footnotes before anything renders."""

    def __init__(self, definitions: DefinitionIndex, footnotes: FootnoteStore) -> None:
        self._definitions = definitions
        self._footnotes = footnotes

    def visit_definition(self, node: Definition) -> None:
        self._definitions.add(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        self._footnotes.append_explicit(
            FootnoteRecord(node.identifier, node.children, node.position)
        )


@dataclass(slots=True)
class CompilationContext:
    """Mutable state owned by one compilation.

    Attributes:
        definitions: Link and image definitions declared anywhere in the tree
        footnotes: Footnote records, explicit first, then hoisted inline ones
        depth: Nesting depth of the node currently being compiled

    """

    definitions: DefinitionIndex = field(default_factory=DefinitionIndex)
    footnotes: FootnoteStore = field(default_factory=FootnoteStore)
    depth: int = 0

    @classmethod
    def from_tree(cls, root: Node) -> "CompilationContext":
        """Create a fresh context and run the definition pre-pass over ``root``."""
        ctx = cls()
        _PrePass(ctx.definitions, ctx.footnotes).visit(root)
        return ctx
