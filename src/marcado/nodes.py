"""Typed document tree nodes for Marcado.

All nodes are frozen, keyword-only dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads and compilations
- Structural checks: illegal child combinations fail at construction
- Pattern matching: Python 3.10+ match statements work naturally

Node Hierarchy:
Node (base)
├── Root
├── ListItem, TableRow, TableCell (only valid under List, Table, TableRow)
├── Block (block-level elements)
│   ├── Paragraph
│   ├── Heading
│   ├── Blockquote
│   ├── List
│   ├── Code
│   ├── Table
│   ├── Html
│   ├── Rule
│   ├── Definition
│   ├── FootnoteDefinition
│   └── Yaml
└── Inline (inline elements)
    ├── Text
    ├── Escape
    ├── Strong / Emphasis / Delete
    ├── InlineCode
    ├── Break
    ├── Link / Image
    ├── Footnote
    ├── FootnoteReference
    └── LinkReference / ImageReference

Every class carries a ``kind`` class attribute holding the node kind name
used by the parser's JSON output (``"listItem"``, ``"inlineCode"``, ...).

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar, Literal, TypeAlias

from marcado.errors import InvalidNodeError
from marcado.location import Position

Align: TypeAlias = Literal["left", "right", "center"]
ReferenceType: TypeAlias = Literal["shortcut", "collapsed", "full"]
AttributeValue: TypeAlias = str | int | float | bool | None

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Node:
    """Base class for all tree nodes.

    Attributes:
        position: Source span recorded by the parser; passed through opaquely
        attributes: Extra HTML attributes merged into the element this node
            compiles to

    """

    kind: ClassVar[str] = "node"

    position: Position | None = None
    attributes: Mapping[str, AttributeValue] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Block(Node):
    """Marker base for block-level nodes."""


@dataclass(frozen=True, slots=True, kw_only=True)
class Inline(Node):
    """Marker base for inline nodes."""


def _check_children(node: Node, allowed: tuple[type, ...], label: str) -> None:
    """Coerce ``node.children`` to a tuple and reject illegal child kinds."""
    children = tuple(node.children)  # type: ignore[attr-defined]
    object.__setattr__(node, "children", children)
    for child in children:
        if not isinstance(child, allowed):
            found = getattr(child, "kind", type(child).__name__)
            msg = f"{node.kind} cannot contain {found!r}; expected {label}"
            raise InvalidNodeError(msg)


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Text(Inline):
    """Plain text content.

    HTML: escaped text

    """

    kind: ClassVar[str] = "text"

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Escape(Inline):
    """Backslash-escaped character.

    Markdown: \\* or a backslash at the end of a line
    HTML: the character, or <br> for an escaped newline

    """

    kind: ClassVar[str] = "escape"

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Strong(Inline):
    """Strong (bold) text.

    Markdown: **text** or __text__
    HTML: <strong>text</strong>

    """

    kind: ClassVar[str] = "strong"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Emphasis(Inline):
    """Emphasized (italic) text.

    Markdown: *text* or _text_
    HTML: <em>text</em>

    """

    kind: ClassVar[str] = "emphasis"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Delete(Inline):
    """Deleted (struck-through) text.

    Markdown: ~~deleted~~
    HTML: <del>deleted</del>

    """

    kind: ClassVar[str] = "delete"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class InlineCode(Inline):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    kind: ClassVar[str] = "inlineCode"

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Break(Inline):
    """Hard line break.

    Markdown: two trailing spaces before a line ending
    HTML: <br> followed by a newline

    """

    kind: ClassVar[str] = "break"


@dataclass(frozen=True, slots=True, kw_only=True)
class Link(Inline):
    """Hyperlink with an inline target.

    Markdown: [text](href "title")
    HTML: <a href="href" title="title">text</a>

    """

    kind: ClassVar[str] = "link"

    href: str = ""
    title: str | None = None
    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Image(Inline):
    """Image with an inline source.

    Markdown: ![alt](src "title")
    HTML: <img src="src" alt="alt" title="title">

    """

    kind: ClassVar[str] = "image"

    src: str = ""
    alt: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Footnote(Inline):
    """Inline footnote, hoisted to the footnote section when compiled.

    Markdown: ^[note text]

    """

    kind: ClassVar[str] = "footnote"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class FootnoteReference(Inline):
    """Reference to a footnote.

    Markdown: [^1] or [^note]
    HTML: <sup id="fnref-1"><a href="#fn-1">1</a></sup>

    """

    kind: ClassVar[str] = "footnoteReference"

    identifier: str


@dataclass(frozen=True, slots=True, kw_only=True)
class LinkReference(Inline):
    """Link whose target is resolved through a Definition.

    Markdown: [text][id], [id][], or [id]

    """

    kind: ClassVar[str] = "linkReference"

    identifier: str
    reference_type: ReferenceType = "full"
    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class ImageReference(Inline):
    """Image whose source is resolved through a Definition.

    Markdown: ![alt][id], ![id][], or ![id]

    """

    kind: ClassVar[str] = "imageReference"

    identifier: str
    reference_type: ReferenceType = "full"
    alt: str | None = None


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True, kw_only=True)
class Paragraph(Block):
    """Paragraph block.

    HTML: <p>text</p>

    """

    kind: ClassVar[str] = "paragraph"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Heading(Block):
    """ATX or setext heading.

    HTML: <h1>..<h6>

    """

    kind: ClassVar[str] = "heading"

    depth: int = 1
    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        if not 1 <= self.depth <= 6:
            msg = f"heading depth must be between 1 and 6, got {self.depth}"
            raise InvalidNodeError(msg)
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Blockquote(Block):
    """Block quote.

    Markdown: > quoted text
    HTML: <blockquote>text</blockquote>

    """

    kind: ClassVar[str] = "blockquote"

    children: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (Block,), "block content")


@dataclass(frozen=True, slots=True, kw_only=True)
class ListItem(Node):
    """List item. Only valid as a direct child of List.

    HTML: <li>item</li>

    """

    kind: ClassVar[str] = "listItem"

    children: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (Block,), "block content")


@dataclass(frozen=True, slots=True, kw_only=True)
class List(Block):
    """Ordered or unordered list.

    HTML: <ul>/<ol> with <li> children

    """

    kind: ClassVar[str] = "list"

    ordered: bool = False
    start: int | None = None  # Starting number for ordered lists
    loose: bool = False
    children: tuple[ListItem, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (ListItem,), "listItem")


@dataclass(frozen=True, slots=True, kw_only=True)
class Code(Block):
    """Code block, fenced or indented.

    HTML: <pre><code class="language-LANG">...</code></pre>

    """

    kind: ClassVar[str] = "code"

    lang: str | None = None
    value: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class TableCell(Node):
    """Table cell. Rendered as th in the first row, td elsewhere."""

    kind: ClassVar[str] = "tableCell"

    children: tuple[Inline | Html, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, INLINE_CONTENT, "inline content")


@dataclass(frozen=True, slots=True, kw_only=True)
class TableRow(Node):
    """Table row."""

    kind: ClassVar[str] = "tableRow"

    children: tuple[TableCell, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (TableCell,), "tableCell")


@dataclass(frozen=True, slots=True, kw_only=True)
class Table(Block):
    """Table (GFM-style).

    The first row is the header row. ``align`` holds one entry per column.

    """

    kind: ClassVar[str] = "table"

    align: tuple[Align | None, ...] = ()
    children: tuple[TableRow, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "align", tuple(self.align))
        _check_children(self, (TableRow,), "tableRow")


@dataclass(frozen=True, slots=True, kw_only=True)
class Html(Block):
    """Raw HTML, block or inline.

    HTML: passed through unchanged unless sanitizing

    """

    kind: ClassVar[str] = "html"

    value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Rule(Block):
    """Thematic break.

    Markdown: --- or *** or ___
    HTML: <hr>

    """

    kind: ClassVar[str] = "rule"


@dataclass(frozen=True, slots=True, kw_only=True)
class Definition(Block):
    """Link reference definition. Produces no output.

    Markdown: [id]: http://example.com "title"

    """

    kind: ClassVar[str] = "definition"

    identifier: str
    link: str = ""
    title: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class FootnoteDefinition(Block):
    """Footnote definition. Rendered in the footnote section.

    Markdown: [^1]: Footnote content here.

    """

    kind: ClassVar[str] = "footnoteDefinition"

    identifier: str
    children: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (Block,), "block content")


@dataclass(frozen=True, slots=True, kw_only=True)
class Yaml(Block):
    """Front matter. Produces no output."""

    kind: ClassVar[str] = "yaml"

    value: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class Root(Node):
    """Root document node.

    Contains all top-level blocks in the document.

    """

    kind: ClassVar[str] = "root"

    children: tuple[Block, ...] = ()

    def __post_init__(self) -> None:
        _check_children(self, (Block,), "block content")


# Raw HTML may appear wherever inline content is allowed
INLINE_CONTENT: tuple[type, ...] = (Inline, Html)

NODE_TYPES: dict[str, type[Node]] = {
    cls.kind: cls
    for cls in (
        Root,
        Paragraph,
        Heading,
        Blockquote,
        List,
        ListItem,
        Code,
        Table,
        TableRow,
        TableCell,
        Html,
        Rule,
        Definition,
        FootnoteDefinition,
        Yaml,
        Text,
        Escape,
        Strong,
        Emphasis,
        Delete,
        InlineCode,
        Break,
        Link,
        Image,
        Footnote,
        FootnoteReference,
        LinkReference,
        ImageReference,
    )
}
