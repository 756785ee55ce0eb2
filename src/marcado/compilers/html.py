"""HTML compiler for Marcado document trees.

Compiles a typed tree to an HTML string in one depth-first pass, preceded
by a pre-pass that indexes link definitions and explicit footnotes so that
references may point forward in the document.

Thread Safety:
All per-compilation state is encapsulated in CompilationContext, created
fresh for each compile() call. Multiple threads can safely share a single
HtmlCompiler instance and call compile() concurrently without
synchronization.

Whitespace:
Block sequences are joined with newlines, inline runs with nothing. After a
hard break (or an escaped line ending) the next sibling's leading
whitespace is dropped, so output does not depend on source indentation.
"""

import dataclasses
from collections.abc import Sequence
from typing import Any

from marcado.compilers.context import CompilationContext, FootnoteRecord
from marcado.compilers.element import ElementBuilder
from marcado.config import CompileConfig, get_compile_config
from marcado.errors import NestingDepthError, UnsupportedNodeError
from marcado.nodes import (
    Align,
    Block,
    Blockquote,
    Break,
    Code,
    Definition,
    Delete,
    Emphasis,
    Escape,
    Footnote,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Html,
    Image,
    ImageReference,
    InlineCode,
    Link,
    LinkReference,
    List,
    ListItem,
    Node,
    Paragraph,
    Root,
    Rule,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    Yaml,
)
from marcado.utils.escape import encode, normalize_uri
from marcado.utils.logger import get_logger
from marcado.utils.text import collapse, detab, first_word, trim, trim_left, trim_lines

logger = get_logger(__name__)


def _is_hard_break(node: Node) -> bool:
    return isinstance(node, Break) or (isinstance(node, Escape) and node.value == "\n")


def _has_children(node: Node) -> bool:
    return bool(getattr(node, "children", ()))


class HtmlCompiler:
    """Compile a document tree to HTML.

    Usage:
        >>> compiler = HtmlCompiler()
        >>> compiler.compile(Root(children=(Paragraph(children=(Text(value="hi"),)),)))
        '<p>hi</p>\\n'

        >>> HtmlCompiler(sanitize=True).compile(Root(children=(Html(value="<b>"),)))
        '&lt;b&gt;\\n'

    Thread Safety:
        The compiler only holds immutable configuration. Each compile() call
        creates an independent CompilationContext.
    """

    __slots__ = ("_config", "_h")

    def __init__(self, config: CompileConfig | None = None, **options: Any) -> None:
        """Initialize compiler.

        Args:
            config: Compile configuration; defaults to the config active in
                the current context (see marcado.config)
            **options: Individual CompileConfig fields overriding ``config``
        """
        base = config if config is not None else get_compile_config()
        if options:
            base = dataclasses.replace(base, **options)
        self._config = base
        self._h = ElementBuilder(entities=base.entities, xhtml=base.xhtml)

    @property
    def config(self) -> CompileConfig:
        return self._config

    def compile(self, tree: Root | Block) -> str:
        """Compile a tree to HTML.

        Args:
            tree: Root node, or a single block compiled as the only child
                of a root

        Returns:
            HTML string; non-empty output ends with exactly one newline

        Raises:
            UnsupportedNodeError: A node kind has no compiler
            NestingDepthError: Nodes nest more than ``config.max_depth``
                levels below the root (100 by default). Every visited node
                counts, so a paragraph inside 98 quotes is the deepest
                default-accepted tree; raise the limit for deeper input.
        """
        if not isinstance(tree, Root):
            tree = Root(children=(tree,), position=tree.position)
        return self._root(tree)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def visit(self, node: Node, parent: Node | None, ctx: CompilationContext) -> str:
        """Compile a single node with the compiler registered for its kind."""
        ctx.depth += 1
        try:
            if ctx.depth > self._config.max_depth:
                raise NestingDepthError(self._config.max_depth, node.kind)

            match node:
                case Paragraph():
                    return self._paragraph(node, ctx)
                case Heading():
                    return self._heading(node, ctx)
                case Blockquote():
                    return self._blockquote(node, ctx)
                case List():
                    return self._list(node, ctx)
                case ListItem():
                    return self._list_item(node, parent, ctx)
                case Code():
                    return self._code(node)
                case Table():
                    return self._table(node, ctx)
                case TableRow():
                    # Reached through a tight list item; no alignment outside a table
                    return self._table_row(node, ctx, "td", (None,) * len(node.children))
                case TableCell():
                    return self._h.element(node, "td", "\n".join(self.all(node, ctx)))
                case Html():
                    return self._html(node)
                case Rule():
                    return self._h.void(node, "hr")
                case Text():
                    return self._text(node)
                case Escape():
                    return self._escape(node)
                case Strong():
                    return self._h.element(node, "strong", self._inline(node, ctx))
                case Emphasis():
                    return self._h.element(node, "em", self._inline(node, ctx))
                case Delete():
                    return self._h.element(node, "del", self._inline(node, ctx))
                case InlineCode():
                    return self._h.element(node, "code", collapse(self._encode(node.value)))
                case Break():
                    return self._break(node)
                case Link():
                    return self._link(node, ctx)
                case Image():
                    return self._image(node)
                case Footnote():
                    return self._footnote(node, ctx)
                case FootnoteReference():
                    return self._footnote_reference(node)
                case LinkReference():
                    return self._link_reference(node, ctx)
                case ImageReference():
                    return self._image_reference(node, ctx)
                case Definition() | FootnoteDefinition() | Yaml():
                    # Consumed by the pre-pass
                    return ""
                case _:
                    raise UnsupportedNodeError(node.kind, node.position)
        finally:
            ctx.depth -= 1

    def all(self, parent: Node, ctx: CompilationContext) -> list[str]:
        """Compile the children of ``parent``, dropping empty results."""
        return self._sequence(getattr(parent, "children", ()), parent, ctx)

    def _sequence(
        self, nodes: Sequence[Node], parent: Node | None, ctx: CompilationContext
    ) -> list[str]:
        values: list[str] = []
        prev: Node | None = None

        for node in nodes:
            value = self.visit(node, parent, ctx)
            if value and prev is not None and _is_hard_break(prev):
                value = trim_left(value)
            if value:
                values.append(value)
            prev = node

        return values

    def _inline(self, node: Node, ctx: CompilationContext) -> str:
        return "".join(self.all(node, ctx))

    def _encode(self, value: str) -> str:
        return encode(value, self._config.entities)

    # =========================================================================
    # Block compilers
    # =========================================================================

    def _root(self, node: Root) -> str:
        """Compile the document, then append the footnote section."""
        ctx = CompilationContext.from_tree(node)
        logger.debug(
            "Pre-pass indexed %d definitions and %d footnotes",
            len(ctx.definitions),
            len(ctx.footnotes),
        )

        content = "\n".join(self.all(node, ctx)).rstrip("\n")
        result = f"{content}\n" if content else ""
        return result + self._footnote_section(ctx)

    def _paragraph(self, node: Paragraph, ctx: CompilationContext) -> str:
        return self._h.element(node, "p", trim(detab(self._inline(node, ctx))))

    def _heading(self, node: Heading, ctx: CompilationContext) -> str:
        return self._h.element(node, f"h{node.depth}", self._inline(node, ctx))

    def _blockquote(self, node: Blockquote, ctx: CompilationContext) -> str:
        return self._h.element(node, "blockquote", "\n".join(self.all(node, ctx)), block=True)

    def _list(self, node: List, ctx: CompilationContext) -> str:
        start = node.start if node.ordered and node.start not in (None, 1) else None
        return self._h.element(
            node,
            "ol" if node.ordered else "ul",
            "\n".join(self.all(node, ctx)),
            {"start": start},
            block=True,
        )

    def _list_item(self, node: ListItem, parent: Node | None, ctx: CompilationContext) -> str:
        """Compile a list item.

        Tight lists: an item whose only child has children of its own renders
        those children directly, joined with nothing (<li>text</li>, no <p>).
        Otherwise every child renders as a block inside the item.
        """
        loose = parent.loose if isinstance(parent, List) else False

        if not loose and len(node.children) == 1 and _has_children(node.children[0]):
            return self._h.element(node, "li", self._inline(node.children[0], ctx))
        return self._h.element(node, "li", "\n".join(self.all(node, ctx)), block=True)

    def _code(self, node: Code) -> str:
        value = detab(node.value.rstrip("\n") + "\n") if node.value else ""
        language = first_word(node.lang)
        code = self._h.element(
            None,
            "code",
            self._encode(value),
            {"class": f"language-{language}" if language else None},
        )
        return self._h.element(node, "pre", code)

    def _table(self, node: Table, ctx: CompilationContext) -> str:
        """Compile a table.

        The first row renders with th cells inside thead, the rest with td
        cells inside tbody. There is one cell per entry of align: cells in
        column i carry align[i], rows shorter than align are padded with
        empty, still aligned, cells, and cells beyond align are dropped.
        """
        rows = [
            self._table_row(row, ctx, "th" if index == 0 else "td", node.align)
            for index, row in enumerate(node.children)
        ]

        head = self._h.element(None, "thead", rows[0] if rows else "", block=True)
        body = self._h.element(None, "tbody", "\n".join(rows[1:]), block=True)
        return self._h.element(node, "table", f"{head}\n{body}", block=True)

    def _table_row(
        self,
        row: TableRow,
        ctx: CompilationContext,
        tag: str,
        align: Sequence[Align | None],
    ) -> str:
        cells: list[str] = []
        for pos, column_align in enumerate(align):
            cell = row.children[pos] if pos < len(row.children) else None
            content = "\n".join(self.all(cell, ctx)) if cell is not None else ""
            cells.append(self._h.element(cell, tag, content, {"align": column_align}))
        return self._h.element(row, "tr", "\n".join(cells), block=True)

    def _html(self, node: Html) -> str:
        return self._encode(node.value) if self._config.sanitize else node.value

    # =========================================================================
    # Inline compilers
    # =========================================================================

    def _text(self, node: Text | Escape) -> str:
        return trim_lines(self._encode(node.value))

    def _escape(self, node: Escape) -> str:
        if node.value == "\n":
            return self._break(node)
        return self._text(node)

    def _break(self, node: Node) -> str:
        return self._h.void(node, "br") + "\n"

    def _link(self, node: Link, ctx: CompilationContext) -> str:
        return self._h.element(
            node,
            "a",
            self._inline(node, ctx),
            {"href": normalize_uri(node.href), "title": node.title},
        )

    def _image(self, node: Image) -> str:
        return self._h.void(
            node,
            "img",
            {"src": normalize_uri(node.src), "alt": node.alt or "", "title": node.title},
        )

    def _footnote(self, node: Footnote, ctx: CompilationContext) -> str:
        """Hoist an inline footnote and compile a reference to it in place."""
        reference = ctx.footnotes.allocate_inline(node.children, node.position)
        logger.debug("Allocated footnote identifier %r for inline footnote", reference.identifier)
        return self._footnote_reference(reference)

    def _footnote_reference(self, node: FootnoteReference) -> str:
        identifier = node.identifier
        anchor = self._h.element(
            None,
            "a",
            self._encode(identifier),
            {"href": f"#fn-{identifier}", "class": "footnote-ref"},
        )
        return self._h.element(node, "sup", anchor, {"id": f"fnref-{identifier}"})

    def _link_reference(self, node: LinkReference, ctx: CompilationContext) -> str:
        definition = ctx.definitions.resolve(node.identifier)
        content = self._inline(node, ctx)

        if node.reference_type == "shortcut" and (definition is None or not definition.link):
            logger.debug("Unresolved shortcut reference %r kept as text", node.identifier)
            return f"[{content}]"

        return self._h.element(
            node,
            "a",
            content,
            {
                "href": normalize_uri(definition.link) if definition else "",
                "title": definition.title if definition else None,
            },
        )

    def _image_reference(self, node: ImageReference, ctx: CompilationContext) -> str:
        definition = ctx.definitions.resolve(node.identifier)

        if node.reference_type == "shortcut" and (definition is None or not definition.link):
            logger.debug("Unresolved shortcut image reference %r kept as text", node.identifier)
            return f"![{self._encode(node.alt or '')}]"

        return self._h.void(
            node,
            "img",
            {
                "src": normalize_uri(definition.link) if definition else "",
                "alt": node.alt or "",
                "title": definition.title if definition else None,
            },
        )

    # =========================================================================
    # Footnote section
    # =========================================================================

    def _footnote_section(self, ctx: CompilationContext) -> str:
        """Render every stored footnote, in store order, at the end of the document.

        Footnotes hoisted while rendering the section itself are rendered in
        the same section.
        """
        store = ctx.footnotes
        if not store:
            return ""

        items: list[str] = []
        index = 0
        while index < len(store):
            items.append(self._footnote_item(store[index], ctx))
            index += 1

        content = self._h.void(None, "hr") + "\n" + self._h.element(
            None, "ol", "\n".join(items), block=True
        )
        return self._h.element(None, "div", content, {"class": "footnotes"}, block=True) + "\n"

    def _footnote_item(self, record: FootnoteRecord, ctx: CompilationContext) -> str:
        identifier = record.identifier
        backref = Link(
            href=f"#fnref-{identifier}",
            attributes={"class": "footnote-backref"},
            children=(Text(value=self._config.footnote_backref_label),),
        )
        values = self._sequence((*record.children, backref), None, ctx)
        return self._h.element(None, "li", "\n".join(values), {"id": f"fn-{identifier}"}, block=True)
