"""Tree walking and a visitor base class for Marcado.

Example, collecting all link targets:

    class LinkCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.hrefs: list[str] = []

        def visit_link(self, node: Link) -> None:
            self.hrefs.append(node.href)

    collector = LinkCollector()
    collector.visit(tree)

Traversal uses an explicit stack, so arbitrarily deep trees can be walked
without exhausting the interpreter's call stack.

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. ``walk`` is pure.

"""

from collections.abc import Iterator
from typing import Generic, TypeVar

from marcado.nodes import (
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


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        children = getattr(current, "children", ())
        stack.extend(reversed(children))


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node kinds you care about.
    Unhandled kinds fall through to ``visit_default``. Every descendant is
    visited, in document order.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Visit ``node`` and all of its descendants.

        Returns the result of visiting ``node`` itself.

        """
        nodes = walk(node)
        result = self._dispatch(next(nodes))
        for descendant in nodes:
            self._dispatch(descendant)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node kinds without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_root(self, node: Root) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_blockquote(self, node: Blockquote) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_html(self, node: Html) -> T:
        return self.visit_default(node)

    def visit_rule(self, node: Rule) -> T:
        return self.visit_default(node)

    def visit_definition(self, node: Definition) -> T:
        return self.visit_default(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> T:
        return self.visit_default(node)

    def visit_yaml(self, node: Yaml) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_escape(self, node: Escape) -> T:
        return self.visit_default(node)

    def visit_strong(self, node: Strong) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_delete(self, node: Delete) -> T:
        return self.visit_default(node)

    def visit_inline_code(self, node: InlineCode) -> T:
        return self.visit_default(node)

    def visit_break(self, node: Break) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_footnote(self, node: Footnote) -> T:
        return self.visit_default(node)

    def visit_footnote_reference(self, node: FootnoteReference) -> T:
        return self.visit_default(node)

    def visit_link_reference(self, node: LinkReference) -> T:
        return self.visit_default(node)

    def visit_image_reference(self, node: ImageReference) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Root():
                return self.visit_root(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case Heading():
                return self.visit_heading(node)
            case Blockquote():
                return self.visit_blockquote(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case Code():
                return self.visit_code(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case Html():
                return self.visit_html(node)
            case Rule():
                return self.visit_rule(node)
            case Definition():
                return self.visit_definition(node)
            case FootnoteDefinition():
                return self.visit_footnote_definition(node)
            case Yaml():
                return self.visit_yaml(node)
            case Text():
                return self.visit_text(node)
            case Escape():
                return self.visit_escape(node)
            case Strong():
                return self.visit_strong(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Delete():
                return self.visit_delete(node)
            case InlineCode():
                return self.visit_inline_code(node)
            case Break():
                return self.visit_break(node)
            case Link():
                return self.visit_link(node)
            case Image():
                return self.visit_image(node)
            case Footnote():
                return self.visit_footnote(node)
            case FootnoteReference():
                return self.visit_footnote_reference(node)
            case LinkReference():
                return self.visit_link_reference(node)
            case ImageReference():
                return self.visit_image_reference(node)
            case _:
                return self.visit_default(node)
