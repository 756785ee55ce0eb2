"""Typed tree: list every link target before compiling."""

from marcado import (
    BaseVisitor,
    Definition,
    Link,
    LinkReference,
    Paragraph,
    Root,
    Text,
    to_html,
)


class LinkCollector(BaseVisitor[None]):
    """Collect inline hrefs and reference identifiers."""

    def __init__(self) -> None:
        self.hrefs: list[str] = []
        self.references: list[str] = []

    def visit_link(self, node: Link) -> None:
        self.hrefs.append(node.href)

    def visit_link_reference(self, node: LinkReference) -> None:
        self.references.append(node.identifier)


tree = Root(
    children=(
        Paragraph(
            children=(
                Link(href="https://example.com", children=(Text(value="inline"),)),
                Text(value=" and "),
                LinkReference(identifier="ref", children=(Text(value="reference"),)),
            )
        ),
        Definition(identifier="ref", link="/ref"),
    )
)

collector = LinkCollector()
collector.visit(tree)
print("Inline links:", collector.hrefs)
print("References:", collector.references)
print(to_html(tree))
