"""Tests for tree walking and BaseVisitor dispatch."""

from __future__ import annotations

from marcado import (
    BaseVisitor,
    Definition,
    Emphasis,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Root,
    Text,
    walk,
)


def _sample() -> Root:
    return Root(
        children=(
            Paragraph(
                children=(
                    Text(value="a"),
                    Emphasis(children=(Text(value="b"),)),
                    Link(href="/c", children=(Text(value="c"),)),
                )
            ),
            List(children=(ListItem(children=(Paragraph(children=(Text(value="d"),)),)),)),
            Definition(identifier="x", link="/x"),
        )
    )


class TestWalk:
    """walk() yields nodes in document order."""

    def test_pre_order(self) -> None:
        kinds = [node.kind for node in walk(_sample())]
        assert kinds == [
            "root",
            "paragraph",
            "text",
            "emphasis",
            "text",
            "link",
            "text",
            "list",
            "listItem",
            "paragraph",
            "text",
            "definition",
        ]

    def test_leaf(self) -> None:
        text = Text(value="x")
        assert list(walk(text)) == [text]

    def test_deep_tree_does_not_recurse(self) -> None:
        node: Node = Text(value="x")
        for _ in range(5000):
            node = Emphasis(children=(node,))
        assert sum(1 for _ in walk(node)) == 5001


class TestBaseVisitor:
    """Dispatch to visit_* methods."""

    def test_collect_text(self) -> None:
        class TextCollector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.values: list[str] = []

            def visit_text(self, node: Text) -> None:
                self.values.append(node.value)

        collector = TextCollector()
        collector.visit(_sample())
        assert collector.values == ["a", "b", "c", "d"]

    def test_visit_returns_root_result(self) -> None:
        class Counter(BaseVisitor[int]):
            def visit_root(self, node: Root) -> int:
                return len(node.children)

        assert Counter().visit(_sample()) == 3

    def test_visit_default(self) -> None:
        class KindCollector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.kinds: set[str] = set()

            def visit_default(self, node: Node) -> None:
                self.kinds.add(node.kind)

            def visit_link(self, node: Link) -> None:
                pass

        collector = KindCollector()
        collector.visit(_sample())
        assert "link" not in collector.kinds
        assert {"root", "text", "listItem", "definition"} <= collector.kinds
