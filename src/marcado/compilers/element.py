"""HTML element builder shared by all compilers.

Builds ``<tag attrs>content</tag>`` strings with attribute escaping. Block
layout puts the content on its own lines; void elements have no content.

Attribute values may be strings, numbers, booleans, or None. None, False and
the empty string omit the attribute, True writes a bare attribute, and
everything else (0 included) is written as an escaped double-quoted value.

Example:
    >>> h = ElementBuilder(entities="escape")
    >>> h.element(None, "a", "x", {"href": "/y", "title": None})
    '<a href="/y">x</a>'
    >>> h.element(None, "ul", "<li>x</li>", block=True)
    '<ul>\\n<li>x</li>\\n</ul>'
"""

from collections.abc import Mapping

from marcado.nodes import AttributeValue, Node
from marcado.utils.escape import EntityMode, encode_attribute


class ElementBuilder:
    """Serialize elements and attributes.

    Holds only immutable settings, so one builder can be shared across
    compilations and threads.

    """

    __slots__ = ("_entities", "_xhtml")

    def __init__(self, *, entities: EntityMode = "true", xhtml: bool = False) -> None:
        self._entities = entities
        self._xhtml = xhtml

    def element(
        self,
        node: Node | None,
        tag: str,
        content: str = "",
        attributes: Mapping[str, AttributeValue] | None = None,
        *,
        block: bool = False,
    ) -> str:
        """Build an element with content.

        Args:
            node: Source node; its ``attributes`` are merged over ``attributes``
            tag: Tag name
            content: Already-rendered content
            attributes: Attribute mapping
            block: Put the content on its own lines

        Returns:
            Serialized element
        """
        open_tag = f"<{tag}{self.attributes(node, attributes)}>"
        if block:
            inner = f"\n{content}\n" if content else "\n"
            return f"{open_tag}{inner}</{tag}>"
        return f"{open_tag}{content}</{tag}>"

    def void(
        self,
        node: Node | None,
        tag: str,
        attributes: Mapping[str, AttributeValue] | None = None,
    ) -> str:
        """Build a childless element such as ``<hr>`` or ``<img>``."""
        close = " />" if self._xhtml else ">"
        return f"<{tag}{self.attributes(node, attributes)}{close}"

    def attributes(
        self,
        node: Node | None,
        attributes: Mapping[str, AttributeValue] | None = None,
    ) -> str:
        """Serialize attributes with a leading space, or "" when there are none."""
        merged: dict[str, AttributeValue] = dict(attributes or {})
        if node is not None and node.attributes:
            merged.update(node.attributes)

        parts: list[str] = []
        for name, value in merged.items():
            if value is None or value is False or value == "":
                continue
            if value is True:
                parts.append(f' {name}="{name}"' if self._xhtml else f" {name}")
            else:
                parts.append(f' {name}="{encode_attribute(str(value), self._entities)}"')
        return "".join(parts)
