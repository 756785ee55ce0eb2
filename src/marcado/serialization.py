"""Tree serialization: load parser output into typed nodes and back.

The upstream parser emits plain dicts (or JSON) shaped like::

    {"type": "paragraph", "children": [{"type": "text", "value": "hi"}],
     "position": {"start": {"line": 1, "column": 1}, "end": {...}}}

Keys are camelCase (``referenceType``); node fields are snake_case
(``reference_type``). Unknown keys are ignored, so parser-specific extras
pass through harmlessly.

Example:
    from marcado.serialization import from_json, to_json

    tree = from_json(parser_output)
    assert from_json(to_json(tree)) == tree

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
import re
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from marcado.errors import InvalidNodeError, UnsupportedNodeError
from marcado.location import Position
from marcado.nodes import NODE_TYPES, Node, Root

# Older parser releases used a different name for some kinds
_KIND_ALIASES: dict[str, str] = {
    "horizontalRule": "rule",
    "thematicBreak": "rule",
}

# Alternative keys the parser may use for a field, tried in order
_FIELD_ALIASES: dict[tuple[str, str], tuple[str, ...]] = {
    ("link", "href"): ("href", "url"),
    ("image", "src"): ("src", "url"),
    ("definition", "link"): ("link", "url"),
}

_SNAKE_BOUNDARY = re.compile(r"_([a-z])")


def _camel(name: str) -> str:
    return _SNAKE_BOUNDARY.sub(lambda m: m.group(1).upper(), name)


def to_dict(node: Node) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``type`` discriminator; fields holding None are omitted.

    Args:
        node: Any Marcado node.

    Returns:
        Dict with ``type`` and the node's fields under camelCase keys.

    """
    result: dict[str, Any] = {"type": node.kind}

    for f in fields(node):
        value = getattr(node, f.name)
        if value is None:
            continue
        result[_camel(f.name)] = _serialize_value(value)

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Position):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    if isinstance(value, Mapping):
        return dict(value)
    # Primitives: str, int, float, bool
    return value


def from_dict(data: Mapping[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Args:
        data: Dict with ``type`` and node fields, as emitted by the parser
            or by :func:`to_dict`.

    Returns:
        Typed node (frozen dataclass).

    Raises:
        InvalidNodeError: If ``type`` is missing or the fields do not form a
            valid node.
        UnsupportedNodeError: If ``type`` names an unknown kind.

    """
    kind = data.get("type")
    if kind is None:
        msg = "Missing 'type' field in serialized node"
        raise InvalidNodeError(msg)

    kind = _KIND_ALIASES.get(kind, kind)
    node_cls = NODE_TYPES.get(kind)
    if node_cls is None:
        position = data.get("position")
        raise UnsupportedNodeError(kind, _position(position) if position else None)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        keys = _FIELD_ALIASES.get((kind, f.name), (_camel(f.name),))
        for key in keys:
            if key in data:
                kwargs[f.name] = _deserialize_value(data[key], f.name)
                break

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Cannot build {kind!r} node: {e}"
        raise InvalidNodeError(msg) from e


def _position(value: Any) -> Position:
    try:
        return Position.from_dict(value)
    except (KeyError, TypeError, AttributeError) as e:
        msg = f"Invalid position {value!r}: {e!r}"
        raise InvalidNodeError(msg) from e


def _deserialize_value(value: Any, field_name: str) -> Any:
    """Deserialize a single field value."""
    if value is None:
        return None
    if field_name == "position":
        return _position(value)
    if field_name == "children":
        return tuple(from_dict(child) for child in value)
    if field_name == "attributes":
        return dict(value)
    if isinstance(value, list):
        return tuple(value)
    return value


def to_json(tree: Root, *, indent: int | None = None) -> str:
    """Serialize a tree to a JSON string.

    Output is deterministic (sorted keys).

    """
    return json.dumps(to_dict(tree), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Root:
    """Deserialize a tree from a JSON string.

    Raises:
        InvalidNodeError: If the JSON doesn't represent a root node.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Root):
        msg = f"Expected root, got {node.kind!r}"
        raise InvalidNodeError(msg)
    return node
