"""
Marcado: document tree to HTML compiler

Compiles an already-parsed lightweight-markup document tree into HTML.
Resolves link and image references declared anywhere in the document,
hoists inline footnotes, and produces deterministic output. Zero runtime
dependencies.

Quick Start:
    >>> from marcado import Paragraph, Root, Text, to_html
    >>> tree = Root(children=(Paragraph(children=(Text(value="Hello"),)),))
    >>> to_html(tree)
    '<p>Hello</p>\\n'

    >>> # From the parser's JSON output
    >>> from marcado import from_json
    >>> html = to_html(from_json(parser_output), sanitize=True)

Installation:
    pip install marcado
"""

from typing import Any

from marcado.compilers import (
    ASTCompiler,
    CompilationContext,
    DefinitionIndex,
    FootnoteRecord,
    FootnoteStore,
    HtmlCompiler,
)
from marcado.config import (
    CompileConfig,
    compile_config_context,
    get_compile_config,
    reset_compile_config,
    set_compile_config,
)
from marcado.errors import InvalidNodeError, MarcadoError, NestingDepthError, UnsupportedNodeError
from marcado.location import Point, Position
from marcado.nodes import (
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
    Inline,
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
from marcado.serialization import from_dict, from_json, to_dict, to_json
from marcado.visitor import BaseVisitor, walk

__version__ = "0.1.0"


def to_html(tree: Root | Block, *, config: CompileConfig | None = None, **options: Any) -> str:
    """Compile a document tree to HTML.

    Args:
        tree: Root node, or a single block node
        config: Compile configuration (defaults to the context's active config)
        **options: Individual CompileConfig fields, e.g. ``sanitize=True``

    Returns:
        HTML string

    Example:
        >>> to_html(Root(children=(Rule(),)))
        '<hr>\\n'
    """
    return HtmlCompiler(config, **options).compile(tree)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "to_html",
    # Compilers
    "ASTCompiler",
    "CompilationContext",
    "DefinitionIndex",
    "FootnoteRecord",
    "FootnoteStore",
    "HtmlCompiler",
    # Base nodes
    "Node",
    "Block",
    "Inline",
    # Block nodes
    "Root",
    "Blockquote",
    "Code",
    "Definition",
    "FootnoteDefinition",
    "Heading",
    "Html",
    "List",
    "ListItem",
    "Paragraph",
    "Rule",
    "Table",
    "TableCell",
    "TableRow",
    "Yaml",
    # Inline nodes
    "Break",
    "Delete",
    "Emphasis",
    "Escape",
    "Footnote",
    "FootnoteReference",
    "Image",
    "ImageReference",
    "InlineCode",
    "Link",
    "LinkReference",
    "Strong",
    "Text",
    # Visitor
    "BaseVisitor",
    "walk",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "CompileConfig",
    "get_compile_config",
    "set_compile_config",
    "reset_compile_config",
    "compile_config_context",
    # Errors
    "MarcadoError",
    "UnsupportedNodeError",
    "InvalidNodeError",
    "NestingDepthError",
    # Location
    "Point",
    "Position",
]
