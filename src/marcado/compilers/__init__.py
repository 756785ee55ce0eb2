"""Marcado compilers.

Compilers convert typed document trees into output formats.

Available Compilers:
- HtmlCompiler: Compiles a tree to HTML, resolving references and hoisting
  footnotes

Thread Safety:
Per-compilation state lives in a CompilationContext created by each
compile() call. Safe for concurrent use from multiple threads.

"""

from marcado.compilers.context import CompilationContext, DefinitionIndex, FootnoteRecord, FootnoteStore
from marcado.compilers.element import ElementBuilder
from marcado.compilers.html import HtmlCompiler
from marcado.compilers.protocol import ASTCompiler

__all__ = [
    "ASTCompiler",
    "CompilationContext",
    "DefinitionIndex",
    "ElementBuilder",
    "FootnoteRecord",
    "FootnoteStore",
    "HtmlCompiler",
]
