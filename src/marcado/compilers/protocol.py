"""ASTCompiler protocol, the stable interface for tree compilers.

Any compiler that implements ``compile(tree) -> str`` conforms to this protocol.
The built-in ``HtmlCompiler`` is the reference implementation.

Example:
    from marcado.compilers.protocol import ASTCompiler

    def build_page(compiler: ASTCompiler, tree: Root) -> str:
        return compiler.compile(tree)

"""

from typing import Protocol, runtime_checkable

from marcado.nodes import Root


@runtime_checkable
class ASTCompiler(Protocol):
    """Protocol for tree compilers.

    Implementations must accept a Root and return a compiled string.
    The built-in ``HtmlCompiler`` conforms to this protocol.

    """

    def compile(self, tree: Root) -> str:
        """Compile a document tree to a string.

        Args:
            tree: The document tree to compile.

        Returns:
            Compiled string output.

        """
        ...
