"""Resolution of the async function an await expression belongs to."""

from typing import Optional

from jitc.models.syntax_node import NodeKind, SyntaxNode

# Class methods are deliberately absent: an await inside one resolves to an
# enclosing async function, if any.
ASYNC_FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.ARROW_FUNCTION_EXPRESSION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.OBJECT_METHOD,
})


def find_enclosing_async_function(node: SyntaxNode) -> Optional[SyntaxNode]:
    """Nearest strict ancestor that is an async function-like node, or None."""
    return node.find_parent(
        lambda p: p.is_async and p.kind in ASYNC_FUNCTION_KINDS
    )
