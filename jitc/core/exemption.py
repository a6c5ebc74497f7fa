"""
Exemption rules for await expressions.

An await expression is left alone when it already runs inside a try
statement, or when the comment right above it carries the ignore marker.
"""

from typing import Optional

from jitc.models.syntax_node import NodeKind, SyntaxNode

IGNORE_MARKER = "@jitc-ignore-next-line"


def has_try_ancestor(node: SyntaxNode) -> bool:
    """True if any strict ancestor of ``node`` is a try statement."""
    return node.find_parent(lambda p: p.kind == NodeKind.TRY_STATEMENT) is not None


def has_ignore_comment(node: SyntaxNode) -> bool:
    """
    True if the nearest commented ancestor opts ``node`` out.

    Only the nearest ancestor carrying leading comments is consulted, and
    only its last comment. That comment must contain the ignore marker and
    start on the line directly above the await expression. A marker on a
    more distant ancestor is never seen once a nearer ancestor has any
    comment at all.
    """
    holder: Optional[SyntaxNode] = node.find_parent(lambda p: bool(p.leading_comments))
    if holder is None:
        return False

    latest = holder.leading_comments[-1]
    return IGNORE_MARKER in latest.text and latest.start_line == node.start_line - 1
