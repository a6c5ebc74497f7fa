"""
Source printer for syntax trees.

Unmodified subtrees are copied byte for byte from the text they were parsed
from. A modified node is reassembled from its children: the original text
between two children is reused when they were neighbours at parse time,
otherwise a newline (inside blocks) or a single space is inserted.
"""

from typing import List

from jitc.models.syntax_node import NodeKind, SyntaxNode


def _separator(node: SyntaxNode) -> bytes:
    if node.kind in (NodeKind.BLOCK_STATEMENT, NodeKind.PROGRAM):
        return b"\n"
    return b" "


def render_node(node: SyntaxNode) -> bytes:
    """Render one subtree to bytes."""
    if not node.modified or not node.children:
        return node.source[node.start_byte:node.end_byte]

    parts: List[bytes] = []
    first, last = node.children[0], node.children[-1]

    if first.original_parent is node and first.prev_original is None:
        parts.append(node.source[node.start_byte:first.start_byte])

    previous = None
    for child in node.children:
        if previous is not None:
            if previous.next_original is child:
                parts.append(child.source[previous.end_byte:child.start_byte])
            else:
                parts.append(_separator(node))
        parts.append(render_node(child))
        previous = child

    if last.original_parent is node and last.next_original is None:
        parts.append(node.source[last.end_byte:node.end_byte])

    return b"".join(parts)


def render_tree(tree: SyntaxNode) -> str:
    """Render a program root, keeping any text outside the root's span."""
    rendered = (
        tree.source[:tree.start_byte]
        + render_node(tree)
        + tree.source[tree.end_byte:]
    )
    return rendered.decode("utf8")
