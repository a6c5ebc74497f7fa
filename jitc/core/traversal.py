"""
Traversal engine: one sweep over the tree wrapping unprotected awaits.

Await expressions are collected up front in source order and then processed
one by one. Rewrites only move existing nodes under a new try statement, so
every later await in an already wrapped function is exempt by the time it is
reached, which keeps each function wrapped at most once.
"""

from jitc.core.exemption import has_ignore_comment, has_try_ancestor
from jitc.core.locator import find_enclosing_async_function
from jitc.core.templates import ParseFragment, instantiate
from jitc.models.syntax_node import NodeKind, SyntaxNode
from jitc.models.transform import TransformReport
from jitc.utils.logging import get_logger

logger = get_logger(__name__)


def inject_try_catch(tree: SyntaxNode, parse_fragment: ParseFragment) -> TransformReport:
    """
    Wrap every unprotected await expression's enclosing async function.

    Mutates ``tree`` in place. Exceptions propagate and abort the pass.

    Args:
        tree: Root of the parsed program
        parse_fragment: Parser used to instantiate the replacement templates

    Returns:
        Counters describing what happened to each await expression
    """
    report = TransformReport()

    for node in tree.find_all(NodeKind.AWAIT_EXPRESSION):
        report.visited += 1

        if has_try_ancestor(node):
            report.exempt_by_try += 1
            continue

        if has_ignore_comment(node):
            report.exempt_by_comment += 1
            continue

        function = find_enclosing_async_function(node)
        if function is None:
            report.unlocated += 1
            continue

        if instantiate(function, parse_fragment):
            report.rewritten += 1
            logger.debug(
                f"Wrapped {function.kind.value} at line {function.start_line}",
                extra={"await_line": node.start_line},
            )
        else:
            report.unhandled += 1
            logger.debug(
                f"Body of {function.kind.value} at line {function.start_line} cannot be wrapped",
                extra={"await_line": node.start_line},
            )

    return report
