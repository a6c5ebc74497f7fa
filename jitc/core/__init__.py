"""Detection and rewrite of unprotected await expressions."""

from jitc.core.exemption import IGNORE_MARKER, has_ignore_comment, has_try_ancestor
from jitc.core.locator import ASYNC_FUNCTION_KINDS, find_enclosing_async_function
from jitc.core.templates import build_block_wrap, build_expression_wrap, instantiate, is_await_body
from jitc.core.traversal import inject_try_catch

__all__ = [
    "IGNORE_MARKER",
    "ASYNC_FUNCTION_KINDS",
    "has_try_ancestor",
    "has_ignore_comment",
    "find_enclosing_async_function",
    "build_block_wrap",
    "build_expression_wrap",
    "instantiate",
    "is_await_body",
    "inject_try_catch",
]
