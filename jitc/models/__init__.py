"""Data models for the await try/catch injector."""

from .error import ErrorRecord
from .syntax_node import Comment, NodeKind, SyntaxNode
from .transform import TransformOptions, TransformReport, TransformResult

__all__ = [
    # Syntax tree models
    "NodeKind",
    "Comment",
    "SyntaxNode",
    # Transform models
    "TransformOptions",
    "TransformReport",
    "TransformResult",
    # Error models
    "ErrorRecord",
]
