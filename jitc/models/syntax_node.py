"""Syntax tree data models."""

from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple

from pydantic import BaseModel


class NodeKind(str, Enum):
    """Grammar-independent kind of a syntax node."""

    PROGRAM = "Program"
    AWAIT_EXPRESSION = "AwaitExpression"
    TRY_STATEMENT = "TryStatement"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    ARROW_FUNCTION_EXPRESSION = "ArrowFunctionExpression"
    FUNCTION_EXPRESSION = "FunctionExpression"
    OBJECT_METHOD = "ObjectMethod"
    CLASS_METHOD = "ClassMethod"
    BLOCK_STATEMENT = "BlockStatement"
    PARENTHESIZED_EXPRESSION = "ParenthesizedExpression"
    IDENTIFIER = "Identifier"
    COMMENT = "Comment"
    OTHER = "Other"


FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.ARROW_FUNCTION_EXPRESSION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.OBJECT_METHOD,
    NodeKind.CLASS_METHOD,
})


class Comment(BaseModel):
    """A source comment attached to the node it precedes."""

    text: str
    start_line: int
    start_column: int = 0


class SyntaxNode:
    """
    Mutable syntax tree node.

    Nodes keep a reference to the bytes they were parsed from, so an
    unmodified subtree can be printed back verbatim. ``original_parent`` and
    the ``prev_original``/``next_original`` links record the layout at parse
    time and never change; the printer uses them to decide which original
    whitespace is still valid after a mutation.

    This is a plain class rather than a pydantic model: the parent
    back-reference makes the structure cyclic.
    """

    def __init__(
        self,
        node_type: str,
        kind: NodeKind,
        source: bytes,
        start_byte: int,
        end_byte: int,
        start_line: int,
        start_column: int,
        end_line: int,
        end_column: int,
        is_async: bool = False,
    ):
        self.node_type = node_type
        self.kind = kind
        self.source = source
        self.start_byte = start_byte
        self.end_byte = end_byte
        self.start_line = start_line
        self.start_column = start_column
        self.end_line = end_line
        self.end_column = end_column
        self.is_async = is_async

        self.parent: Optional["SyntaxNode"] = None
        self.field_name: Optional[str] = None
        self.children: List["SyntaxNode"] = []
        self.leading_comments: List[Comment] = []
        self.modified = False
        # grammar dialect the tree was parsed with, set on program roots only
        self.dialect: Optional[str] = None

        self.original_parent: Optional["SyntaxNode"] = None
        self.prev_original: Optional["SyntaxNode"] = None
        self.next_original: Optional["SyntaxNode"] = None

    def __repr__(self) -> str:
        return (
            f"SyntaxNode({self.node_type!r}, kind={self.kind.value}, "
            f"line={self.start_line}, column={self.start_column})"
        )

    @property
    def text(self) -> str:
        """Original text of the node (ignores pending mutations)."""
        return self.source[self.start_byte:self.end_byte].decode("utf8")

    def ancestors(self) -> Iterator["SyntaxNode"]:
        """Yield parents from the nearest one up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def find_parent(
        self, predicate: Callable[["SyntaxNode"], bool]
    ) -> Optional["SyntaxNode"]:
        """Return the nearest strict ancestor matching ``predicate``."""
        for ancestor in self.ancestors():
            if predicate(ancestor):
                return ancestor
        return None

    def walk(self) -> Iterator["SyntaxNode"]:
        """Depth-first, parent-before-child, left-to-right iteration."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, kind: NodeKind) -> List["SyntaxNode"]:
        return [node for node in self.walk() if node.kind == kind]

    def child_by_field(self, field_name: str) -> Optional["SyntaxNode"]:
        for child in self.children:
            if child.field_name == field_name:
                return child
        return None

    def append_child(self, child: "SyntaxNode", field_name: Optional[str] = None) -> None:
        """Attach a child while building the tree (no modification is recorded)."""
        child.parent = self
        child.field_name = field_name
        self.children.append(child)

    def mark_modified(self) -> None:
        node: Optional[SyntaxNode] = self
        while node is not None:
            node.modified = True
            node = node.parent

    def replace_child(self, old: "SyntaxNode", new: "SyntaxNode") -> None:
        """
        Swap ``old`` for ``new`` in the same slot.

        ``new`` is adopted, not removed from its previous parent: a node moved
        elsewhere is expected to have its old slot replaced wholesale next.
        """
        index = self.children.index(old)
        self.children[index] = new
        new.parent = self
        new.field_name = old.field_name
        if old.parent is self:
            old.parent = None
        self.mark_modified()

    @property
    def statements(self) -> List["SyntaxNode"]:
        """
        Statement sequence of a block: every child between the braces,
        comments included.
        """
        if self.kind == NodeKind.PROGRAM:
            return list(self.children)
        opening, closing = self._brace_indexes()
        return self.children[opening + 1:closing]

    def set_statements(self, statements: List["SyntaxNode"]) -> None:
        """
        Replace the whole statement sequence of a block.

        The statements are adopted the same way ``replace_child`` adopts.
        """
        opening, closing = self._brace_indexes()
        for old in self.children[opening + 1:closing]:
            if old.parent is self:
                old.parent = None
        for statement in statements:
            statement.parent = self
            statement.field_name = None
        self.children = [
            *self.children[:opening + 1],
            *statements,
            *self.children[closing:],
        ]
        self.mark_modified()

    def _brace_indexes(self) -> Tuple[int, int]:
        if self.kind != NodeKind.BLOCK_STATEMENT:
            raise TypeError(f"{self.node_type} has no statement sequence")
        types = [child.node_type for child in self.children]
        if "{" not in types or "}" not in types:
            raise ValueError(f"Block at line {self.start_line} is not delimited by braces")
        return types.index("{"), len(types) - 1 - types[::-1].index("}")
