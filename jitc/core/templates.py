"""
Replacement code for async function bodies.

Both shapes are produced by parsing a fixed template with the grammar of the
file being transformed and substituting a single hole: the original statement
sequence for block bodies, the original awaited expression for arrow functions
of the form ``async () => await x``.
"""

from typing import Callable, List

from jitc.models.syntax_node import NodeKind, SyntaxNode

ParseFragment = Callable[[str], SyntaxNode]

# used with a function which has a body brace
TRY_CATCH_TEMPLATE = """
try {
} catch (e) {
console.error(e);
}"""

# used with an arrow function whose body is a bare await expression
DIRECT_AWAIT_TEMPLATE = """
let data;
try {
data = DIRECT_RETURNED_EXPRESSION;
} catch (e) {
console.error(e);
}
return data;"""

EXPRESSION_HOLE = "DIRECT_RETURNED_EXPRESSION"

# Templates are parsed as the body of a throwaway function so that `return`
# is legal in every grammar.
_TEMPLATE_HOST = "async function __jitc_template__() {%s\n}"


def _template_body(template: str, parse_fragment: ParseFragment) -> SyntaxNode:
    program = parse_fragment(_TEMPLATE_HOST % template)
    host = program.find_all(NodeKind.FUNCTION_DECLARATION)[0]
    return host.child_by_field("body")


def build_block_wrap(statements: List[SyntaxNode], parse_fragment: ParseFragment) -> SyntaxNode:
    """
    Build ``try { <statements> } catch (e) { console.error(e); }``.

    Args:
        statements: The complete original statement sequence of the function
        parse_fragment: Parser for the grammar of the file being transformed

    Returns:
        The try statement node, ready to become the function's only statement
    """
    body = _template_body(TRY_CATCH_TEMPLATE, parse_fragment)
    try_node = next(s for s in body.statements if s.kind == NodeKind.TRY_STATEMENT)
    try_node.child_by_field("body").set_statements(statements)
    return try_node


def build_expression_wrap(expression: SyntaxNode, parse_fragment: ParseFragment) -> SyntaxNode:
    """
    Build a block that assigns ``expression`` to a local inside a try and
    returns the local afterwards.

    Args:
        expression: The original arrow function body
        parse_fragment: Parser for the grammar of the file being transformed

    Returns:
        The block node that replaces the arrow function body
    """
    block = _template_body(DIRECT_AWAIT_TEMPLATE, parse_fragment)
    hole = next(
        node for node in block.walk()
        if node.kind == NodeKind.IDENTIFIER and node.text == EXPRESSION_HOLE
    )
    hole.parent.replace_child(hole, expression)
    return block


def unwrap_parentheses(node: SyntaxNode) -> SyntaxNode:
    while node.kind == NodeKind.PARENTHESIZED_EXPRESSION:
        inner = [
            c for c in node.children
            if c.node_type not in ("(", ")") and c.kind != NodeKind.COMMENT
        ]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


# Callee/object slots followed when looking for an await that the TypeScript
# grammar parsed as the head of a call chain: `await api.get<User>(url)`
# comes out as a call whose function is `await api.get`.
_CHAIN_HEAD_FIELDS = {
    "call_expression": "function",
    "member_expression": "object",
    "subscript_expression": "object",
}


def is_await_body(body: SyntaxNode) -> bool:
    """
    True if an arrow function body is a (possibly parenthesized) await
    expression, including a call chain headed by a bare await.
    """
    node = unwrap_parentheses(body)
    while node is not None:
        if node.kind == NodeKind.AWAIT_EXPRESSION:
            return True
        field = _CHAIN_HEAD_FIELDS.get(node.node_type)
        if field is None:
            return False
        node = node.child_by_field(field)
    return False


def instantiate(function: SyntaxNode, parse_fragment: ParseFragment) -> bool:
    """
    Rewrite ``function`` according to the shape of its body.

    Returns:
        True if the body was replaced, False if its shape is not handled
    """
    body = function.child_by_field("body")
    if body is None:
        return False

    if body.kind == NodeKind.BLOCK_STATEMENT:
        try_node = build_block_wrap(body.statements, parse_fragment)
        body.set_statements([try_node])
        return True

    if is_await_body(body):
        # filling the hole renames the body's field, the block takes the old slot
        slot = body.field_name
        block = build_expression_wrap(body, parse_fragment)
        function.replace_child(body, block)
        block.field_name = slot
        return True

    return False
