"""Unit tests for the replacement builders."""

import pytest

from jitc.core.templates import (
    build_block_wrap,
    build_expression_wrap,
    instantiate,
    is_await_body,
    unwrap_parentheses,
)
from jitc.models.syntax_node import NodeKind
from plugins.javascript import JavaScriptPlugin
from plugins.printer import render_node, render_tree


@pytest.fixture(scope="module")
def js_plugin():
    return JavaScriptPlugin()


class TestBlockWrap:
    """Try statement holding a whole statement sequence."""

    def test_try_holds_all_statements(self, js_plugin):
        program = js_plugin.parse_fragment("async function f() { const x = await g(); return x; }")
        body = program.find_all(NodeKind.FUNCTION_DECLARATION)[0].child_by_field("body")
        statements = body.statements

        try_node = build_block_wrap(statements, js_plugin.parse_fragment)

        assert try_node.kind == NodeKind.TRY_STATEMENT
        assert try_node.child_by_field("body").statements == statements
        assert all(s.parent is try_node.child_by_field("body") for s in statements)

    def test_handler_only_logs(self, js_plugin):
        try_node = build_block_wrap([], js_plugin.parse_fragment)
        handler = try_node.child_by_field("handler")

        assert handler is not None
        assert handler.text.replace("\n", " ") == "catch (e) { console.error(e); }"


class TestExpressionWrap:
    """Local variable, try assignment and trailing return."""

    def test_expression_fills_the_hole(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => await g();")
        arrow = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0]
        expression = arrow.child_by_field("body")

        block = build_expression_wrap(expression, js_plugin.parse_fragment)
        rendered = render_node(block).decode("utf8")

        assert block.kind == NodeKind.BLOCK_STATEMENT
        assert "let data;" in rendered
        assert "data = await g();" in rendered
        assert "console.error(e);" in rendered
        assert rendered.rstrip("}\n ").endswith("return data;")
        assert "DIRECT_RETURNED_EXPRESSION" not in rendered
        assert expression.find_parent(lambda p: p.kind == NodeKind.TRY_STATEMENT) is not None


class TestInstantiate:
    """Dispatch on body shape."""

    def test_block_body(self, js_plugin):
        program = js_plugin.parse_fragment("async function f() { await a(); await b(); }")
        function = program.find_all(NodeKind.FUNCTION_DECLARATION)[0]

        assert instantiate(function, js_plugin.parse_fragment)

        statements = function.child_by_field("body").statements
        assert len(statements) == 1
        assert statements[0].kind == NodeKind.TRY_STATEMENT

    def test_await_expression_body(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => await g();")
        arrow = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0]

        assert instantiate(arrow, js_plugin.parse_fragment)
        assert arrow.child_by_field("body").kind == NodeKind.BLOCK_STATEMENT
        assert "return data;" in render_tree(program)

    def test_parenthesized_await_body(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => (await g());")
        arrow = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0]

        assert unwrap_parentheses(arrow.child_by_field("body")).kind == NodeKind.AWAIT_EXPRESSION
        assert instantiate(arrow, js_plugin.parse_fragment)
        assert "data = (await g());" in render_tree(program)

    def test_other_expression_body_is_left_alone(self, js_plugin):
        source = "const f = async () => save(await g());"
        program = js_plugin.parse_fragment(source)
        arrow = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0]

        assert not instantiate(arrow, js_plugin.parse_fragment)
        assert not program.modified
        assert render_tree(program) == source

    def test_wrapped_block_takes_the_body_slot(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async (id) => await g(id);")
        arrow = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0]
        expression = arrow.child_by_field("body")

        assert instantiate(arrow, js_plugin.parse_fragment)

        block = arrow.child_by_field("body")
        assert block is not None
        assert block.parent is arrow
        assert expression.field_name == "right"
        assert [c.field_name for c in arrow.children].count("body") == 1


class TestAwaitBody:
    """Recognising arrow function bodies that are await expressions."""

    def test_bare_await(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => await g();")
        body = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0].child_by_field("body")

        assert is_await_body(body)

    def test_member_of_parenthesized_await_is_not_an_await(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => (await g()).data;")
        body = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0].child_by_field("body")

        assert not is_await_body(body)

    def test_call_with_await_argument_is_not_an_await(self, js_plugin):
        program = js_plugin.parse_fragment("const f = async () => save(await g());")
        body = program.find_all(NodeKind.ARROW_FUNCTION_EXPRESSION)[0].child_by_field("body")

        assert not is_await_body(body)
