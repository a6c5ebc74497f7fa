"""
Unit tests for the exemption rules.

Covers the try-ancestor rule and the ignore comment rule, including the
nearest-commented-ancestor narrowing of the latter.
"""

import pytest

from jitc.core.exemption import IGNORE_MARKER, has_ignore_comment, has_try_ancestor
from jitc.models.syntax_node import NodeKind
from plugins.javascript import JavaScriptPlugin


@pytest.fixture(scope="module")
def js_plugin():
    return JavaScriptPlugin()


def only_await(plugin, source):
    awaits = plugin.parse_fragment(source).find_all(NodeKind.AWAIT_EXPRESSION)
    assert len(awaits) == 1
    return awaits[0]


class TestTryAncestor:
    """Existing protection."""

    def test_await_inside_try_block(self, js_plugin):
        node = only_await(js_plugin, "async function f() { try { await g(); } catch (e) {} }")

        assert has_try_ancestor(node)

    def test_await_inside_catch_clause(self, js_plugin):
        node = only_await(js_plugin, "async function f() { try { g(); } catch (e) { await h(e); } }")

        assert has_try_ancestor(node)

    def test_try_in_outer_function_protects_inner_await(self, js_plugin):
        source = """
async function outer() {
  try {
    const inner = async () => { await g(); };
  } catch (e) {}
}
"""
        node = only_await(js_plugin, source)

        assert has_try_ancestor(node)

    def test_unprotected_await(self, js_plugin):
        node = only_await(js_plugin, "async function f() { await g(); }")

        assert not has_try_ancestor(node)


class TestIgnoreComment:
    """Opt-out comment."""

    def test_marker_constant(self):
        assert IGNORE_MARKER == "@jitc-ignore-next-line"

    def test_marker_on_previous_line_exempts(self, js_plugin):
        source = """
async function load() {
  // @jitc-ignore-next-line
  const data = await fetchData();
  return data;
}
"""
        node = only_await(js_plugin, source)

        assert has_ignore_comment(node)

    def test_marker_inside_longer_comment_exempts(self, js_plugin):
        source = """
async function load() {
  /* legacy endpoint @jitc-ignore-next-line */
  await fetchData();
}
"""
        node = only_await(js_plugin, source)

        assert has_ignore_comment(node)

    def test_marker_two_lines_above_does_not_exempt(self, js_plugin):
        source = """
async function load() {
  // @jitc-ignore-next-line

  const data = await fetchData();
}
"""
        node = only_await(js_plugin, source)

        assert not has_ignore_comment(node)

    def test_only_latest_comment_is_checked(self, js_plugin):
        source = """
async function load() {
  // @jitc-ignore-next-line
  // fetch the profile
  await fetchData();
}
"""
        node = only_await(js_plugin, source)

        assert not has_ignore_comment(node)

    def test_comment_without_marker_does_not_exempt(self, js_plugin):
        source = """
async function load() {
  // fetch the profile
  await fetchData();
}
"""
        node = only_await(js_plugin, source)

        assert not has_ignore_comment(node)

    def test_no_comments_anywhere(self, js_plugin):
        node = only_await(js_plugin, "async function load() { await fetchData(); }")

        assert not has_ignore_comment(node)

    def test_marker_on_distant_ancestor_applies_when_no_nearer_comment(self, js_plugin):
        source = """
// @jitc-ignore-next-line
const load = async () => (await fetchData());
"""
        node = only_await(js_plugin, source)

        assert has_ignore_comment(node)

    def test_nearer_unrelated_comment_hides_distant_marker(self, js_plugin):
        """
        Possibly surprising: the search stops at the nearest ancestor with
        any leading comment. Here that is the parenthesized body carrying
        ``/* fetch */``, so the marker on the declaration, although it sits
        on the line right above the await, is never consulted.
        """
        source = """
// @jitc-ignore-next-line
const load = async () => /* fetch */ (await fetchData());
"""
        node = only_await(js_plugin, source)

        assert not has_ignore_comment(node)
