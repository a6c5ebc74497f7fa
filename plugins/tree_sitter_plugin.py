"""
Shared tree-sitter machinery for the bundled language plugins.

Converts tree-sitter trees into mutable ``SyntaxNode`` trees: grammar node
types are mapped onto ``NodeKind``, the ``async`` keyword becomes
``is_async``, and runs of comment siblings become the leading comments of
the node that follows them.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import tree_sitter
import yaml

from jitc.errors import ParseError, PrintError
from jitc.models.syntax_node import FUNCTION_KINDS, Comment, NodeKind, SyntaxNode
from plugins.base import LanguagePlugin
from plugins.printer import render_tree

logger = logging.getLogger(__name__)

KIND_BY_TYPE: Dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    "await_expression": NodeKind.AWAIT_EXPRESSION,
    "try_statement": NodeKind.TRY_STATEMENT,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "arrow_function": NodeKind.ARROW_FUNCTION_EXPRESSION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "statement_block": NodeKind.BLOCK_STATEMENT,
    "parenthesized_expression": NodeKind.PARENTHESIZED_EXPRESSION,
    "identifier": NodeKind.IDENTIFIER,
    "comment": NodeKind.COMMENT,
}


def node_kind(node_type: str, parent_type: Optional[str]) -> NodeKind:
    if node_type == "method_definition":
        return NodeKind.OBJECT_METHOD if parent_type == "object" else NodeKind.CLASS_METHOD
    return KIND_BY_TYPE.get(node_type, NodeKind.OTHER)


def load_plugin_config(plugin_dir: Path) -> Dict:
    """
    Load plugin configuration from YAML file.

    Args:
        plugin_dir: Directory containing the plugin and config.yaml

    Returns:
        Dictionary containing plugin configuration

    Raises:
        FileNotFoundError: If config.yaml is not found
        ValueError: If a required field is missing
    """
    config_path = plugin_dir / "config.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Plugin configuration not found: {config_path}")

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    for field in ('name', 'version', 'file_extensions'):
        if field not in config:
            raise ValueError(f"Missing required field '{field}' in {config_path}")

    return config


class TreeSitterPlugin(LanguagePlugin):
    """Language plugin backed by one or more tree-sitter grammars."""

    def __init__(self, config_path: Path):
        """
        Initialize the plugin.

        Args:
            config_path: Directory holding the plugin's config.yaml
        """
        self._config = load_plugin_config(config_path)
        self._parsers: Dict[str, tree_sitter.Parser] = {}

    @property
    def language_name(self) -> str:
        return self._config['name']

    @property
    def file_extensions(self) -> List[str]:
        return list(self._config['file_extensions'])

    @property
    def version(self) -> str:
        return str(self._config['version'])

    def _get_parser(self, dialect: str) -> tree_sitter.Parser:
        if dialect not in self._parsers:
            self._parsers[dialect] = tree_sitter.Parser(self.load_language(dialect))
        return self._parsers[dialect]

    def load_language(self, dialect: str) -> tree_sitter.Language:
        """Return the tree-sitter language for ``dialect``."""
        raise NotImplementedError

    def dialect_for_file(self, file_path: str) -> str:
        """Grammar dialect used for ``file_path``; templates use the default."""
        return "default"

    async def parse_file(self, file_path: str, content: str) -> SyntaxNode:
        """
        Parse a source file with the dialect its extension calls for.

        Raises:
            ParseError: If tree-sitter reports any error or missing node
        """
        tree = self._parse(content, self.dialect_for_file(file_path), file_path)
        logger.debug(f"Successfully parsed {self.language_name} file: {file_path}")
        return tree

    def parse_fragment(self, content: str) -> SyntaxNode:
        return self._parse(content, "default", "<template>")

    async def print_tree(self, tree: SyntaxNode) -> str:
        code = render_tree(tree)
        if tree.modified:
            check = self._get_parser(tree.dialect or "default").parse(code.encode("utf8"))
            if check.root_node.has_error:
                raise PrintError(
                    f"Rewritten {self.language_name} source does not parse"
                )
        return code

    def _parse(self, content: str, dialect: str, file_path: str) -> SyntaxNode:
        source = content.encode("utf8")
        ts_tree = self._get_parser(dialect).parse(source)
        root = ts_tree.root_node

        if root.has_error:
            error_node = self._first_error(root)
            row, column = error_node.start_point
            raise ParseError(file_path, row + 1, column)

        tree = self._convert(root, source)
        tree.dialect = dialect
        return tree

    @staticmethod
    def _first_error(root: tree_sitter.Node) -> tree_sitter.Node:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node
            stack.extend(reversed(node.children))
        return root

    @staticmethod
    def _make_node(ts_node: tree_sitter.Node, parent_type: Optional[str], source: bytes) -> SyntaxNode:
        kind = node_kind(ts_node.type, parent_type)
        is_async = False
        if kind in FUNCTION_KINDS:
            is_async = any(child.type == "async" for child in ts_node.children)

        start_row, start_column = ts_node.start_point
        end_row, end_column = ts_node.end_point
        return SyntaxNode(
            node_type=ts_node.type,
            kind=kind,
            source=source,
            start_byte=ts_node.start_byte,
            end_byte=ts_node.end_byte,
            start_line=start_row + 1,  # Convert to 1-indexed
            start_column=start_column,
            end_line=end_row + 1,
            end_column=end_column,
            is_async=is_async,
        )

    @staticmethod
    def _children_with_fields(ts_node: tree_sitter.Node):
        cursor = ts_node.walk()
        if not cursor.goto_first_child():
            return
        while True:
            yield cursor.node, cursor.field_name
            if not cursor.goto_next_sibling():
                break

    def _convert(self, ts_root: tree_sitter.Node, source: bytes) -> SyntaxNode:
        """
        Convert a tree-sitter tree into a SyntaxNode tree.

        Iterative so that deeply nested JSX does not hit the recursion limit.
        """
        root = self._make_node(ts_root, None, source)
        stack = [(ts_root, root)]

        while stack:
            ts_node, node = stack.pop()
            pending: List[Comment] = []
            previous: Optional[SyntaxNode] = None

            for ts_child, field_name in self._children_with_fields(ts_node):
                child = self._make_node(ts_child, ts_node.type, source)
                node.append_child(child, field_name)
                child.original_parent = node
                if previous is not None:
                    previous.next_original = child
                    child.prev_original = previous
                previous = child

                if child.kind == NodeKind.COMMENT:
                    pending.append(Comment(
                        text=child.text,
                        start_line=child.start_line,
                        start_column=child.start_column,
                    ))
                else:
                    child.leading_comments = pending
                    pending = []

                stack.append((ts_child, child))

        return root
