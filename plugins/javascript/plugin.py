"""
JavaScript/JSX language plugin.

Parses component sources with tree-sitter-javascript, whose grammar covers
JSX, and prints rewritten trees back to source.
"""

import logging
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_javascript

from plugins.tree_sitter_plugin import TreeSitterPlugin

logger = logging.getLogger(__name__)


class JavaScriptPlugin(TreeSitterPlugin):
    """JavaScript/JSX language plugin using tree-sitter."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the JavaScript plugin.

        Args:
            config_path: Directory holding config.yaml. If None, uses the
                plugin's own directory.
        """
        super().__init__(config_path or Path(__file__).parent)
        logger.info("JavaScript plugin initialized successfully")

    def load_language(self, dialect: str) -> tree_sitter.Language:
        return tree_sitter.Language(tree_sitter_javascript.language())
