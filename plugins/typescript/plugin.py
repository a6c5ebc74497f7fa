"""
TypeScript/TSX language plugin.

Uses tree-sitter-typescript. Files whose extension is listed under
``tsx_extensions`` in config.yaml are parsed with the TSX dialect, which
accepts JSX but not angle-bracket type assertions; everything else uses the
plain TypeScript dialect.
"""

import logging
from pathlib import Path
from typing import List, Optional

import tree_sitter
import tree_sitter_typescript

from plugins.tree_sitter_plugin import TreeSitterPlugin

logger = logging.getLogger(__name__)


class TypeScriptPlugin(TreeSitterPlugin):
    """TypeScript/TSX language plugin using tree-sitter."""

    def __init__(self, config_path: Optional[Path] = None):
        super().__init__(config_path or Path(__file__).parent)
        logger.info("TypeScript plugin initialized successfully")

    @property
    def tsx_extensions(self) -> List[str]:
        return list(self._config.get('tsx_extensions', ['.tsx']))

    def dialect_for_file(self, file_path: str) -> str:
        if Path(file_path).suffix in self.tsx_extensions:
            return "tsx"
        return "default"

    def load_language(self, dialect: str) -> tree_sitter.Language:
        if dialect == "tsx":
            return tree_sitter.Language(tree_sitter_typescript.language_tsx())
        return tree_sitter.Language(tree_sitter_typescript.language_typescript())
