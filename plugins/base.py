"""
Base interface for language-specific parser/printer plugins.

This module defines the abstract base class that all language plugins must
implement so the transform can parse a source file into a ``SyntaxNode``
tree and print the rewritten tree back to source.
"""

from abc import ABC, abstractmethod
from typing import List

from jitc.models.syntax_node import SyntaxNode


class LanguagePlugin(ABC):
    """Base interface for language-specific parser/printer plugins."""

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the language name (e.g., 'javascript', 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> List[str]:
        """Return supported file extensions (e.g., ['.js', '.jsx'])."""
        pass

    @abstractmethod
    async def parse_file(self, file_path: str, content: str) -> SyntaxNode:
        """
        Parse file content into a syntax tree.

        Args:
            file_path: Path to the file being parsed
            content: File content as string

        Returns:
            SyntaxNode for the program root, with parent pointers, leading
            comments and locations filled in

        Raises:
            ParseError: If the file contains syntax errors
        """
        pass

    @abstractmethod
    def parse_fragment(self, content: str) -> SyntaxNode:
        """
        Parse a code template synchronously.

        Args:
            content: Template source

        Returns:
            SyntaxNode for the program root of the template

        Raises:
            ParseError: If the template contains syntax errors
        """
        pass

    @abstractmethod
    async def print_tree(self, tree: SyntaxNode) -> str:
        """
        Render a (possibly rewritten) tree back to source text.

        Untouched subtrees are reproduced verbatim.

        Args:
            tree: Program root returned by ``parse_file``

        Returns:
            Source text

        Raises:
            PrintError: If the rendered source is not syntactically valid
        """
        pass
