"""TypeScript/TSX language plugin."""

from plugins.typescript.plugin import TypeScriptPlugin

__all__ = ['TypeScriptPlugin']
