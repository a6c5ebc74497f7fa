"""JavaScript/JSX language plugin."""

from plugins.javascript.plugin import JavaScriptPlugin

__all__ = ['JavaScriptPlugin']
