"""
Language plugin architecture for parsing and printing sources.

This package provides the plugin system for language-specific parsing,
including the base plugin interface and plugin manager.
"""

from plugins.base import LanguagePlugin
from plugins.manager import PluginManager, create_default_plugin_manager

__all__ = ['LanguagePlugin', 'PluginManager', 'create_default_plugin_manager']
