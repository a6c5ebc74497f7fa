"""
Plugin Manager for language-specific parser/printer plugins.

This module manages plugin registration and selection based on file extensions.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from plugins.base import LanguagePlugin

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages language plugin registration and selection."""

    def __init__(self):
        """Initialize the plugin manager."""
        self._plugins: Dict[str, LanguagePlugin] = {}
        self._extension_map: Dict[str, str] = {}

    def register_plugin(self, plugin: LanguagePlugin) -> None:
        """
        Register a language plugin.

        Args:
            plugin: LanguagePlugin instance to register
        """
        language_name = plugin.language_name

        if language_name in self._plugins:
            logger.warning(f"Plugin for language '{language_name}' already registered, overwriting")

        self._plugins[language_name] = plugin

        for ext in plugin.file_extensions:
            if ext in self._extension_map:
                logger.warning(
                    f"Extension '{ext}' already mapped to '{self._extension_map[ext]}', "
                    f"overwriting with '{language_name}'"
                )
            self._extension_map[ext] = language_name

        logger.info(
            f"Registered plugin for language '{language_name}' "
            f"with extensions: {plugin.file_extensions}"
        )

    def get_plugin_for_file(self, file_path: str) -> Optional[LanguagePlugin]:
        """
        Get appropriate plugin based on file extension.

        Args:
            file_path: Path to the file

        Returns:
            LanguagePlugin instance if found, None otherwise
        """
        ext = Path(file_path).suffix
        language = self._extension_map.get(ext)

        if language:
            return self._plugins.get(language)

        logger.debug(f"No plugin found for file extension '{ext}' (file: {file_path})")
        return None

    def get_plugin(self, language_name: str) -> Optional[LanguagePlugin]:
        return self._plugins.get(language_name)

    def list_supported_languages(self) -> List[str]:
        return list(self._plugins.keys())

    def list_supported_extensions(self) -> List[str]:
        return list(self._extension_map.keys())


def create_default_plugin_manager() -> PluginManager:
    """Plugin manager with the bundled JavaScript and TypeScript plugins."""
    from plugins.javascript import JavaScriptPlugin
    from plugins.typescript import TypeScriptPlugin

    manager = PluginManager()
    manager.register_plugin(JavaScriptPlugin())
    manager.register_plugin(TypeScriptPlugin())
    return manager
