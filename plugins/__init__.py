"""Integration plugins providing the built-in node types."""

from plugins.base import Plugin, PluginManifest, PluginNode
from plugins.registry import (
    PluginRegistry,
    builtin_plugins,
    create_engine,
    create_node_registry,
)

__all__ = [
    "Plugin",
    "PluginManifest",
    "PluginNode",
    "PluginRegistry",
    "builtin_plugins",
    "create_engine",
    "create_node_registry",
]
