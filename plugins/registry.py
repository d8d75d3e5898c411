# plugins/registry.py
"""Plugin registry and the default node registry wiring."""

from typing import Dict, List, Optional

import structlog

from core.config import Settings, get_settings
from core.workflow.engine import WorkflowEngine
from core.workflow.registry import NodeRegistry
from plugins.base import Plugin, PluginManifest
from plugins.android import AndroidPlugin
from plugins.google_chat import GoogleChatPlugin
from plugins.google_drive import GoogleDrivePlugin
from plugins.jira import JiraPlugin

logger = structlog.get_logger(__name__)


class PluginRegistry:
    """Explicit set of plugins, populated at startup."""

    def __init__(self, plugins: Optional[List[Plugin]] = None):
        self._plugins: Dict[str, Plugin] = {}
        for plugin in plugins or []:
            self.add(plugin)

    def add(self, plugin: Plugin) -> None:
        self._plugins[plugin.name] = plugin
        logger.debug("plugin_added", plugin=plugin.name, version=plugin.manifest.version)

    def get_plugin(self, name: str) -> Optional[Plugin]:
        return self._plugins.get(name)

    def list_plugins(self) -> List[PluginManifest]:
        return [plugin.manifest for plugin in self._plugins.values()]

    def register_nodes(self, registry: NodeRegistry) -> NodeRegistry:
        for plugin in self._plugins.values():
            plugin.register(registry)
        return registry


def builtin_plugins(settings: Optional[Settings] = None) -> List[Plugin]:
    """The four integration plugins with clients built from settings."""
    settings = settings or get_settings()
    return [
        JiraPlugin(timeout=settings.jira_request_timeout),
        AndroidPlugin(default_timeout=settings.android_command_timeout),
        GoogleDrivePlugin(),
        GoogleChatPlugin(),
    ]


def create_node_registry(plugins: Optional[List[Plugin]] = None) -> NodeRegistry:
    """Node registry holding every built-in node type."""
    plugin_registry = PluginRegistry(plugins if plugins is not None else builtin_plugins())
    return plugin_registry.register_nodes(NodeRegistry())


def create_engine(
    settings: Optional[Settings] = None,
    plugins: Optional[List[Plugin]] = None,
) -> WorkflowEngine:
    settings = settings or get_settings()
    registry = create_node_registry(plugins if plugins is not None else builtin_plugins(settings))
    return WorkflowEngine(
        registry,
        max_steps=settings.workflow_max_steps,
        strict_start=settings.workflow_strict_start,
    )
