"""Jira plugin for ticket lookups and searches."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

from plugins.base import ClientFactory, Plugin, PluginNode
from plugins.jira.client import JiraClient
from plugins.jira.node import JiraNode


class JiraPlugin(Plugin):
    """Jira Cloud integration plugin."""

    def __init__(self, client_factory: Optional[ClientFactory] = None, timeout: float = 30.0):
        self.timeout = timeout
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path, client_factory)

    def register_nodes(self) -> Dict[str, Type[PluginNode]]:
        return {"jira": JiraNode}

    def default_client_factory(self, credentials: Mapping[str, Any]) -> JiraClient:
        return JiraClient.from_credentials(credentials, timeout=self.timeout)


__all__ = ["JiraClient", "JiraNode", "JiraPlugin"]
