"""Google Chat plugin for space messages."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

from plugins.base import ClientFactory, Plugin, PluginNode
from plugins.google_chat.client import GoogleChatClient
from plugins.google_chat.node import GoogleChatNode


class GoogleChatPlugin(Plugin):
    """Google Chat integration plugin."""

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path, client_factory)

    def register_nodes(self) -> Dict[str, Type[PluginNode]]:
        return {"googleChat": GoogleChatNode}

    def default_client_factory(self, credentials: Mapping[str, Any]) -> GoogleChatClient:
        return GoogleChatClient.from_credentials(credentials)


__all__ = ["GoogleChatClient", "GoogleChatNode", "GoogleChatPlugin"]
