"""Google Drive plugin for file uploads."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

from plugins.base import ClientFactory, Plugin, PluginNode
from plugins.google_drive.client import GoogleDriveClient
from plugins.google_drive.node import GoogleDriveNode


class GoogleDrivePlugin(Plugin):
    """Google Drive integration plugin."""

    def __init__(self, client_factory: Optional[ClientFactory] = None):
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path, client_factory)

    def register_nodes(self) -> Dict[str, Type[PluginNode]]:
        return {"googleDrive": GoogleDriveNode}

    def default_client_factory(self, credentials: Mapping[str, Any]) -> GoogleDriveClient:
        return GoogleDriveClient.from_credentials(credentials)


__all__ = ["GoogleDriveClient", "GoogleDriveNode", "GoogleDrivePlugin"]
