"""Android plugin for project build commands."""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

from plugins.base import Plugin, PluginNode
from plugins.android.client import DEFAULT_TIMEOUT, CommandResult, CommandRunner
from plugins.android.node import AndroidNode


class AndroidPlugin(Plugin):
    """Android build plugin. Every node shares one command runner."""

    def __init__(self, runner: Optional[CommandRunner] = None, default_timeout: float = DEFAULT_TIMEOUT):
        self.runner = runner or CommandRunner(default_timeout)
        manifest_path = Path(__file__).parent / "manifest.yaml"
        super().__init__(manifest_path)

    def register_nodes(self) -> Dict[str, Type[PluginNode]]:
        return {"android": AndroidNode}

    def default_client_factory(self, credentials: Mapping[str, Any]) -> CommandRunner:
        return self.runner


__all__ = ["AndroidNode", "AndroidPlugin", "CommandResult", "CommandRunner"]
