"""Plugin system base classes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

import yaml

from core.workflow.models import WorkflowNode
from core.workflow.node import Node
from core.workflow.registry import NodeFactory, NodeRegistry


ClientFactory = Callable[[Mapping[str, Any]], Any]


@dataclass
class PluginManifest:
    """Plugin manifest data."""
    name: str
    version: str
    description: str
    author: str
    nodes: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)


class PluginNode(Node):
    """
    Node backed by an integration client.

    The client is built from the node's own credential bag by the factory
    the plugin was given, so tests and callers can inject their own.
    """

    def __init__(
        self,
        node: WorkflowNode,
        credentials: Optional[Mapping[str, Any]] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        super().__init__(node, credentials)
        self._client_factory = client_factory

    def get_client(self, credential_name: Optional[str] = None) -> Any:
        if self._client_factory is None:
            raise RuntimeError(f"No client available for node type '{self.node.type}'")
        credential = self.get_credential(credential_name) if credential_name else None
        return self._client_factory(credential or {})


class Plugin(ABC):
    """Base class for plugins."""

    def __init__(self, manifest_path: Path, client_factory: Optional[ClientFactory] = None):
        self.manifest_path = manifest_path
        self.manifest = self._load_manifest()
        self.client_factory = client_factory or self.default_client_factory
        self._nodes: Dict[str, Type[PluginNode]] = {}

    @property
    def name(self) -> str:
        return self.manifest.name

    def _load_manifest(self) -> PluginManifest:
        """Load plugin manifest from YAML file."""
        with open(self.manifest_path, 'r') as f:
            data = yaml.safe_load(f)

        return PluginManifest(
            name=data['name'],
            version=data['version'],
            description=data['description'],
            author=data.get('author', ''),
            nodes=data.get('nodes', []),
            dependencies=data.get('dependencies', [])
        )

    @abstractmethod
    def register_nodes(self) -> Dict[str, Type[PluginNode]]:
        """Register all node types of the plugin."""
        pass

    @abstractmethod
    def default_client_factory(self, credentials: Mapping[str, Any]) -> Any:
        """Build the integration client from a node credential bag."""
        pass

    def get_node(self, node_type: str) -> Optional[Type[PluginNode]]:
        """Get a specific node class."""
        if not self._nodes:
            self._nodes = self.register_nodes()
        return self._nodes.get(node_type)

    def get_node_factory(self, node_type: str) -> NodeFactory:
        """Get a factory for use with ``NodeRegistry.register``."""
        node_class = self.get_node(node_type)
        if not node_class:
            raise ValueError(f"Node type {node_type} not found in plugin {self.manifest.name}")

        def factory(node: WorkflowNode, credentials: Optional[Mapping[str, Any]] = None) -> Node:
            return node_class(node, credentials, client_factory=self.client_factory)

        return factory

    def register(self, registry: NodeRegistry) -> None:
        if not self._nodes:
            self._nodes = self.register_nodes()
        for node_type in self._nodes:
            registry.register(node_type, self.get_node_factory(node_type))
