"""Registry of node types keyed by their type name."""

from typing import Any, Callable, Dict, List, Mapping, Optional
import structlog

from core.errors import UnknownNodeType
from core.workflow.models import WorkflowNode
from core.workflow.node import Node, NodeDefinition

logger = structlog.get_logger(__name__)

NodeFactory = Callable[[WorkflowNode, Optional[Mapping[str, Any]]], Node]


class NodeRegistry:
    """
    Explicit factory map populated at startup.

    Registering a type twice replaces the earlier factory without warning.
    The registry is read-only once the engine starts running workflows.
    """

    def __init__(self, factories: Optional[Dict[str, NodeFactory]] = None):
        self._factories: Dict[str, NodeFactory] = dict(factories or {})

    def register(self, node_type: str, factory: NodeFactory) -> None:
        self._factories[node_type] = factory
        logger.debug("node_type_registered", node_type=node_type)

    def resolve(self, node_type: str) -> NodeFactory:
        try:
            return self._factories[node_type]
        except KeyError:
            raise UnknownNodeType(node_type) from None

    def create(self, node: WorkflowNode, credentials: Optional[Mapping[str, Any]] = None) -> Node:
        factory = self.resolve(node.type)
        return factory(node, credentials or {})

    def describe(self, node_type: str) -> NodeDefinition:
        """Schema of a node type, built from a placeholder node."""
        placeholder = WorkflowNode(id=f"{node_type}-schema", type=node_type)
        return self.create(placeholder).describe()

    def available_types(self) -> List[str]:
        return list(self._factories.keys())

    def __contains__(self, node_type: str) -> bool:
        return node_type in self._factories

    def __len__(self) -> int:
        return len(self._factories)
