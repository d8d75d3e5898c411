"""Node system for n8n-style workflows."""

from typing import Dict, List, Any, Iterable, Optional, Mapping
from dataclasses import dataclass, field
from enum import Enum
from abc import ABC, abstractmethod
import structlog

from core.errors import MissingCredential, MissingParameter
from core.workflow.models import NodeExecuteResult, WorkflowData, WorkflowNode

logger = structlog.get_logger(__name__)


class ParameterType(Enum):
    """Parameter types for node configuration."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    OPTIONS = "options"  # Dropdown selection
    COLLECTION = "collection"  # Key-value pairs
    HIDDEN = "hidden"


@dataclass
class NodeParameter:
    """Parameter definition for node configuration."""
    name: str
    display_name: str
    type: ParameterType
    default: Any = None
    required: bool = False
    description: str = ""
    options: Optional[List[Dict[str, Any]]] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "name": self.name,
            "displayName": self.display_name,
            "type": self.type.value,
            "default": self.default,
            "required": self.required,
            "description": self.description,
        }
        if self.options is not None:
            data["options"] = self.options
        return data


@dataclass
class CredentialDefinition:
    """Credential a node type needs, with the properties it reads from it."""
    name: str
    display_name: str
    properties: List[NodeParameter] = field(default_factory=list)
    required: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "required": self.required,
            "properties": [p.to_dict() for p in self.properties],
        }


@dataclass
class NodeDefinition:
    """Complete node definition."""
    name: str
    display_name: str
    description: str
    group: List[str]  # Categories like ["input", "communication"]
    version: int = 1
    defaults: Dict[str, Any] = field(default_factory=dict)
    inputs: List[str] = field(default_factory=lambda: ["main"])
    outputs: List[str] = field(default_factory=lambda: ["main"])
    properties: List[NodeParameter] = field(default_factory=list)
    credentials: List[CredentialDefinition] = field(default_factory=list)
    icon: Optional[str] = None

    @property
    def parameter_names(self) -> List[str]:
        return [p.name for p in self.properties]

    @property
    def required_credentials(self) -> List[str]:
        return [c.name for c in self.credentials if c.required]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to n8n node format."""
        return {
            "displayName": self.display_name,
            "name": self.name,
            "group": self.group,
            "version": self.version,
            "description": self.description,
            "defaults": self.defaults,
            "inputs": list(self.inputs),
            "outputs": list(self.outputs),
            "properties": [p.to_dict() for p in self.properties],
            "credentials": [c.to_dict() for c in self.credentials],
            "icon": self.icon,
        }


class Node(ABC):
    """
    Base class for all workflow nodes.

    A node is built for one workflow node definition and reads its
    parameters from that definition, never from the incoming data. Input
    data is passed through: ``merge_output`` lays the node's own output
    over it.
    """

    def __init__(self, node: WorkflowNode, credentials: Optional[Mapping[str, Any]] = None):
        self.node = node
        self.credentials = dict(credentials or {})

    @property
    def id(self) -> str:
        return self.node.id

    @abstractmethod
    def describe(self) -> NodeDefinition:
        """Get node definition."""
        pass

    @abstractmethod
    async def execute(self, input_data: WorkflowData) -> NodeExecuteResult:
        """Execute the node."""
        pass

    def get_parameter(self, name: str, default: Any = None) -> Any:
        """Get parameter value, falling back to ``default`` when unset."""
        value = self.node.parameters.get(name)
        return default if value is None else value

    def get_credential(self, name: str) -> Any:
        return self.credentials.get(name)

    def validate_required_parameters(self, names: Iterable[str]) -> None:
        for name in names:
            if not self.node.parameters.get(name):
                raise MissingParameter(name)

    def validate_required_credentials(self, names: Optional[Iterable[str]] = None) -> None:
        if names is None:
            names = self.describe().required_credentials
        for name in names:
            if not self.credentials.get(name):
                raise MissingCredential(name)

    @staticmethod
    def merge_output(input_data: Optional[WorkflowData], output: WorkflowData) -> WorkflowData:
        """Shallow merge: the node's own keys win over pass-through input."""
        return {**(input_data or {}), **output}

    def success(self, input_data: Optional[WorkflowData], output: WorkflowData) -> NodeExecuteResult:
        return NodeExecuteResult.ok(self.merge_output(input_data, output))

    def failure(self, error: Any) -> NodeExecuteResult:
        message = str(error)
        logger.warning(
            "node_failed",
            node_id=self.node.id,
            node_type=self.node.type,
            error=message,
        )
        return NodeExecuteResult.fail(message)
