"""Workflow definition and execution records."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple
import uuid

import yaml

from core.errors import InvalidWorkflowDefinition


WorkflowData = Dict[str, Any]


class ExecutionStatus(str, Enum):
    """Workflow execution status."""
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class WorkflowConnection:
    """Reference to a downstream node."""
    node: str
    type: str = "main"
    index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"node": self.node, "type": self.type, "index": self.index}

    @classmethod
    def from_value(cls, value: Any) -> "WorkflowConnection":
        if isinstance(value, WorkflowConnection):
            return value
        if isinstance(value, str):
            return cls(node=value)
        if isinstance(value, dict) and "node" in value:
            return cls(
                node=value["node"],
                type=value.get("type", "main"),
                index=value.get("index", 0),
            )
        raise InvalidWorkflowDefinition(f"Invalid connection entry: {value!r}")


@dataclass(frozen=True)
class WorkflowNode:
    """A typed unit of work in a workflow graph."""
    id: str
    type: str
    name: str = ""
    position: Mapping[str, float] = field(default_factory=lambda: {"x": 0, "y": 0})
    parameters: Mapping[str, Any] = field(default_factory=dict)
    credentials: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "position": dict(self.position),
            "parameters": dict(self.parameters),
        }
        if self.credentials is not None:
            data["credentials"] = dict(self.credentials)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowNode":
        try:
            node_id = data["id"]
            node_type = data["type"]
        except (KeyError, TypeError):
            raise InvalidWorkflowDefinition(
                f"Node entries need 'id' and 'type': {data!r}"
            )
        return cls(
            id=node_id,
            type=node_type,
            name=data.get("name", node_id),
            position=data.get("position") or {"x": 0, "y": 0},
            parameters=data.get("parameters") or {},
            credentials=data.get("credentials"),
        )


@dataclass(frozen=True)
class WorkflowDefinition:
    """
    Static workflow graph.

    ``nodes`` keeps declaration order, which decides the start node.
    ``connections`` maps a node id to its ordered downstream references.
    Both are frozen on construction.
    """
    id: str
    name: str
    nodes: Tuple[WorkflowNode, ...] = ()
    connections: Mapping[str, Tuple[WorkflowConnection, ...]] = field(default_factory=dict)
    active: bool = True
    settings: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(
            self,
            "connections",
            MappingProxyType({
                source: tuple(WorkflowConnection.from_value(c) for c in targets or ())
                for source, targets in dict(self.connections).items()
            }),
        )
        object.__setattr__(self, "settings", MappingProxyType(dict(self.settings)))

    def get_node(self, node_id: str) -> Optional[WorkflowNode]:
        return next((node for node in self.nodes if node.id == node_id), None)

    def validate(self) -> List[str]:
        """Return a list of structural problems; empty when the graph is sound."""
        errors = []

        seen = set()
        for node in self.nodes:
            if node.id in seen:
                errors.append(f"Duplicate node id: {node.id}")
            seen.add(node.id)

        for source, targets in self.connections.items():
            if source not in seen:
                errors.append(f"Connection source references unknown node: {source}")
            for connection in targets:
                if connection.node not in seen:
                    errors.append(
                        f"Connection {source} -> {connection.node} references unknown node"
                    )

        return errors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "active": self.active,
            "settings": dict(self.settings),
            "nodes": [node.to_dict() for node in self.nodes],
            "connections": {
                source: [c.to_dict() for c in targets]
                for source, targets in self.connections.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkflowDefinition":
        if not isinstance(data, dict):
            raise InvalidWorkflowDefinition("Workflow definition must be a mapping")

        nodes = [WorkflowNode.from_dict(n) for n in data.get("nodes") or []]
        connections = data.get("connections") or {}
        if not isinstance(connections, dict):
            raise InvalidWorkflowDefinition("'connections' must be a mapping")
        for source, targets in connections.items():
            if targets is not None and not isinstance(targets, (list, tuple)):
                raise InvalidWorkflowDefinition(f"Connections of '{source}' must be a list")

        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            name=data.get("name", "Untitled"),
            nodes=tuple(nodes),
            connections=connections,
            active=data.get("active", True),
            settings=data.get("settings") or {},
        )

    def to_yaml(self) -> str:
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, content: str) -> "WorkflowDefinition":
        """Parse YAML (or JSON, which is a YAML subset) into a definition."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise InvalidWorkflowDefinition(f"Could not parse workflow: {e}")
        return cls.from_dict(data)


@dataclass
class NodeExecuteResult:
    """Unit of communication between chained nodes."""
    success: bool
    data: Optional[WorkflowData] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: WorkflowData) -> "NodeExecuteResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "NodeExecuteResult":
        return cls(success=False, error=error)


@dataclass
class WorkflowExecution:
    """Run record for one execution of a workflow definition."""
    id: str = field(default_factory=lambda: f"exec_{uuid.uuid4().hex}")
    workflow_id: str = ""
    status: ExecutionStatus = ExecutionStatus.RUNNING
    start_time: datetime = field(default_factory=datetime.utcnow)
    end_time: Optional[datetime] = None
    data: WorkflowData = field(default_factory=dict)
    error: Optional[str] = None
    node_executions: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        return self.status == ExecutionStatus.SUCCESS

    @property
    def duration(self) -> Optional[float]:
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "workflowId": self.workflow_id,
            "status": self.status.value,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "data": self.data,
            "error": self.error,
            "nodeExecutions": list(self.node_executions),
        }
