"""N8N-style node-chain workflow engine."""

from core.workflow.models import (
    ExecutionStatus,
    NodeExecuteResult,
    WorkflowConnection,
    WorkflowData,
    WorkflowDefinition,
    WorkflowExecution,
    WorkflowNode,
)
from core.workflow.node import (
    CredentialDefinition,
    Node,
    NodeDefinition,
    NodeParameter,
    ParameterType,
)
from core.workflow.registry import NodeFactory, NodeRegistry
from core.workflow.engine import WorkflowEngine

__all__ = [
    # Models
    "ExecutionStatus",
    "NodeExecuteResult",
    "WorkflowConnection",
    "WorkflowData",
    "WorkflowDefinition",
    "WorkflowExecution",
    "WorkflowNode",

    # Node
    "CredentialDefinition",
    "Node",
    "NodeDefinition",
    "NodeParameter",
    "ParameterType",

    # Engine
    "NodeFactory",
    "NodeRegistry",
    "WorkflowEngine",
]
