"""
Pytest configuration and fixtures for agent-lazy-x1.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from typing import Any, Dict, List, Optional

from core.config import Settings
from core.workflow.engine import WorkflowEngine
from core.workflow.models import NodeExecuteResult, WorkflowDefinition, WorkflowNode
from core.workflow.node import Node, NodeDefinition, NodeParameter, ParameterType
from core.workflow.registry import NodeRegistry


# ============================================================================
# TEST NODE TYPES
# ============================================================================

class EchoNode(Node):
    """Returns its input unchanged."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(name="echo", display_name="Echo", description="Echo input", group=["test"])

    async def execute(self, input_data):
        return NodeExecuteResult.ok(dict(input_data))


class SetNode(Node):
    """Lays the ``values`` parameter over its input."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="set",
            display_name="Set",
            description="Set values",
            group=["test"],
            properties=[NodeParameter("values", "Values", ParameterType.JSON, default={})],
        )

    async def execute(self, input_data):
        return self.success(input_data, dict(self.get_parameter("values", {})))


class FailNode(Node):
    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="fail",
            display_name="Fail",
            description="Always fails",
            group=["test"],
            properties=[NodeParameter("error", "Error", ParameterType.STRING, default="boom")],
        )

    async def execute(self, input_data):
        return NodeExecuteResult.fail(self.get_parameter("error", "boom"))


class RaisingNode(Node):
    def describe(self) -> NodeDefinition:
        return NodeDefinition(name="raise", display_name="Raise", description="Raises", group=["test"])

    async def execute(self, input_data):
        raise RuntimeError("kaboom")


class SpyNode(Node):
    """Records every execution in a shared list."""

    def __init__(self, node, credentials=None, calls: Optional[List[str]] = None):
        super().__init__(node, credentials)
        self.calls = calls if calls is not None else []

    def describe(self) -> NodeDefinition:
        return NodeDefinition(name="spy", display_name="Spy", description="Spy", group=["test"])

    async def execute(self, input_data):
        self.calls.append(self.node.id)
        return self.success(input_data, {"spied": self.node.id})


# ============================================================================
# HELPERS
# ============================================================================

def make_workflow(
    nodes: List[Dict[str, Any]],
    connections: Optional[Dict[str, List[str]]] = None,
    workflow_id: str = "test-workflow",
) -> WorkflowDefinition:
    return WorkflowDefinition(
        id=workflow_id,
        name="Test Workflow",
        nodes=tuple(
            WorkflowNode(
                id=n["id"],
                type=n["type"],
                name=n.get("name", n["id"]),
                parameters=n.get("parameters", {}),
                credentials=n.get("credentials"),
            )
            for n in nodes
        ),
        connections=connections or {},
    )


class RecordingParameters(dict):
    """Parameter bag that remembers every key read from it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.read = set()

    def get(self, key, default=None):
        self.read.add(key)
        return super().get(key, default)

    def __getitem__(self, key):
        self.read.add(key)
        return super().__getitem__(key)


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def spy_calls() -> List[str]:
    return []


@pytest.fixture
def registry(spy_calls) -> NodeRegistry:
    registry = NodeRegistry()
    registry.register("echo", EchoNode)
    registry.register("set", SetNode)
    registry.register("fail", FailNode)
    registry.register("raise", RaisingNode)
    registry.register("spy", lambda node, credentials=None: SpyNode(node, credentials, spy_calls))
    return registry


@pytest.fixture
def engine(registry) -> WorkflowEngine:
    return WorkflowEngine(registry)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the developer's .env file."""
    return Settings(
        _env_file=None,
        jira_domain="https://example.atlassian.net",
        jira_email="bot@example.com",
        jira_api_token="token",
        google_service_account_path=str(tmp_path / "service.json"),
        google_drive_folder_id="drive-folder",
        gchat_space_id="spaces/AAAA",
        android_project_path=str(tmp_path),
    )
