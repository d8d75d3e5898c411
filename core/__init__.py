"""agent-lazy-x1 core: workflow engine, configuration and logging."""

__version__ = "1.0.0"

from core.config import Settings, get_settings
from core.workflow import (
    NodeRegistry,
    WorkflowDefinition,
    WorkflowEngine,
    WorkflowExecution,
)

__all__ = [
    "Settings",
    "get_settings",
    "NodeRegistry",
    "WorkflowDefinition",
    "WorkflowEngine",
    "WorkflowExecution",
]
