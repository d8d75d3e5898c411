"""Common agent plumbing."""

from typing import Optional

import structlog

from core.config import Settings, get_settings
from core.workflow.engine import WorkflowEngine
from core.workflow.models import WorkflowData, WorkflowDefinition, WorkflowExecution

logger = structlog.get_logger(__name__)


class Agent:
    """
    Runs workflow definitions on an injected engine and renders the result
    as text for tool responses.
    """

    name = "agent"

    def __init__(self, engine: WorkflowEngine, settings: Optional[Settings] = None):
        self.engine = engine
        self.settings = settings or get_settings()

    async def run(
        self,
        workflow: WorkflowDefinition,
        input_data: Optional[WorkflowData] = None,
    ) -> WorkflowExecution:
        execution = await self.engine.execute_workflow(workflow, input_data or {})
        logger.info(
            "agent_workflow_finished",
            agent=self.name,
            workflow_id=workflow.id,
            status=execution.status.value,
        )
        return execution


def tail(text: str, lines: int = 40) -> str:
    """Last ``lines`` lines of command output."""
    parts = (text or "").rstrip().splitlines()
    if len(parts) <= lines:
        return "\n".join(parts)
    return "\n".join(["...", *parts[-lines:]])


def format_size(size: int) -> str:
    units = ["Bytes", "KB", "MB", "GB", "TB"]
    value = float(size)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            return f"{int(value)} {unit}" if unit == "Bytes" else f"{value:.2f} {unit}"
        value /= 1024
    return f"{size} Bytes"
