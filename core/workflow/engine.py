"""Workflow execution engine."""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional
import structlog

from core.errors import (
    AmbiguousStartNode,
    NoStartNode,
    NodeExecutionFailed,
    WorkflowStepLimitExceeded,
)
from core.workflow.models import (
    ExecutionStatus,
    WorkflowData,
    WorkflowDefinition,
    WorkflowExecution,
    WorkflowNode,
)
from core.workflow.node import Node, NodeDefinition
from core.workflow.registry import NodeRegistry

logger = structlog.get_logger(__name__)


class WorkflowEngine:
    """
    Walks a workflow chain from its start node.

    Each node runs to completion before the next one starts. Only the first
    connection of a node is followed; further connections are kept in the
    definition but never executed.
    """

    def __init__(
        self,
        registry: NodeRegistry,
        max_steps: Optional[int] = None,
        strict_start: bool = False,
    ):
        self.registry = registry
        self.max_steps = max_steps
        self.strict_start = strict_start

    async def execute_workflow(
        self,
        workflow: WorkflowDefinition,
        input_data: Optional[WorkflowData] = None,
    ) -> WorkflowExecution:
        """Run a workflow and return its execution record. Never raises for run failures."""
        input_data = dict(input_data or {})
        execution = WorkflowExecution(workflow_id=workflow.id, data=input_data)

        log = logger.bind(workflow_id=workflow.id, execution_id=execution.id)
        log.info("workflow_started", name=workflow.name, nodes=len(workflow.nodes))

        try:
            start_node = self.find_start_node(workflow)
            execution.data = await self._execute_chain(workflow, start_node, input_data, execution)
            execution.status = ExecutionStatus.SUCCESS
            execution.end_time = datetime.utcnow()

            log.info(
                "workflow_completed",
                executed=len(execution.node_executions),
                duration=execution.duration,
            )

        except Exception as e:
            execution.status = ExecutionStatus.ERROR
            execution.error = str(e)
            execution.end_time = datetime.utcnow()

            log.error(
                "workflow_execution_error",
                error=str(e),
                error_type=type(e).__name__,
                executed=len(execution.node_executions),
            )

        return execution

    def find_start_node(self, workflow: WorkflowDefinition) -> WorkflowNode:
        """First node, in declaration order, that no connection points at."""
        targets = {
            connection.node
            for connections in workflow.connections.values()
            for connection in connections
        }

        candidates = [node for node in workflow.nodes if node.id not in targets]
        if not candidates:
            raise NoStartNode(workflow.id)

        if len(candidates) > 1:
            if self.strict_start:
                raise AmbiguousStartNode(node.id for node in candidates)
            logger.debug(
                "multiple_start_candidates",
                workflow_id=workflow.id,
                chosen=candidates[0].id,
                candidates=[node.id for node in candidates],
            )

        return candidates[0]

    def get_next_nodes(self, workflow: WorkflowDefinition, node_id: str) -> List[WorkflowNode]:
        """Successors of ``node_id`` in connection order, skipping unknown targets."""
        next_nodes = []
        for connection in workflow.connections.get(node_id, ()):
            next_node = workflow.get_node(connection.node)
            if next_node is not None:
                next_nodes.append(next_node)
        return next_nodes

    async def _execute_chain(
        self,
        workflow: WorkflowDefinition,
        current: WorkflowNode,
        data: WorkflowData,
        execution: WorkflowExecution,
    ) -> WorkflowData:
        steps = 0

        while True:
            if self.max_steps is not None and steps >= self.max_steps:
                raise WorkflowStepLimitExceeded(self.max_steps)
            steps += 1

            data = await self._execute_node(current, data, execution)

            next_nodes = self.get_next_nodes(workflow, current.id)
            if not next_nodes:
                return data

            if len(next_nodes) > 1:
                logger.debug(
                    "extra_successors_ignored",
                    node_id=current.id,
                    following=next_nodes[0].id,
                    ignored=[node.id for node in next_nodes[1:]],
                )
            current = next_nodes[0]

    async def _execute_node(
        self,
        node: WorkflowNode,
        input_data: WorkflowData,
        execution: WorkflowExecution,
    ) -> WorkflowData:
        instance = self.create_node_instance(node)

        logger.info("executing_node", node_id=node.id, node_type=node.type)
        execution.node_executions.append(node.id)

        try:
            result = await instance.execute(input_data)
        except Exception as e:
            # Nodes are expected to report failures as results
            logger.error("node_raised", node_id=node.id, error=str(e))
            raise NodeExecutionFailed(node.id, str(e)) from e

        if not result.success:
            raise NodeExecutionFailed(node.id, result.error)

        return result.data or {}

    def create_node_instance(self, node: WorkflowNode) -> Node:
        return self.registry.create(node, self.extract_credentials(node))

    @staticmethod
    def extract_credentials(node: WorkflowNode) -> Mapping[str, Any]:
        """Node-level credentials, verbatim. Nothing is merged in from elsewhere."""
        return node.credentials or {}

    def available_node_types(self) -> List[str]:
        return self.registry.available_types()

    def get_node_definition(self, node_type: str) -> NodeDefinition:
        return self.registry.describe(node_type)

    def describe_nodes(self) -> Dict[str, Dict[str, Any]]:
        return {
            node_type: self.get_node_definition(node_type).to_dict()
            for node_type in self.available_node_types()
        }
