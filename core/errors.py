"""Exception taxonomy for the workflow engine and the integration clients."""

from typing import Optional


class WorkflowError(Exception):
    """Base class for workflow engine errors."""


class InvalidWorkflowDefinition(WorkflowError):
    """Definition could not be parsed or references unknown nodes."""


class NoStartNode(WorkflowError):
    """Every node in the definition is the target of a connection."""

    def __init__(self, workflow_id: str = ""):
        self.workflow_id = workflow_id
        super().__init__("No start node found in workflow")


class AmbiguousStartNode(WorkflowError):
    """More than one node qualifies as start node (strict mode only)."""

    def __init__(self, candidates):
        self.candidates = list(candidates)
        super().__init__(
            f"Workflow has {len(self.candidates)} possible start nodes: "
            f"{', '.join(self.candidates)}"
        )


class UnknownNodeType(WorkflowError):
    """No factory registered for the requested node type."""

    def __init__(self, node_type: str):
        self.node_type = node_type
        super().__init__(f"Unknown node type: {node_type}")


class MissingCredential(WorkflowError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required credential '{name}' is missing")


class MissingParameter(WorkflowError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Required parameter '{name}' is missing")


class NodeExecutionFailed(WorkflowError):
    """A node reported ``success=False``; wraps the node's own error."""

    def __init__(self, node_id: str, error: Optional[str]):
        self.node_id = node_id
        self.node_error = error
        super().__init__(f"Node execution failed: {error}")


class WorkflowStepLimitExceeded(WorkflowError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Workflow exceeded the limit of {limit} node executions")


class AgentError(Exception):
    """Base class for errors raised by integration clients."""


class JiraApiError(AgentError):
    def __init__(self, status: int, message: str):
        self.status = status
        super().__init__(message)


class GoogleApiError(AgentError):
    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class CommandFailed(AgentError):
    def __init__(self, command: str, returncode: int, stdout: str = "", stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = stderr.strip() or f"Process exited with code {returncode}"
        super().__init__(f"Command '{command}' failed: {detail}")


class CommandTimeout(AgentError):
    def __init__(self, command: str, timeout: float, stdout: str = "", stderr: str = ""):
        self.command = command
        self.timeout = timeout
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command '{command}' timed out after {timeout:g} seconds")
