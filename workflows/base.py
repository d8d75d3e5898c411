"""Helpers shared by the workflow factories."""

from typing import Any, Dict, List, Optional, Sequence

from core.config import Settings, get_settings
from core.workflow.models import WorkflowNode


def chain_connections(nodes: Sequence[WorkflowNode]) -> Dict[str, List[str]]:
    """Connect nodes one after another in the given order."""
    connections: Dict[str, List[str]] = {node.id: [] for node in nodes}
    for current, following in zip(nodes, nodes[1:]):
        connections[current.id].append(following.id)
    return connections


def position(index: int, x: int = 100, y: int = 100, step: int = 200) -> Dict[str, int]:
    return {"x": x + index * step, "y": y}


def jira_credentials(settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return {
        "jiraApi": {
            "domain": settings.jira_domain,
            "email": settings.jira_email,
            "apiToken": settings.jira_api_token,
        }
    }


def drive_credentials(settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return {
        "googleDriveServiceAccount": {
            "serviceAccountPath": settings.google_service_account_path,
            "folderId": settings.google_drive_folder_id,
        }
    }


def chat_credentials(settings: Optional[Settings] = None) -> Dict[str, Any]:
    settings = settings or get_settings()
    return {
        "googleChatServiceAccount": {
            "serviceAccountPath": settings.chat_service_account_path,
        }
    }
