"""Google Drive workflow definitions."""

from typing import List, Optional, Sequence

from core.config import Settings
from core.workflow.models import WorkflowDefinition, WorkflowNode
from workflows.base import chain_connections, drive_credentials, position


def _upload_node(
    node_id: str,
    file_path: str,
    folder_id: Optional[str],
    file_name: Optional[str],
    index: int,
    settings: Optional[Settings],
) -> WorkflowNode:
    return WorkflowNode(
        id=node_id,
        type="googleDrive",
        name=f"Upload {file_name or file_path}",
        position=position(index),
        parameters={
            "operation": "uploadFile",
            "filePath": file_path,
            "folderId": folder_id or "",
            "fileName": file_name or "",
        },
        credentials=drive_credentials(settings),
    )


def create_google_drive_upload_workflow(
    file_path: str,
    folder_id: Optional[str] = None,
    file_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    node = _upload_node("google-drive-node-1", file_path, folder_id, file_name, 0, settings)
    return WorkflowDefinition(
        id="google-drive-upload-workflow",
        name="Upload File to Google Drive",
        nodes=(node,),
        connections={node.id: []},
    )


def create_google_drive_list_workflow(
    folder_id: Optional[str] = None,
    page_size: int = 10,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    node = WorkflowNode(
        id="google-drive-node-1",
        type="googleDrive",
        name="List Google Drive Files",
        position=position(0),
        parameters={
            "operation": "listFiles",
            "folderId": folder_id or "",
            "pageSize": page_size,
        },
        credentials=drive_credentials(settings),
    )
    return WorkflowDefinition(
        id="google-drive-list-workflow",
        name="List Google Drive Files",
        nodes=(node,),
        connections={node.id: []},
    )


def create_google_drive_folder_workflow(
    folder_name: str,
    parent_folder_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    node = WorkflowNode(
        id="google-drive-node-1",
        type="googleDrive",
        name="Create Google Drive Folder",
        position=position(0),
        parameters={
            "operation": "createFolder",
            "folderName": folder_name,
            "folderId": parent_folder_id or "",
        },
        credentials=drive_credentials(settings),
    )
    return WorkflowDefinition(
        id="google-drive-folder-workflow",
        name="Create Google Drive Folder",
        nodes=(node,),
        connections={node.id: []},
    )


def create_google_drive_batch_upload_workflow(
    file_paths: Sequence[str],
    folder_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    """One upload node per file, chained so every file is uploaded in turn."""
    if not file_paths:
        raise ValueError("No files given for batch upload")
    nodes: List[WorkflowNode] = [
        _upload_node(f"google-drive-upload-node-{index}", path, folder_id, None, index, settings)
        for index, path in enumerate(file_paths)
    ]
    return WorkflowDefinition(
        id="google-drive-batch-upload-workflow",
        name="Batch Upload Files to Google Drive",
        nodes=tuple(nodes),
        connections=chain_connections(nodes),
    )
