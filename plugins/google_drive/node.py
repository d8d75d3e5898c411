"""Google Drive workflow node."""

from typing import Any, Dict

from core.workflow.models import NodeExecuteResult, WorkflowData
from core.workflow.node import (
    CredentialDefinition,
    NodeDefinition,
    NodeParameter,
    ParameterType,
)
from plugins.base import PluginNode
from plugins.google_drive.client import GoogleDriveClient


class GoogleDriveNode(PluginNode):
    """Upload files to, list, and create folders in Google Drive."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="googleDrive",
            display_name="Google Drive",
            description="Upload and organise files in Google Drive",
            group=["output", "storage"],
            defaults={"name": "Google Drive"},
            properties=[
                NodeParameter(
                    name="operation",
                    display_name="Operation",
                    type=ParameterType.OPTIONS,
                    default="uploadFile",
                    required=True,
                    options=[
                        {"name": "Upload File", "value": "uploadFile"},
                        {"name": "List Files", "value": "listFiles"},
                        {"name": "Create Folder", "value": "createFolder"},
                    ],
                ),
                NodeParameter(
                    name="filePath",
                    display_name="File Path",
                    type=ParameterType.STRING,
                    default="",
                    description="Local path of the file to upload",
                ),
                NodeParameter(
                    name="fileName",
                    display_name="File Name",
                    type=ParameterType.STRING,
                    default="",
                    description="Name in Drive, defaults to the local file name",
                ),
                NodeParameter(
                    name="folderId",
                    display_name="Folder ID",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="folderName",
                    display_name="Folder Name",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="pageSize",
                    display_name="Page Size",
                    type=ParameterType.NUMBER,
                    default=10,
                ),
            ],
            credentials=[
                CredentialDefinition(
                    name="googleDriveServiceAccount",
                    display_name="Google Drive Service Account",
                    properties=[
                        NodeParameter("serviceAccountPath", "Service Account File", ParameterType.STRING, required=True),
                        NodeParameter("folderId", "Default Folder ID", ParameterType.STRING),
                    ],
                )
            ],
            icon="googleDrive.svg",
        )

    async def execute(self, input_data: WorkflowData) -> NodeExecuteResult:
        operation = self.get_parameter("operation", "uploadFile")

        try:
            self.validate_required_credentials()
            client = self.get_client("googleDriveServiceAccount")

            if operation == "uploadFile":
                output = await self._upload_file(client)
            elif operation == "listFiles":
                output = await self._list_files(client)
            elif operation == "createFolder":
                output = await self._create_folder(client)
            else:
                return self.failure(f"Unsupported operation: {operation}")

            return self.success(input_data, {"operation": operation, **output})

        except Exception as e:
            return self.failure(e)

    async def _upload_file(self, client: GoogleDriveClient) -> Dict[str, Any]:
        self.validate_required_parameters(["filePath"])
        file = await client.upload_file(
            self.get_parameter("filePath"),
            folder_id=self.get_parameter("folderId") or None,
            file_name=self.get_parameter("fileName") or None,
        )
        return {"file": file}

    async def _list_files(self, client: GoogleDriveClient) -> Dict[str, Any]:
        files = await client.list_files(
            folder_id=self.get_parameter("folderId") or None,
            page_size=int(self.get_parameter("pageSize", 10)),
        )
        return {"files": files, "count": len(files)}

    async def _create_folder(self, client: GoogleDriveClient) -> Dict[str, Any]:
        self.validate_required_parameters(["folderName"])
        folder = await client.create_folder(
            self.get_parameter("folderName"),
            parent_id=self.get_parameter("folderId") or None,
        )
        return {"folder": folder}
