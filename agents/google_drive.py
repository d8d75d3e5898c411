"""Google Drive agent."""

from typing import Optional, Sequence

from agents.base import Agent, format_size
from workflows.google_drive import (
    create_google_drive_batch_upload_workflow,
    create_google_drive_folder_workflow,
    create_google_drive_list_workflow,
    create_google_drive_upload_workflow,
)


class GoogleDriveAgent(Agent):
    name = "google_drive"

    async def upload_file(
        self,
        file_path: str,
        folder_id: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> str:
        workflow = create_google_drive_upload_workflow(
            file_path, folder_id=folder_id, file_name=file_name, settings=self.settings
        )
        execution = await self.run(workflow)
        if not execution.is_success:
            return f"❌ Error uploading file to Google Drive: {execution.error}"

        file = execution.data["file"]
        return "\n".join([
            "**✅ File Uploaded Successfully to Google Drive**",
            "",
            f"**File:** {file['name']}",
            f"**Size:** {format_size(file['size'])}",
            f"**MIME Type:** {file['mimeType']}",
            f"**Upload Method:** {'Resumable' if file['method'] == 'resumable' else 'Simple'} Upload",
            f"**Replaced Existing:** {'Yes' if file['replaced'] else 'No'}",
            f"**File ID:** {file['id']}",
            f"**Folder ID:** {(file.get('parents') or ['Root'])[0]}",
            "",
            f"**Direct Link:** {file['webViewLink']}",
            f"**Share Link:** {file['shareLink']}" + ("" if file["shared"] else " (public sharing failed)"),
        ])

    async def list_files(self, folder_id: Optional[str] = None, page_size: int = 10) -> str:
        workflow = create_google_drive_list_workflow(folder_id, page_size=page_size, settings=self.settings)
        execution = await self.run(workflow)
        if not execution.is_success:
            return f"❌ Error listing Google Drive files: {execution.error}"

        files = execution.data.get("files", [])
        if not files:
            return "No files found in Google Drive folder."

        lines = [f"**Google Drive Files ({len(files)}):**", ""]
        for index, file in enumerate(files, start=1):
            size = format_size(int(file["size"])) if file.get("size") else "-"
            lines.append(f"{index}. **{file.get('name')}** ({size}) - {file.get('webViewLink', file.get('id'))}")
        return "\n".join(lines)

    async def create_folder(self, folder_name: str, parent_folder_id: Optional[str] = None) -> str:
        workflow = create_google_drive_folder_workflow(folder_name, parent_folder_id, settings=self.settings)
        execution = await self.run(workflow)
        if not execution.is_success:
            return f"❌ Error creating Google Drive folder: {execution.error}"

        folder = execution.data["folder"]
        return f"**✅ Folder Created:** {folder.get('name')} ({folder.get('id')})"

    async def batch_upload(self, file_paths: Sequence[str], folder_id: Optional[str] = None) -> str:
        if not file_paths:
            return "❌ No files given for batch upload"
        workflow = create_google_drive_batch_upload_workflow(file_paths, folder_id, settings=self.settings)
        execution = await self.run(workflow)
        uploaded = len(execution.node_executions) - (0 if execution.is_success else 1)
        if not execution.is_success:
            return f"❌ Batch upload stopped after {uploaded} of {len(file_paths)} files: {execution.error}"
        return f"**✅ Uploaded {uploaded} files to Google Drive**"
