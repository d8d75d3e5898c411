"""Google Drive v3 client authenticated with a service account."""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import asyncio
import mimetypes
import os

import structlog
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaFileUpload

from core.errors import GoogleApiError, MissingParameter

logger = structlog.get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/drive"]

LARGE_FILE_THRESHOLD = 5 * 1024 * 1024
CHUNK_SIZE = 8 * 1024 * 1024

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
FILE_FIELDS = "id,name,size,mimeType,createdTime,modifiedTime,webViewLink,parents"


def guess_mime_type(file_name: str) -> str:
    mime_type, _ = mimetypes.guess_type(file_name)
    return mime_type or "application/octet-stream"


def share_links(file_id: str) -> Dict[str, str]:
    return {
        "webViewLink": f"https://drive.google.com/file/d/{file_id}/view",
        "shareLink": f"https://drive.google.com/file/d/{file_id}/view?usp=sharing",
    }


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _api_error(action: str, error: HttpError) -> GoogleApiError:
    status = getattr(error.resp, "status", None)
    return GoogleApiError(
        f"Google Drive {action} failed: {error}",
        status=int(status) if status is not None else None,
    )


class GoogleDriveClient:
    """
    Drive operations for a service account.

    Service accounts have no storage of their own, so uploads go into a
    folder shared with the account. The googleapiclient calls block; every
    public method runs them in a worker thread.
    """

    def __init__(
        self,
        service_account_path: Optional[str] = None,
        default_folder_id: Optional[str] = None,
        service: Any = None,
    ):
        self.service_account_path = service_account_path
        self.default_folder_id = default_folder_id
        self._service = service

    @classmethod
    def from_credentials(cls, credentials: Mapping[str, Any]) -> "GoogleDriveClient":
        return cls(
            service_account_path=credentials.get("serviceAccountPath"),
            default_folder_id=credentials.get("folderId"),
        )

    @property
    def service(self) -> Any:
        if self._service is None:
            path = self.service_account_path
            if not path or not os.path.exists(path):
                raise FileNotFoundError(f"Service account file not found: {path}")
            creds = service_account.Credentials.from_service_account_file(path, scopes=SCOPES)
            self._service = build("drive", "v3", credentials=creds, cache_discovery=False)
        return self._service

    async def upload_file(
        self,
        file_path: str,
        folder_id: Optional[str] = None,
        file_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await asyncio.to_thread(self._upload_file, file_path, folder_id, file_name)

    async def list_files(self, folder_id: Optional[str] = None, page_size: int = 10) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._list_files, folder_id, page_size)

    async def create_folder(self, name: str, parent_id: Optional[str] = None) -> Dict[str, Any]:
        return await asyncio.to_thread(self._create_folder, name, parent_id)

    def _upload_file(
        self,
        file_path: str,
        folder_id: Optional[str],
        file_name: Optional[str],
    ) -> Dict[str, Any]:
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        folder_id = folder_id or self.default_folder_id
        if not folder_id:
            raise MissingParameter("folderId")

        name = file_name or path.name
        size = path.stat().st_size
        mime_type = guess_mime_type(name)
        resumable = size > LARGE_FILE_THRESHOLD

        log = logger.bind(file_name=name, folder_id=folder_id, size=size)

        try:
            existing_id = self._find_existing_file(name, folder_id)
            media = MediaFileUpload(
                str(path),
                mimetype=mime_type,
                resumable=resumable,
                chunksize=CHUNK_SIZE,
            )

            files = self.service.files()
            if existing_id:
                log.info("drive_file_replacing", file_id=existing_id)
                request = files.update(
                    fileId=existing_id,
                    media_body=media,
                    fields=FILE_FIELDS,
                    supportsAllDrives=True,
                )
            else:
                request = files.create(
                    body={"name": name, "parents": [folder_id], "mimeType": mime_type},
                    media_body=media,
                    fields=FILE_FIELDS,
                    supportsAllDrives=True,
                )

            if resumable:
                response = None
                while response is None:
                    status, response = request.next_chunk()
                    if status:
                        log.debug("drive_upload_progress", percent=int(status.progress() * 100))
            else:
                response = request.execute()

        except HttpError as e:
            raise _api_error("upload", e) from e

        file_id = response["id"]
        shared = self._share_publicly(file_id)

        log.info("drive_file_uploaded", file_id=file_id, resumable=resumable, shared=shared)

        return {
            "id": file_id,
            "name": response.get("name", name),
            "size": int(response.get("size") or size),
            "mimeType": response.get("mimeType", mime_type),
            "createdTime": response.get("createdTime"),
            "modifiedTime": response.get("modifiedTime"),
            "parents": response.get("parents", [folder_id]),
            "method": "resumable" if resumable else "simple",
            "replaced": bool(existing_id),
            "shared": shared,
            **share_links(file_id),
        }

    def _find_existing_file(self, name: str, folder_id: str) -> Optional[str]:
        query = f"name='{_quote(name)}' and '{_quote(folder_id)}' in parents and trashed=false"
        response = self.service.files().list(
            q=query,
            fields="files(id,name)",
            supportsAllDrives=True,
            includeItemsFromAllDrives=True,
        ).execute()
        files = response.get("files", [])
        return files[0]["id"] if files else None

    def _share_publicly(self, file_id: str) -> bool:
        """Grant "anyone with the link" read access. Failure is not fatal."""
        try:
            self.service.permissions().create(
                fileId=file_id,
                body={"role": "reader", "type": "anyone"},
                supportsAllDrives=True,
            ).execute()
            return True
        except HttpError as e:
            logger.warning("drive_share_failed", file_id=file_id, error=str(e))
            return False

    def _list_files(self, folder_id: Optional[str], page_size: int) -> List[Dict[str, Any]]:
        folder_id = folder_id or self.default_folder_id
        query = "trashed=false"
        if folder_id:
            query = f"'{_quote(folder_id)}' in parents and {query}"

        try:
            response = self.service.files().list(
                q=query,
                pageSize=page_size,
                orderBy="modifiedTime desc",
                fields=f"files({FILE_FIELDS})",
                supportsAllDrives=True,
                includeItemsFromAllDrives=True,
            ).execute()
        except HttpError as e:
            raise _api_error("list", e) from e

        return response.get("files", [])

    def _create_folder(self, name: str, parent_id: Optional[str]) -> Dict[str, Any]:
        parent_id = parent_id or self.default_folder_id
        body: Dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME_TYPE}
        if parent_id:
            body["parents"] = [parent_id]

        try:
            folder = self.service.files().create(
                body=body,
                fields="id,name,webViewLink,parents",
                supportsAllDrives=True,
            ).execute()
        except HttpError as e:
            raise _api_error("folder creation", e) from e

        logger.info("drive_folder_created", folder_id=folder.get("id"), name=name)
        return folder
