"""Google Chat v1 client authenticated with a service account."""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import asyncio
import os

import structlog
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from core.errors import GoogleApiError

logger = structlog.get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/chat.bot"]

TAG_ALL = "<users/all>"

Mention = Tuple[str, str]


def space_name(space_id: str) -> str:
    """Normalise ``abc123`` and ``spaces/abc123`` to the resource name."""
    return space_id if space_id.startswith("spaces/") else f"spaces/{space_id}"


def thread_name(space_id: str, thread_id: str) -> str:
    if thread_id.startswith("spaces/"):
        return thread_id
    return f"{space_name(space_id)}/threads/{thread_id}"


def compose_message(
    text: str,
    mentions: Sequence[Mention] = (),
    tag_all: bool = False,
    url: Optional[str] = None,
    url_text: Optional[str] = None,
) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Build message text and USER_MENTION annotations.

    Layout is ``[<users/all> ][<users/ID> ...]text[\\n\\n<url|text>]``;
    annotation offsets index into the final text.
    """
    prefix = f"{TAG_ALL} " if tag_all else ""
    annotations = []

    for user_id, display_name in mentions:
        tag = f"<users/{user_id}>"
        annotations.append({
            "type": "USER_MENTION",
            "startIndex": len(prefix),
            "length": len(tag),
            "userMention": {
                "user": {"name": f"users/{user_id}", "displayName": display_name},
            },
        })
        prefix += f"{tag} "

    message = prefix + text
    if url:
        message += f"\n\n<{url}|{url_text}>" if url_text else f"\n\n{url}"

    return message, annotations


class GoogleChatClient:
    """Chat operations as an app (bot) identity."""

    def __init__(self, service_account_path: Optional[str] = None, service: Any = None):
        self.service_account_path = service_account_path
        self._service = service

    @classmethod
    def from_credentials(cls, credentials: Mapping[str, Any]) -> "GoogleChatClient":
        return cls(service_account_path=credentials.get("serviceAccountPath"))

    @property
    def service(self) -> Any:
        if self._service is None:
            path = self.service_account_path
            if not path or not os.path.exists(path):
                raise FileNotFoundError(f"Service account file not found: {path}")
            creds = service_account.Credentials.from_service_account_file(path, scopes=SCOPES)
            self._service = build("chat", "v1", credentials=creds, cache_discovery=False)
        return self._service

    async def list_members(self, space_id: str) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._list_members, space_name(space_id))

    async def find_users(self, space_id: str, identifier: str) -> List[Mention]:
        """
        Resolve a user identifier against the space members.

        Numeric ids are used verbatim, emails must match exactly, anything
        else is a case-insensitive partial match on the display name and may
        return several users.
        """
        identifier = identifier.strip()
        if identifier.isdigit():
            return [(identifier, identifier)]

        members = await self.list_members(space_id)
        matches = []
        for membership in members:
            user = membership.get("member") or {}
            user_id = (user.get("name") or "").replace("users/", "")
            display_name = user.get("displayName") or ""
            if not user_id:
                continue

            if "@" in identifier:
                if user.get("email") == identifier:
                    matches.append((user_id, display_name or identifier))
            elif display_name and identifier.lower() in display_name.lower():
                matches.append((user_id, display_name))

        if not matches:
            logger.warning("chat_user_not_found", space=space_id, identifier=identifier)
        return matches

    async def resolve_mentions(self, space_id: str, identifiers: Iterable[str]) -> List[Mention]:
        mentions: List[Mention] = []
        for identifier in identifiers:
            if identifier and identifier.strip():
                mentions.extend(await self.find_users(space_id, identifier))
        return mentions

    async def send_message(
        self,
        space_id: str,
        text: str,
        thread_id: Optional[str] = None,
        url: Optional[str] = None,
        url_text: Optional[str] = None,
        tag_users: Optional[Sequence[str]] = None,
        tag_all: bool = False,
    ) -> Dict[str, Any]:
        space = space_name(space_id)
        mentions = await self.resolve_mentions(space, tag_users or [])
        message_text, annotations = compose_message(text, mentions, tag_all, url, url_text)

        body: Dict[str, Any] = {"text": message_text}
        if annotations:
            body["annotations"] = annotations
        if thread_id:
            body["thread"] = {"name": thread_name(space, thread_id)}

        response = await asyncio.to_thread(self._create_message, space, body, bool(thread_id))
        message_name = response.get("name", "")

        logger.info("chat_message_sent", space=space, message=message_name, mentions=len(mentions))

        return {
            "messageId": message_name.split("/")[-1],
            "messageName": message_name,
            "spaceId": space,
            "threadName": (response.get("thread") or {}).get("name"),
            "text": message_text,
            "mentions": [user_id for user_id, _ in mentions],
        }

    def _list_members(self, space: str) -> List[Dict[str, Any]]:
        try:
            response = self.service.spaces().members().list(parent=space, pageSize=1000).execute()
        except HttpError as e:
            raise GoogleApiError(f"Google Chat member listing failed: {e}", status=e.resp.status) from e
        return response.get("memberships", [])

    def _create_message(self, space: str, body: Dict[str, Any], reply: bool) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"parent": space, "body": body}
        if reply:
            kwargs["messageReplyOption"] = "REPLY_MESSAGE_FALLBACK_TO_NEW_THREAD"
        try:
            return self.service.spaces().messages().create(**kwargs).execute()
        except HttpError as e:
            raise GoogleApiError(f"Google Chat send failed: {e}", status=e.resp.status) from e
