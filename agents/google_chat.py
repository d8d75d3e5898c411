"""Google Chat agent: direct sends and a small query language."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import re

from agents.base import Agent
from workflows.google_chat import create_google_chat_message_workflow

SPACE_PATTERN = re.compile(r"to space (spaces/[a-zA-Z0-9_-]+)", re.IGNORECASE)
MESSAGE_PATTERN = re.compile(r"message ['\"]([^'\"]+)['\"]", re.IGNORECASE)
NATURAL_PATTERN = re.compile(r"send (.+?) to (\w+)", re.IGNORECASE)
URL_PATTERN = re.compile(r"url ['\"]([^'\"]+)['\"]", re.IGNORECASE)
URL_TEXT_PATTERN = re.compile(r"url text ['\"]([^'\"]+)['\"]", re.IGNORECASE)
TAG_PATTERNS = [
    re.compile(r"names ['\"]([^'\"]+)['\"]", re.IGNORECASE),
    re.compile(r"user ids ['\"]([^'\"]+)['\"]", re.IGNORECASE),
    re.compile(r"tag users ['\"]([^'\"]+)['\"]", re.IGNORECASE),
]


@dataclass
class ChatRequest:
    """A message request parsed from a free-text query."""
    message: str
    space_id: Optional[str] = None
    url: Optional[str] = None
    url_text: Optional[str] = None
    tag_users: List[str] = field(default_factory=list)
    tag_all: bool = False

    @classmethod
    def parse(cls, query: str) -> Optional["ChatRequest"]:
        """
        Understands ``Send message 'Hi' to space spaces/abc url '...' url text
        '...' tag users 'a, b' tag all`` and the short form ``send hi to bob``.
        Returns None when no message can be found.
        """
        space = SPACE_PATTERN.search(query)
        space_id = space.group(1) if space else None

        message = MESSAGE_PATTERN.search(query)
        if not message:
            natural = NATURAL_PATTERN.search(query)
            if not natural:
                return None
            return cls(message=natural.group(1), space_id=space_id, tag_users=[natural.group(2)])

        request = cls(message=message.group(1), space_id=space_id)

        url = URL_PATTERN.search(query)
        if url:
            request.url = url.group(1)
        url_text = URL_TEXT_PATTERN.search(query)
        if url_text:
            request.url_text = url_text.group(1)

        for pattern in TAG_PATTERNS:
            match = pattern.search(query)
            if match:
                request.tag_users = [user.strip() for user in match.group(1).split(",") if user.strip()]
                break

        request.tag_all = "tag all" in query.lower() or "@all" in query
        return request


class GoogleChatAgent(Agent):
    name = "google_chat"

    async def send_message(
        self,
        message: str,
        space_id: Optional[str] = None,
        thread_id: Optional[str] = None,
        url: Optional[str] = None,
        url_text: Optional[str] = None,
        tag_users: Optional[Sequence[str]] = None,
        tag_all: bool = False,
    ) -> str:
        space_id = space_id or self.settings.gchat_space_id
        if not space_id:
            return "❌ No space given. Pass a space id (spaces/abc123) or set GCHAT_SPACE_ID."

        workflow = create_google_chat_message_workflow(
            message,
            space_id=space_id,
            thread_id=thread_id,
            url=url,
            url_text=url_text,
            tag_users=tag_users,
            tag_all=tag_all,
            settings=self.settings,
        )
        execution = await self.run(workflow)
        if not execution.is_success:
            return f"Failed to send message: {execution.error}"

        sent = execution.data["message"]
        lines = [
            f"Message sent successfully to space {sent['spaceId']}",
            f"Message ID: {sent['messageId']}",
            f"Message: {message}",
        ]
        if url:
            lines.append(f"URL: {url}")
        if tag_users:
            lines.append(f"Tagged users: {', '.join(tag_users)}")
        if tag_all:
            lines.append("Tagged: @all")
        return "\n".join(lines)

    async def process_query(self, query: str) -> str:
        if not query or not query.strip():
            return "❌ Query cannot be empty"

        request = ChatRequest.parse(query)
        if request is None:
            return (
                "❌ Please specify a message in the format: \"Send message 'Hello World'\" "
                "or \"send [message] to [user]\""
            )

        return await self.send_message(
            request.message,
            space_id=request.space_id,
            url=request.url,
            url_text=request.url_text,
            tag_users=request.tag_users,
            tag_all=request.tag_all,
        )
