"""Tool registry and dispatch for the MCP server."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type

import structlog
from mcp.types import TextContent, Tool
from pydantic import ValidationError

from agents import AndroidReleaseAgent, GoogleChatAgent, GoogleDriveAgent, JiraAgent
from core.config import Settings, get_settings
from core.workflow.engine import WorkflowEngine
from server.schemas import (
    AndroidReleaseArgs,
    GoogleChatSendArgs,
    GoogleDriveListArgs,
    GoogleDriveUploadArgs,
    JiraAdvancedSearchArgs,
    JiraAgentArgs,
    ToolArguments,
)

logger = structlog.get_logger(__name__)


@dataclass
class ToolSpec:
    name: str
    description: str
    arguments: Type[ToolArguments]
    handler: Callable[[Any], Awaitable[str]]

    def to_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.arguments.model_json_schema(by_alias=True),
        )


class ToolServer:
    """
    Maps tool names onto agent calls.

    Arguments are validated against the tool's pydantic model. Unknown
    tools and invalid arguments raise ``ValueError`` so the call fails.
    """

    def __init__(
        self,
        jira: JiraAgent,
        android: AndroidReleaseAgent,
        drive: GoogleDriveAgent,
        chat: GoogleChatAgent,
    ):
        self.jira = jira
        self.android = android
        self.drive = drive
        self.chat = chat
        self._tools: Dict[str, ToolSpec] = {spec.name: spec for spec in self._build_specs()}

    @classmethod
    def from_engine(cls, engine: WorkflowEngine, settings: Optional[Settings] = None) -> "ToolServer":
        settings = settings or get_settings()
        return cls(
            jira=JiraAgent(engine, settings),
            android=AndroidReleaseAgent(engine, settings),
            drive=GoogleDriveAgent(engine, settings),
            chat=GoogleChatAgent(engine, settings),
        )

    def _build_specs(self) -> List[ToolSpec]:
        return [
            ToolSpec(
                "jira_agent",
                "Fetch a Jira ticket by key or URL, or search recent tickets with a "
                "free-text query (assignee, status, priority and type keywords).",
                JiraAgentArgs,
                self._jira_agent,
            ),
            ToolSpec(
                "jira_advanced_search",
                "Search recent Jira tickets with filters for text, assignee, status, "
                "priority, issue type and project.",
                JiraAdvancedSearchArgs,
                self._jira_advanced_search,
            ),
            ToolSpec(
                "android_release_agent",
                "Run build commands in a React Native Android project with an extended "
                "timeout. Use 'android:release' for the full release build.",
                AndroidReleaseArgs,
                self._android_release_agent,
            ),
            ToolSpec(
                "google_drive_upload",
                "Upload a local file to a shared Google Drive folder, replacing a file "
                "with the same name, and return a public link.",
                GoogleDriveUploadArgs,
                self._google_drive_upload,
            ),
            ToolSpec(
                "google_drive_list",
                "List the most recently modified files in a Google Drive folder.",
                GoogleDriveListArgs,
                self._google_drive_list,
            ),
            ToolSpec(
                "google_chat_send_message",
                "Send a message to a Google Chat space with optional thread, link and "
                "user mentions, or describe the message in a free-text query.",
                GoogleChatSendArgs,
                self._google_chat_send_message,
            ),
        ]

    def list_tools(self) -> List[Tool]:
        return [spec.to_tool() for spec in self._tools.values()]

    @property
    def tool_names(self) -> List[str]:
        return list(self._tools)

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> List[TextContent]:
        spec = self._tools.get(name)
        if spec is None:
            raise ValueError(f"Unknown tool: {name}")

        try:
            args = spec.arguments.model_validate(dict(arguments or {}))
        except ValidationError as e:
            raise ValueError(f"Invalid arguments for {name}: {e}") from e

        logger.info("tool_called", tool=name)
        text = await spec.handler(args)
        return [TextContent(type="text", text=text)]

    async def _jira_agent(self, args: JiraAgentArgs) -> str:
        return await self.jira.process_query(args.query, args.ticket_key)

    async def _jira_advanced_search(self, args: JiraAdvancedSearchArgs) -> str:
        return await self.jira.advanced_search(
            text=args.text,
            assignee=args.assignee,
            status=args.status,
            priority=args.priority,
            issue_type=args.issue_type,
            project=args.project,
            max_results=args.max_results,
        )

    async def _android_release_agent(self, args: AndroidReleaseArgs) -> str:
        return await self.android.process_command(args.command, args.project_path, args.run_gradle_clean)

    async def _google_drive_upload(self, args: GoogleDriveUploadArgs) -> str:
        return await self.drive.upload_file(args.file_path, args.folder_id, args.file_name)

    async def _google_drive_list(self, args: GoogleDriveListArgs) -> str:
        return await self.drive.list_files(args.folder_id, args.page_size)

    async def _google_chat_send_message(self, args: GoogleChatSendArgs) -> str:
        if not args.message:
            return await self.chat.process_query(args.query)
        return await self.chat.send_message(
            args.message,
            space_id=args.space_id,
            thread_id=args.thread_id,
            url=args.url,
            url_text=args.url_text,
            tag_users=args.tag_users,
            tag_all=args.tag_all,
        )
