"""Tool argument models."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ToolArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class JiraAgentArgs(ToolArguments):
    query: str = Field(..., min_length=1, description="Ticket key, Jira URL or a free-text search")
    ticket_key: Optional[str] = Field(default=None, alias="ticketKey", description="Explicit ticket key, e.g. PROJ-123")


class JiraAdvancedSearchArgs(ToolArguments):
    text: Optional[str] = Field(default=None, description="Text to find in summary or description")
    assignee: Optional[str] = Field(default=None, description="Assignee name, partial match, or 'unassigned'")
    status: Optional[str] = Field(default=None, description="Status, e.g. 'In Progress'")
    priority: Optional[str] = Field(default=None, description="Priority, e.g. 'High'")
    issue_type: Optional[str] = Field(default=None, alias="issueType", description="Issue type, e.g. 'Bug'")
    project: Optional[str] = Field(default=None, description="Project key, e.g. PROJ")
    max_results: int = Field(default=20, ge=1, le=100, alias="maxResults")


class AndroidReleaseArgs(ToolArguments):
    command: str = Field(
        ...,
        min_length=1,
        description="Shell command such as 'yarn build', or 'android:release' for the full release build",
    )
    project_path: Optional[str] = Field(default=None, alias="projectPath")
    run_gradle_clean: Literal["yes", "no", "auto"] = Field(
        default="auto",
        alias="runGradleClean",
        description="'yes' runs gradlew clean before the release build; 'no' and 'auto' skip it",
    )


class GoogleDriveUploadArgs(ToolArguments):
    file_path: str = Field(..., min_length=1, alias="filePath")
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    file_name: Optional[str] = Field(default=None, alias="fileName")


class GoogleDriveListArgs(ToolArguments):
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    page_size: int = Field(default=10, ge=1, le=100, alias="pageSize")


class GoogleChatSendArgs(ToolArguments):
    message: Optional[str] = Field(default=None, description="Message text")
    query: Optional[str] = Field(
        default=None,
        description="Free-text request, e.g. \"Send message 'Hi' to space spaces/abc tag all\"",
    )
    space_id: Optional[str] = Field(default=None, alias="spaceId")
    thread_id: Optional[str] = Field(default=None, alias="threadId")
    url: Optional[str] = None
    url_text: Optional[str] = Field(default=None, alias="urlText")
    tag_users: List[str] = Field(default_factory=list, alias="tagUsers")
    tag_all: bool = Field(default=False, alias="tagAll")

    @field_validator("tag_users", mode="before")
    @classmethod
    def split_tag_users(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value

    @model_validator(mode="after")
    def require_message_or_query(self):
        if not (self.message or self.query):
            raise ValueError("Either 'message' or 'query' is required")
        return self
