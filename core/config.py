# core/config.py
from functools import lru_cache
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "agent-lazy-x1"
    app_version: str = "1.0.0"
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    # Jira
    jira_domain: Optional[str] = Field(default=None)
    jira_email: Optional[str] = Field(default=None)
    jira_api_token: Optional[str] = Field(default=None)
    jira_search_limit: int = Field(default=100)
    jira_request_timeout: float = Field(default=30.0)

    # Google service accounts
    google_service_account_path: str = Field(default="./service.json")
    google_chat_service_account_path: Optional[str] = Field(default=None)
    google_drive_folder_id: Optional[str] = Field(default=None)
    gchat_space_id: Optional[str] = Field(default=None)

    # Android builds run on slow machines, 25 minutes by default
    android_command_timeout: float = Field(default=1500.0)
    android_project_path: Optional[str] = Field(default=None)

    # Workflow engine
    workflow_max_steps: Optional[int] = Field(default=None)
    workflow_strict_start: bool = Field(default=False)

    @property
    def chat_service_account_path(self) -> str:
        return self.google_chat_service_account_path or self.google_service_account_path


@lru_cache()
def get_settings() -> Settings:
    return Settings()
