"""Workflow definitions for each use case."""

from workflows.android import create_android_release_workflow, create_android_workflow
from workflows.google_chat import (
    create_google_chat_batch_message_workflow,
    create_google_chat_message_workflow,
    create_google_chat_threaded_message_workflow,
)
from workflows.google_drive import (
    create_google_drive_batch_upload_workflow,
    create_google_drive_folder_workflow,
    create_google_drive_list_workflow,
    create_google_drive_upload_workflow,
)
from workflows.jira import create_jira_search_workflow, create_jira_workflow

__all__ = [
    "create_android_release_workflow",
    "create_android_workflow",
    "create_google_chat_batch_message_workflow",
    "create_google_chat_message_workflow",
    "create_google_chat_threaded_message_workflow",
    "create_google_drive_batch_upload_workflow",
    "create_google_drive_folder_workflow",
    "create_google_drive_list_workflow",
    "create_google_drive_upload_workflow",
    "create_jira_search_workflow",
    "create_jira_workflow",
]
