"""Agents that answer tool calls by running workflows."""

from agents.android import AndroidReleaseAgent
from agents.base import Agent
from agents.google_chat import GoogleChatAgent
from agents.google_drive import GoogleDriveAgent
from agents.jira import JiraAgent

__all__ = [
    "Agent",
    "AndroidReleaseAgent",
    "GoogleChatAgent",
    "GoogleDriveAgent",
    "JiraAgent",
]
