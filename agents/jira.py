"""Jira agent: ticket lookups and keyword search over recent tickets."""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional
import re

import structlog

from agents.base import Agent
from plugins.jira.client import extract_ticket_key
from workflows.jira import create_jira_search_workflow, create_jira_workflow

logger = structlog.get_logger(__name__)

RECENT_TICKETS_JQL = "ORDER BY updated DESC"
MAX_LISTED_RESULTS = 20

ASSIGNEE_PATTERNS = [
    re.compile(r"assigned to\s+([\w\s.-]+)", re.IGNORECASE),
    re.compile(r"assignee\s+([\w\s.-]+)", re.IGNORECASE),
    re.compile(r"for user\s+([\w\s.-]+)", re.IGNORECASE),
    re.compile(r"user:\s*([\w\s.-]+)", re.IGNORECASE),
]
STATUS_KEYWORDS = ["todo", "in progress", "done", "blocked", "closed", "open"]
PRIORITY_KEYWORDS = ["high", "medium", "low", "critical", "urgent"]
ISSUE_TYPE_KEYWORDS = ["bug", "task", "story", "epic", "subtask"]


def _first_keyword(text: str, keywords: List[str]) -> Optional[str]:
    return next((keyword for keyword in keywords if keyword in text), None)


@dataclass
class SearchCriteria:
    """Case-insensitive partial-match filters over ticket summaries."""
    text: Optional[str] = None
    assignee: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    issue_type: Optional[str] = None
    project: Optional[str] = None

    @classmethod
    def parse(cls, query: str) -> "SearchCriteria":
        """
        Pull assignee, status, priority and type out of free text. When
        none is recognised, the whole query becomes a text search.
        """
        lower = query.lower()
        criteria = cls()

        for pattern in ASSIGNEE_PATTERNS:
            match = pattern.search(query)
            if match and match.group(1).strip():
                criteria.assignee = match.group(1).strip()
                break

        criteria.status = _first_keyword(lower, STATUS_KEYWORDS)
        criteria.priority = _first_keyword(lower, PRIORITY_KEYWORDS)
        criteria.issue_type = _first_keyword(lower, ISSUE_TYPE_KEYWORDS)

        if criteria.is_empty():
            criteria.text = query.strip()
        return criteria

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def matches(self, ticket: Mapping[str, Any]) -> bool:
        def contains(value: Any, needle: Optional[str]) -> bool:
            return needle is None or needle.lower() in str(value or "").lower()

        haystack = f"{ticket.get('summary', '')} {ticket.get('description', '')}"
        project = str(ticket.get("key", "")).split("-")[0]

        return (
            contains(haystack, self.text)
            and contains(ticket.get("assignee") or "unassigned", self.assignee)
            and contains(ticket.get("status"), self.status)
            and contains(ticket.get("priority"), self.priority)
            and contains(ticket.get("type"), self.issue_type)
            and (self.project is None or project.lower() == self.project.lower())
        )


class JiraAgent(Agent):
    """Answers Jira questions through the jira workflows."""

    name = "jira"

    async def process_query(self, query: str, ticket_key: Optional[str] = None) -> str:
        ticket_key = ticket_key or extract_ticket_key(query)
        if ticket_key:
            return await self.fetch_ticket(ticket_key)
        return await self.search(query, SearchCriteria.parse(query))

    async def advanced_search(
        self,
        text: Optional[str] = None,
        assignee: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        issue_type: Optional[str] = None,
        project: Optional[str] = None,
        max_results: int = MAX_LISTED_RESULTS,
    ) -> str:
        criteria = SearchCriteria(
            text=text or None,
            assignee=assignee or None,
            status=status or None,
            priority=priority or None,
            issue_type=issue_type or None,
            project=project or None,
        )
        description = ", ".join(
            f"{f.name}={getattr(criteria, f.name)}" for f in fields(criteria) if getattr(criteria, f.name)
        )
        return await self.search(description or "all tickets", criteria, max_results)

    async def fetch_ticket(self, ticket_key: str) -> str:
        execution = await self.run(create_jira_workflow(ticket_key, settings=self.settings))
        if not execution.is_success:
            return f"Error executing Jira workflow: {execution.error}"

        ticket = execution.data["ticket"]
        return "\n".join([
            "**Jira Ticket Summary**",
            f"**Ticket:** {ticket['key']}",
            f"**Title:** {ticket['summary']}",
            f"**Status:** {ticket['status']}",
            f"**Type:** {ticket['type']}",
            f"**Priority:** {ticket['priority']}",
            f"**Assignee:** {ticket['assignee']}",
            f"**Description:** {ticket['description']}",
            f"**Jira Link:** {ticket['url']}",
        ])

    async def recent_tickets(self) -> List[Dict[str, Any]]:
        workflow = create_jira_search_workflow(
            RECENT_TICKETS_JQL,
            max_results=self.settings.jira_search_limit,
            settings=self.settings,
        )
        execution = await self.run(workflow)
        if not execution.is_success:
            raise RuntimeError(execution.error)
        return execution.data.get("tickets", [])

    async def search(
        self,
        query: str,
        criteria: SearchCriteria,
        max_results: int = MAX_LISTED_RESULTS,
    ) -> str:
        try:
            tickets = await self.recent_tickets()
        except RuntimeError as e:
            return f"Error in unified search: {e}"

        if not tickets:
            return f"No Jira tickets found matching: {query}"

        matched = [ticket for ticket in tickets if criteria.matches(ticket)]
        logger.info("jira_search_filtered", fetched=len(tickets), matched=len(matched))

        if not matched:
            return f"No Jira tickets found matching criteria: {query}"
        return format_search_results(matched, query, max_results)


def format_search_results(
    tickets: List[Mapping[str, Any]],
    query: str,
    limit: int = MAX_LISTED_RESULTS,
) -> str:
    lines = [f'**Search Results for: "{query}"**', "", f"**Found {len(tickets)} tickets:**", ""]
    for index, ticket in enumerate(tickets[:limit], start=1):
        lines.extend([
            f"{index}. **{ticket['key']}** - {ticket['summary']}",
            f"   Status: {ticket['status']} | Type: {ticket['type']} | Priority: {ticket['priority']}",
            f"   Assignee: {ticket['assignee']}",
            f"   Link: {ticket['url']}",
            "",
        ])
    if len(tickets) > limit:
        lines.append(f"... and {len(tickets) - limit} more tickets.")
    return "\n".join(lines).rstrip()
