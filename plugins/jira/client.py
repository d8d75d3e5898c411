"""Jira REST API client."""

import re
from typing import Any, Dict, List, Mapping, Optional

import aiohttp
import structlog

from core.errors import JiraApiError, MissingCredential

logger = structlog.get_logger(__name__)

TICKET_KEY_PATTERN = re.compile(r"([A-Z][A-Z0-9]*-\d+)")

SEARCH_FIELDS = ["key", "summary", "status", "assignee", "priority", "issuetype", "description"]


def extract_ticket_key(text: str) -> Optional[str]:
    """Find a ticket key such as ``PROJ-123`` in free text or a Jira URL."""
    match = TICKET_KEY_PATTERN.search(text or "")
    return match.group(1) if match else None


def extract_description(fields: Mapping[str, Any]) -> str:
    """First text run of an Atlassian document-format description."""
    try:
        return fields["description"]["content"][0]["content"][0]["text"] or ""
    except (KeyError, IndexError, TypeError):
        return ""


def translate_status(status: int, reason: str = "", key: Optional[str] = None) -> JiraApiError:
    """Map an HTTP error status onto a ``JiraApiError``."""
    if status == 401:
        message = f"Authentication failed for Jira. Status: {status}"
    elif status == 403:
        message = f"Access forbidden. Check the Jira API token permissions. Status: {status}"
    elif status == 404 and key:
        message = f"Ticket {key} not found. Status: {status}"
    elif key:
        message = f"Error fetching ticket {key}: {status} {reason}".rstrip()
    else:
        message = f"Jira request failed: {status} {reason}".rstrip()
    return JiraApiError(status, message)


class JiraClient:
    """Thin async wrapper around the Jira Cloud REST API v3."""

    def __init__(
        self,
        domain: str,
        email: str,
        api_token: str,
        timeout: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.domain = domain.rstrip("/")
        self.email = email
        self.api_token = api_token
        self.timeout = timeout
        self._session = session

    @classmethod
    def from_credentials(cls, credentials: Mapping[str, Any], timeout: float = 30.0) -> "JiraClient":
        for name in ("domain", "email", "apiToken"):
            if not credentials.get(name):
                raise MissingCredential(f"jiraApi.{name}")
        return cls(
            domain=credentials["domain"],
            email=credentials["email"],
            api_token=credentials["apiToken"],
            timeout=timeout,
        )

    def browse_url(self, key: str) -> str:
        return f"{self.domain}/browse/{key}"

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        key: Optional[str] = None,
    ) -> Dict[str, Any]:
        url = f"{self.domain}{path}"
        headers = {"Accept": "application/json"}
        auth = aiohttp.BasicAuth(self.email, self.api_token)

        logger.debug("jira_request", method=method, url=url)

        if self._session is not None:
            return await self._send(self._session, method, url, headers, auth, payload, key)

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            return await self._send(session, method, url, headers, auth, payload, key)

    async def _send(self, session, method, url, headers, auth, payload, key) -> Dict[str, Any]:
        async with session.request(method, url, headers=headers, auth=auth, json=payload) as response:
            if response.status >= 400:
                raise translate_status(response.status, response.reason or "", key)
            return await response.json()

    async def get_issue(self, key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/rest/api/3/issue/{key}", key=key)

    async def search(
        self,
        jql: str,
        max_results: int = 10,
        fields: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        payload = {
            "jql": jql,
            "maxResults": max_results,
            "fields": fields or SEARCH_FIELDS,
        }
        return await self._request("POST", "/rest/api/3/search", payload=payload)

    def summarize_issue(
        self,
        issue: Mapping[str, Any],
        include_description: bool = True,
        max_description_length: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Flatten an issue payload into the ticket summary nodes hand on."""
        fields = issue.get("fields") or {}
        key = issue.get("key", "")

        description = extract_description(fields) if include_description else ""
        if max_description_length and len(description) > max_description_length:
            description = description[:max_description_length] + "..."

        return {
            "key": key,
            "summary": fields.get("summary") or "No summary available",
            "status": (fields.get("status") or {}).get("name") or "Unknown status",
            "type": (fields.get("issuetype") or {}).get("name") or "Unknown type",
            "priority": (fields.get("priority") or {}).get("name") or "No priority set",
            "assignee": (fields.get("assignee") or {}).get("displayName") or "Unassigned",
            "description": description or "No description available",
            "url": self.browse_url(key),
        }
