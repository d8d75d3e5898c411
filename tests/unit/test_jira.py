"""
Tests for the Jira plugin: client helpers, the node and the search criteria.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from agents.jira import SearchCriteria, format_search_results
from core.errors import JiraApiError, MissingCredential
from core.workflow.engine import WorkflowEngine
from core.workflow.registry import NodeRegistry
from plugins.jira import JiraClient, JiraPlugin
from plugins.jira.client import extract_description, extract_ticket_key, translate_status

from conftest import make_workflow


CREDENTIALS = {
    "jiraApi": {
        "domain": "https://example.atlassian.net",
        "email": "bot@example.com",
        "apiToken": "token",
    }
}


def make_issue(key="PROJ-1", summary="Fix login", description="Users cannot log in"):
    fields = {
        "summary": summary,
        "status": {"name": "In Progress"},
        "issuetype": {"name": "Bug"},
        "priority": {"name": "High"},
        "assignee": {"displayName": "Sam Doe"},
    }
    if description is not None:
        fields["description"] = {
            "type": "doc",
            "content": [{"type": "paragraph", "content": [{"type": "text", "text": description}]}],
        }
    return {"key": key, "fields": fields}


def make_client() -> JiraClient:
    client = JiraClient.from_credentials(CREDENTIALS["jiraApi"])
    client.get_issue = AsyncMock(return_value=make_issue())
    client.search = AsyncMock(return_value={
        "issues": [make_issue("PROJ-1"), make_issue("PROJ-2", summary="Crash on start")],
        "total": 2,
    })
    return client


def make_engine(client) -> WorkflowEngine:
    registry = NodeRegistry()
    JiraPlugin(client_factory=lambda credentials: client).register(registry)
    return WorkflowEngine(registry)


# ============================================================================
# CLIENT HELPERS
# ============================================================================

class TestClientHelpers:

    def test_extract_ticket_key_from_url(self):
        url = "https://example.atlassian.net/browse/PROJ-123?focused=true"
        assert extract_ticket_key(url) == "PROJ-123"

    def test_extract_ticket_key_from_text(self):
        assert extract_ticket_key("what about AB2-7 today") == "AB2-7"
        assert extract_ticket_key("nothing here") is None
        assert extract_ticket_key(None) is None

    def test_extract_description(self):
        assert extract_description(make_issue()["fields"]) == "Users cannot log in"
        assert extract_description({}) == ""
        assert extract_description({"description": {"content": []}}) == ""

    @pytest.mark.parametrize("status,key,fragment", [
        (401, None, "Authentication failed"),
        (403, None, "Access forbidden"),
        (404, "PROJ-9", "Ticket PROJ-9 not found"),
        (500, "PROJ-9", "Error fetching ticket PROJ-9: 500"),
        (500, None, "Jira request failed: 500"),
    ])
    def test_translate_status(self, status, key, fragment):
        error = translate_status(status, "Server Error", key)

        assert isinstance(error, JiraApiError)
        assert error.status == status
        assert fragment in str(error)

    def test_from_credentials_requires_every_value(self):
        with pytest.raises(MissingCredential) as exc_info:
            JiraClient.from_credentials({"domain": "https://x.atlassian.net", "email": "a@b.c"})
        assert exc_info.value.name == "jiraApi.apiToken"

    def test_browse_url_strips_trailing_slash(self):
        client = JiraClient("https://x.atlassian.net/", "a@b.c", "t")
        assert client.browse_url("PROJ-1") == "https://x.atlassian.net/browse/PROJ-1"


class TestSummarizeIssue:

    def test_full_issue(self):
        ticket = make_client().summarize_issue(make_issue())

        assert ticket == {
            "key": "PROJ-1",
            "summary": "Fix login",
            "status": "In Progress",
            "type": "Bug",
            "priority": "High",
            "assignee": "Sam Doe",
            "description": "Users cannot log in",
            "url": "https://example.atlassian.net/browse/PROJ-1",
        }

    def test_missing_fields_get_placeholders(self):
        ticket = make_client().summarize_issue({"key": "PROJ-2", "fields": {}})

        assert ticket["summary"] == "No summary available"
        assert ticket["status"] == "Unknown status"
        assert ticket["type"] == "Unknown type"
        assert ticket["priority"] == "No priority set"
        assert ticket["assignee"] == "Unassigned"
        assert ticket["description"] == "No description available"

    def test_description_truncated(self):
        ticket = make_client().summarize_issue(make_issue(description="x" * 50), max_description_length=10)
        assert ticket["description"] == "x" * 10 + "..."

    def test_description_skipped(self):
        ticket = make_client().summarize_issue(make_issue(), include_description=False)
        assert ticket["description"] == "No description available"


class TestClientRequests:

    def _session(self, status=200, payload=None, reason="OK"):
        response = MagicMock(status=status, reason=reason)
        response.json = AsyncMock(return_value=payload or {})
        session = MagicMock()
        session.request.return_value.__aenter__.return_value = response
        return session

    @pytest.mark.asyncio
    async def test_get_issue(self):
        session = self._session(payload=make_issue())
        client = JiraClient("https://x.atlassian.net", "a@b.c", "t", session=session)

        issue = await client.get_issue("PROJ-1")

        assert issue["key"] == "PROJ-1"
        args, kwargs = session.request.call_args
        assert args == ("GET", "https://x.atlassian.net/rest/api/3/issue/PROJ-1")
        assert kwargs["auth"].login == "a@b.c"
        assert kwargs["json"] is None

    @pytest.mark.asyncio
    async def test_search_posts_jql(self):
        session = self._session(payload={"issues": [], "total": 0})
        client = JiraClient("https://x.atlassian.net", "a@b.c", "t", session=session)

        await client.search("project = PROJ", max_results=5)

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://x.atlassian.net/rest/api/3/search")
        assert kwargs["json"]["jql"] == "project = PROJ"
        assert kwargs["json"]["maxResults"] == 5
        assert "summary" in kwargs["json"]["fields"]

    @pytest.mark.asyncio
    async def test_not_found(self):
        session = self._session(status=404, reason="Not Found")
        client = JiraClient("https://x.atlassian.net", "a@b.c", "t", session=session)

        with pytest.raises(JiraApiError) as exc_info:
            await client.get_issue("PROJ-404")
        assert exc_info.value.status == 404
        assert "PROJ-404" in str(exc_info.value)


# ============================================================================
# NODE
# ============================================================================

class TestJiraNode:

    @pytest.mark.asyncio
    async def test_get_ticket(self):
        client = make_client()
        workflow = make_workflow([{
            "id": "jira-node-1",
            "type": "jira",
            "parameters": {"operation": "getTicket", "ticketKey": "https://example.atlassian.net/browse/PROJ-1"},
            "credentials": CREDENTIALS,
        }])

        execution = await make_engine(client).execute_workflow(workflow, {"request": "r1"})

        assert execution.is_success
        client.get_issue.assert_awaited_once_with("PROJ-1")
        assert execution.data["request"] == "r1"
        assert execution.data["ticketKey"] == "PROJ-1"
        assert execution.data["ticket"]["summary"] == "Fix login"

    @pytest.mark.asyncio
    async def test_search_tickets(self):
        client = make_client()
        workflow = make_workflow([{
            "id": "jira-search-node-1",
            "type": "jira",
            "parameters": {
                "operation": "searchTickets",
                "searchQuery": "ORDER BY updated DESC",
                "maxResults": 2,
                "includeDescription": False,
            },
            "credentials": CREDENTIALS,
        }])

        execution = await make_engine(client).execute_workflow(workflow)

        assert execution.is_success
        client.search.assert_awaited_once_with("ORDER BY updated DESC", max_results=2)
        assert execution.data["total"] == 2
        assert [t["key"] for t in execution.data["tickets"]] == ["PROJ-1", "PROJ-2"]
        assert execution.data["tickets"][0]["description"] == "No description available"

    @pytest.mark.asyncio
    async def test_missing_credentials(self):
        client = make_client()
        workflow = make_workflow([{"id": "j", "type": "jira", "parameters": {"ticketKey": "PROJ-1"}}])

        execution = await make_engine(client).execute_workflow(workflow)

        assert not execution.is_success
        assert "jiraApi" in execution.error
        client.get_issue.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_ticket_key(self):
        workflow = make_workflow([{"id": "j", "type": "jira", "parameters": {}, "credentials": CREDENTIALS}])

        execution = await make_engine(make_client()).execute_workflow(workflow)

        assert not execution.is_success
        assert "ticketKey" in execution.error

    @pytest.mark.asyncio
    async def test_api_error_reported(self):
        client = make_client()
        client.get_issue.side_effect = translate_status(404, "Not Found", "PROJ-1")
        workflow = make_workflow([{
            "id": "j", "type": "jira", "parameters": {"ticketKey": "PROJ-1"}, "credentials": CREDENTIALS,
        }])

        execution = await make_engine(client).execute_workflow(workflow)

        assert not execution.is_success
        assert "Ticket PROJ-1 not found" in execution.error

    @pytest.mark.asyncio
    async def test_unsupported_operation(self):
        workflow = make_workflow([{
            "id": "j", "type": "jira", "parameters": {"operation": "delete"}, "credentials": CREDENTIALS,
        }])

        execution = await make_engine(make_client()).execute_workflow(workflow)

        assert "Unsupported operation: delete" in execution.error

    def test_schema(self):
        definition = make_engine(make_client()).get_node_definition("jira")

        assert definition.required_credentials == ["jiraApi"]
        assert {"operation", "ticketKey", "searchQuery", "maxResults"} <= set(definition.parameter_names)


# ============================================================================
# SEARCH CRITERIA
# ============================================================================

class TestSearchCriteria:

    def test_parse_keywords(self):
        criteria = SearchCriteria.parse("high priority bugs in progress assigned to Sam")

        assert criteria.priority == "high"
        assert criteria.issue_type == "bug"
        assert criteria.status == "in progress"
        assert criteria.assignee == "Sam"

    def test_empty_query(self):
        assert SearchCriteria.parse("").is_empty()

    def test_matches(self):
        ticket = make_client().summarize_issue(make_issue())

        assert SearchCriteria(text="login").matches(ticket)
        assert SearchCriteria(assignee="sam").matches(ticket)
        assert not SearchCriteria(status="done").matches(ticket)
        assert SearchCriteria(project="proj").matches(ticket)

    def test_format_search_results(self):
        tickets = [make_client().summarize_issue(make_issue())]

        text = format_search_results(tickets, "login", 10)

        assert "PROJ-1" in text
        assert "Fix login" in text
