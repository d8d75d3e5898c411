"""Jira workflow node."""

from typing import Any, Dict

from core.workflow.models import NodeExecuteResult, WorkflowData
from core.workflow.node import (
    CredentialDefinition,
    NodeDefinition,
    NodeParameter,
    ParameterType,
)
from plugins.base import PluginNode
from plugins.jira.client import JiraClient, extract_ticket_key


class JiraNode(PluginNode):
    """Fetch a single ticket or run a JQL search."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="jira",
            display_name="Jira",
            description="Get ticket details or search tickets in Jira Cloud",
            group=["input", "project-management"],
            defaults={"name": "Jira"},
            properties=[
                NodeParameter(
                    name="operation",
                    display_name="Operation",
                    type=ParameterType.OPTIONS,
                    default="getTicket",
                    required=True,
                    options=[
                        {"name": "Get Ticket", "value": "getTicket"},
                        {"name": "Search Tickets", "value": "searchTickets"},
                    ],
                ),
                NodeParameter(
                    name="ticketKey",
                    display_name="Ticket Key",
                    type=ParameterType.STRING,
                    default="",
                    description="Ticket key (PROJ-123) or a Jira URL containing one",
                ),
                NodeParameter(
                    name="includeDescription",
                    display_name="Include Description",
                    type=ParameterType.BOOLEAN,
                    default=True,
                ),
                NodeParameter(
                    name="maxDescriptionLength",
                    display_name="Max Description Length",
                    type=ParameterType.NUMBER,
                    default=200,
                ),
                NodeParameter(
                    name="searchQuery",
                    display_name="JQL Query",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="maxResults",
                    display_name="Max Results",
                    type=ParameterType.NUMBER,
                    default=10,
                ),
            ],
            credentials=[
                CredentialDefinition(
                    name="jiraApi",
                    display_name="Jira API",
                    properties=[
                        NodeParameter("domain", "Domain", ParameterType.STRING, required=True),
                        NodeParameter("email", "Email", ParameterType.STRING, required=True),
                        NodeParameter("apiToken", "API Token", ParameterType.STRING, required=True),
                    ],
                )
            ],
            icon="jira.svg",
        )

    async def execute(self, input_data: WorkflowData) -> NodeExecuteResult:
        operation = self.get_parameter("operation", "getTicket")

        try:
            self.validate_required_credentials()
            client = self.get_client("jiraApi")

            if operation == "getTicket":
                output = await self._get_ticket(client)
            elif operation == "searchTickets":
                output = await self._search_tickets(client)
            else:
                return self.failure(f"Unsupported operation: {operation}")

            return self.success(input_data, output)

        except Exception as e:
            return self.failure(e)

    async def _get_ticket(self, client: JiraClient) -> Dict[str, Any]:
        self.validate_required_parameters(["ticketKey"])
        raw_key = str(self.get_parameter("ticketKey")).strip()
        ticket_key = extract_ticket_key(raw_key) or raw_key

        issue = await client.get_issue(ticket_key)
        ticket = client.summarize_issue(
            issue,
            include_description=self.get_parameter("includeDescription", True),
            max_description_length=self.get_parameter("maxDescriptionLength", 200),
        )
        return {"ticketKey": ticket_key, "ticket": ticket}

    async def _search_tickets(self, client: JiraClient) -> Dict[str, Any]:
        self.validate_required_parameters(["searchQuery"])
        jql = self.get_parameter("searchQuery")

        response = await client.search(jql, max_results=int(self.get_parameter("maxResults", 10)))
        include_description = self.get_parameter("includeDescription", True)
        tickets = [
            client.summarize_issue(issue, include_description=include_description)
            for issue in response.get("issues", [])
        ]
        return {
            "searchQuery": jql,
            "tickets": tickets,
            "total": response.get("total", len(tickets)),
        }
