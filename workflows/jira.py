"""Jira workflow definitions."""

from typing import Optional

from core.config import Settings
from core.workflow.models import WorkflowDefinition, WorkflowNode
from workflows.base import jira_credentials, position


def create_jira_workflow(
    ticket_key: str,
    settings: Optional[Settings] = None,
    include_description: bool = True,
    max_description_length: int = 200,
) -> WorkflowDefinition:
    node = WorkflowNode(
        id="jira-node-1",
        type="jira",
        name="Fetch Jira Ticket",
        position=position(0),
        parameters={
            "operation": "getTicket",
            "ticketKey": ticket_key,
            "includeDescription": include_description,
            "maxDescriptionLength": max_description_length,
        },
        credentials=jira_credentials(settings),
    )
    return WorkflowDefinition(
        id="jira-fetch-workflow",
        name="Fetch Jira Ticket",
        nodes=(node,),
        connections={node.id: []},
    )


def create_jira_search_workflow(
    jql: str,
    max_results: int = 10,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    node = WorkflowNode(
        id="jira-search-node-1",
        type="jira",
        name="Search Jira Tickets",
        position=position(0),
        parameters={
            "operation": "searchTickets",
            "searchQuery": jql,
            "maxResults": max_results,
        },
        credentials=jira_credentials(settings),
    )
    return WorkflowDefinition(
        id="jira-search-workflow",
        name="Search Jira Tickets",
        nodes=(node,),
        connections={node.id: []},
    )
