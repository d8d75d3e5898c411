"""Google Chat workflow definitions."""

from typing import List, Optional, Sequence

from core.config import Settings, get_settings
from core.workflow.models import WorkflowDefinition, WorkflowNode
from workflows.base import chain_connections, chat_credentials, position


def _message_node(
    node_id: str,
    space_id: str,
    message_text: str,
    index: int,
    settings: Optional[Settings],
    **options,
) -> WorkflowNode:
    parameters = {
        "operation": "sendMessage",
        "spaceId": space_id,
        "messageText": message_text,
    }
    parameters.update({key: value for key, value in options.items() if value})
    return WorkflowNode(
        id=node_id,
        type="googleChat",
        name=f"Send Message {index + 1}",
        position=position(index),
        parameters=parameters,
        credentials=chat_credentials(settings),
    )


def _resolve_space(space_id: Optional[str], settings: Optional[Settings]) -> str:
    space_id = space_id or (settings or get_settings()).gchat_space_id
    if not space_id:
        raise ValueError("No Google Chat space given and GCHAT_SPACE_ID is not set")
    return space_id


def create_google_chat_message_workflow(
    message_text: str,
    space_id: Optional[str] = None,
    thread_id: Optional[str] = None,
    url: Optional[str] = None,
    url_text: Optional[str] = None,
    tag_users: Optional[Sequence[str]] = None,
    tag_all: bool = False,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    node = _message_node(
        "google-chat-node-1",
        _resolve_space(space_id, settings),
        message_text,
        0,
        settings,
        threadId=thread_id,
        url=url,
        urlText=url_text,
        tagUsers=list(tag_users or []),
        tagAll=tag_all,
    )
    return WorkflowDefinition(
        id="google-chat-message-workflow",
        name="Send Google Chat Message",
        nodes=(node,),
        connections={node.id: []},
    )


def create_google_chat_batch_message_workflow(
    messages: Sequence[str],
    space_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    if not messages:
        raise ValueError("No messages given for batch send")
    space = _resolve_space(space_id, settings)
    nodes: List[WorkflowNode] = [
        _message_node(f"google-chat-message-node-{index}", space, text, index, settings)
        for index, text in enumerate(messages)
    ]
    return WorkflowDefinition(
        id="google-chat-batch-message-workflow",
        name="Send Google Chat Messages",
        nodes=tuple(nodes),
        connections=chain_connections(nodes),
    )


def create_google_chat_threaded_message_workflow(
    messages: Sequence[str],
    thread_id: str,
    space_id: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> WorkflowDefinition:
    """Post every message as a reply in the same thread, in order."""
    if not messages:
        raise ValueError("No messages given for threaded send")
    space = _resolve_space(space_id, settings)
    nodes: List[WorkflowNode] = [
        _message_node(
            f"google-chat-threaded-node-{index}",
            space,
            text,
            index,
            settings,
            threadId=thread_id,
        )
        for index, text in enumerate(messages)
    ]
    return WorkflowDefinition(
        id="google-chat-threaded-message-workflow",
        name="Send Threaded Google Chat Messages",
        nodes=tuple(nodes),
        connections=chain_connections(nodes),
    )
