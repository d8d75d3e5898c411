"""Google Chat workflow node."""

from typing import Any, List

from core.workflow.models import NodeExecuteResult, WorkflowData
from core.workflow.node import (
    CredentialDefinition,
    NodeDefinition,
    NodeParameter,
    ParameterType,
)
from plugins.base import PluginNode


def split_identifiers(value: Any) -> List[str]:
    """Accept a list or a comma separated string of user identifiers."""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(item).strip() for item in value if str(item).strip()]


class GoogleChatNode(PluginNode):
    """Post a message to a Google Chat space."""

    def describe(self) -> NodeDefinition:
        return NodeDefinition(
            name="googleChat",
            display_name="Google Chat",
            description="Send messages to Google Chat spaces",
            group=["output", "communication"],
            defaults={"name": "Google Chat"},
            properties=[
                NodeParameter(
                    name="operation",
                    display_name="Operation",
                    type=ParameterType.OPTIONS,
                    default="sendMessage",
                    required=True,
                    options=[{"name": "Send Message", "value": "sendMessage"}],
                ),
                NodeParameter(
                    name="spaceId",
                    display_name="Space ID",
                    type=ParameterType.STRING,
                    default="",
                    required=True,
                    description="e.g. spaces/AAAA1234",
                ),
                NodeParameter(
                    name="messageText",
                    display_name="Message",
                    type=ParameterType.STRING,
                    default="",
                    required=True,
                ),
                NodeParameter(
                    name="threadId",
                    display_name="Thread ID",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="url",
                    display_name="URL",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="urlText",
                    display_name="URL Text",
                    type=ParameterType.STRING,
                    default="",
                ),
                NodeParameter(
                    name="tagUsers",
                    display_name="Tag Users",
                    type=ParameterType.STRING,
                    default="",
                    description="Comma separated emails, names or numeric user ids",
                ),
                NodeParameter(
                    name="tagAll",
                    display_name="Tag All",
                    type=ParameterType.BOOLEAN,
                    default=False,
                ),
            ],
            credentials=[
                CredentialDefinition(
                    name="googleChatServiceAccount",
                    display_name="Google Chat Service Account",
                    properties=[
                        NodeParameter("serviceAccountPath", "Service Account File", ParameterType.STRING, required=True),
                    ],
                )
            ],
            icon="googleChat.svg",
        )

    async def execute(self, input_data: WorkflowData) -> NodeExecuteResult:
        operation = self.get_parameter("operation", "sendMessage")
        if operation != "sendMessage":
            return self.failure(f"Unsupported operation: {operation}")

        try:
            self.validate_required_credentials()
            self.validate_required_parameters(["spaceId", "messageText"])
            client = self.get_client("googleChatServiceAccount")

            message = await client.send_message(
                self.get_parameter("spaceId"),
                self.get_parameter("messageText"),
                thread_id=self.get_parameter("threadId") or None,
                url=self.get_parameter("url") or None,
                url_text=self.get_parameter("urlText") or None,
                tag_users=split_identifiers(self.get_parameter("tagUsers")),
                tag_all=bool(self.get_parameter("tagAll", False)),
            )
            return self.success(input_data, {"operation": operation, "message": message})

        except Exception as e:
            return self.failure(e)
