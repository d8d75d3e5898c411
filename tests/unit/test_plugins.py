"""
Tests for the plugin base classes and the plugin registry.
"""

from unittest.mock import MagicMock

import pytest

from core.workflow.models import WorkflowNode
from core.workflow.registry import NodeRegistry
from plugins import PluginRegistry, builtin_plugins, create_engine, create_node_registry
from plugins.android import AndroidPlugin
from plugins.jira import JiraClient, JiraNode, JiraPlugin


class TestPlugin:

    def test_manifest_loaded(self):
        plugin = JiraPlugin()

        assert plugin.name == "jira"
        assert plugin.manifest.version == "1.0.0"
        assert plugin.manifest.nodes == ["jira"]

    def test_manifests_match_registered_nodes(self, settings):
        for plugin in builtin_plugins(settings):
            assert sorted(plugin.manifest.nodes) == sorted(plugin.register_nodes())

    def test_node_factory_injects_client_factory(self):
        client = MagicMock()
        plugin = JiraPlugin(client_factory=lambda credentials: client)
        node = WorkflowNode(id="j", type="jira")

        instance = plugin.get_node_factory("jira")(node, {"jiraApi": {"domain": "d"}})

        assert isinstance(instance, JiraNode)
        assert instance.get_client("jiraApi") is client

    def test_client_factory_receives_credential_bag(self):
        seen = []
        plugin = JiraPlugin(client_factory=lambda credentials: seen.append(credentials))
        node = WorkflowNode(id="j", type="jira")

        plugin.get_node_factory("jira")(node, {"jiraApi": {"domain": "d"}}).get_client("jiraApi")

        assert seen == [{"domain": "d"}]

    def test_default_client_factory(self):
        client = JiraPlugin(timeout=5).client_factory({
            "domain": "https://x.atlassian.net",
            "email": "a@b.c",
            "apiToken": "t",
        })

        assert isinstance(client, JiraClient)
        assert client.timeout == 5

    def test_unknown_node_type(self):
        with pytest.raises(ValueError):
            JiraPlugin().get_node_factory("slack")

    def test_android_nodes_share_runner(self):
        plugin = AndroidPlugin()
        factory = plugin.get_node_factory("android")

        first = factory(WorkflowNode(id="a", type="android"))
        second = factory(WorkflowNode(id="b", type="android"))

        assert first.get_client() is plugin.runner
        assert second.get_client() is plugin.runner


class TestPluginRegistry:

    def test_register_nodes(self, settings):
        registry = PluginRegistry(builtin_plugins(settings)).register_nodes(NodeRegistry())

        assert sorted(registry.available_types()) == ["android", "googleChat", "googleDrive", "jira"]

    def test_lookup(self):
        plugins = PluginRegistry([JiraPlugin()])

        assert plugins.get_plugin("jira").name == "jira"
        assert plugins.get_plugin("slack") is None
        assert [m.name for m in plugins.list_plugins()] == ["jira"]

    def test_create_node_registry_with_selected_plugins(self):
        registry = create_node_registry(plugins=[AndroidPlugin()])
        assert registry.available_types() == ["android"]

    def test_create_engine_uses_settings(self, settings):
        settings.workflow_max_steps = 3
        settings.workflow_strict_start = True

        engine = create_engine(settings)

        assert engine.max_steps == 3
        assert engine.strict_start is True
        assert "jira" in engine.registry
