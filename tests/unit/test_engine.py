"""
Tests for core.workflow.engine.

Covers start node resolution, chain walking, data threading, failure
handling and the optional guards.
"""

import pytest

from core.errors import AmbiguousStartNode, NoStartNode, UnknownNodeType
from core.workflow.engine import WorkflowEngine
from core.workflow.models import ExecutionStatus, NodeExecuteResult
from core.workflow.node import Node, NodeDefinition
from core.workflow.registry import NodeRegistry

from conftest import RecordingParameters, make_workflow


# ============================================================================
# START NODE
# ============================================================================

class TestFindStartNode:

    def test_single_unreferenced_node(self, engine):
        workflow = make_workflow(
            [{"id": "b", "type": "echo"}, {"id": "a", "type": "echo"}],
            {"a": ["b"]},
        )
        assert engine.find_start_node(workflow).id == "a"

    def test_every_node_is_a_target(self, engine):
        workflow = make_workflow(
            [{"id": "a", "type": "echo"}, {"id": "b", "type": "echo"}],
            {"a": ["b"], "b": ["a"]},
        )
        with pytest.raises(NoStartNode):
            engine.find_start_node(workflow)

    def test_single_self_loop(self, engine):
        workflow = make_workflow([{"id": "a", "type": "echo"}], {"a": ["a"]})
        with pytest.raises(NoStartNode):
            engine.find_start_node(workflow)

    def test_empty_workflow(self, engine):
        with pytest.raises(NoStartNode):
            engine.find_start_node(make_workflow([]))

    def test_first_declared_wins_by_default(self, engine):
        workflow = make_workflow([{"id": "x", "type": "echo"}, {"id": "y", "type": "echo"}])
        assert engine.find_start_node(workflow).id == "x"

    def test_strict_mode_rejects_several_candidates(self, registry):
        engine = WorkflowEngine(registry, strict_start=True)
        workflow = make_workflow([{"id": "x", "type": "echo"}, {"id": "y", "type": "echo"}])

        with pytest.raises(AmbiguousStartNode) as exc_info:
            engine.find_start_node(workflow)
        assert exc_info.value.candidates == ["x", "y"]


# ============================================================================
# EXECUTION
# ============================================================================

class TestExecuteWorkflow:

    @pytest.mark.asyncio
    async def test_echo_single_node(self, engine):
        workflow = make_workflow([{"id": "n1", "type": "echo"}])

        execution = await engine.execute_workflow(workflow, {"x": 1})

        assert execution.status == ExecutionStatus.SUCCESS
        assert execution.data == {"x": 1}
        assert execution.error is None
        assert execution.end_time is not None
        assert execution.node_executions == ["n1"]

    @pytest.mark.asyncio
    async def test_failure_stops_the_chain(self, engine, spy_calls):
        workflow = make_workflow(
            [
                {"id": "n1", "type": "fail", "parameters": {"error": "boom"}},
                {"id": "n2", "type": "spy"},
            ],
            {"n1": ["n2"]},
        )

        execution = await engine.execute_workflow(workflow, {})

        assert execution.status == ExecutionStatus.ERROR
        assert "boom" in execution.error
        assert spy_calls == []
        assert execution.node_executions == ["n1"]

    @pytest.mark.asyncio
    async def test_only_first_successor_runs(self, engine, spy_calls):
        workflow = make_workflow(
            [
                {"id": "root", "type": "echo"},
                {"id": "first", "type": "spy"},
                {"id": "second", "type": "spy"},
                {"id": "third", "type": "spy"},
            ],
            {"root": ["first", "second", "third"]},
        )

        execution = await engine.execute_workflow(workflow)

        assert execution.is_success
        assert spy_calls == ["first"]
        assert execution.data == {"spied": "first"}

    @pytest.mark.asyncio
    async def test_chain_threads_data(self, engine):
        workflow = make_workflow(
            [
                {"id": "a", "type": "set", "parameters": {"values": {"a": 1, "shared": "a"}}},
                {"id": "b", "type": "set", "parameters": {"values": {"b": 2, "shared": "b"}}},
                {"id": "c", "type": "set", "parameters": {"values": {"c": 3}}},
            ],
            {"a": ["b"], "b": ["c"]},
        )

        execution = await engine.execute_workflow(workflow, {"input": True, "shared": "input"})

        assert execution.is_success
        assert execution.data == {"input": True, "a": 1, "b": 2, "c": 3, "shared": "b"}
        assert execution.node_executions == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_no_start_node_is_recorded_not_raised(self, engine):
        workflow = make_workflow(
            [{"id": "a", "type": "echo"}, {"id": "b", "type": "echo"}],
            {"a": ["b"], "b": ["a"]},
        )

        execution = await engine.execute_workflow(workflow, {"x": 1})

        assert execution.status == ExecutionStatus.ERROR
        assert execution.error == "No start node found in workflow"
        assert execution.node_executions == []

    @pytest.mark.asyncio
    async def test_unknown_node_type(self, engine):
        execution = await engine.execute_workflow(make_workflow([{"id": "a", "type": "mystery"}]))

        assert execution.status == ExecutionStatus.ERROR
        assert "mystery" in execution.error

    @pytest.mark.asyncio
    async def test_raising_node_becomes_error(self, engine, spy_calls):
        workflow = make_workflow(
            [{"id": "a", "type": "raise"}, {"id": "b", "type": "spy"}],
            {"a": ["b"]},
        )

        execution = await engine.execute_workflow(workflow)

        assert execution.status == ExecutionStatus.ERROR
        assert "kaboom" in execution.error
        assert spy_calls == []

    @pytest.mark.asyncio
    async def test_unknown_connection_target_ends_chain(self, engine):
        workflow = make_workflow([{"id": "a", "type": "echo"}], {"a": ["ghost"]})

        execution = await engine.execute_workflow(workflow, {"x": 1})

        assert execution.is_success
        assert execution.data == {"x": 1}

    @pytest.mark.asyncio
    async def test_credentials_come_from_the_node(self, registry):
        seen = {}

        class CredentialNode(Node):
            def describe(self):
                return NodeDefinition(name="cred", display_name="Cred", description="", group=["test"])

            async def execute(self, input_data):
                seen.update(self.credentials)
                return NodeExecuteResult.ok(input_data)

        registry.register("cred", CredentialNode)
        workflow = make_workflow([{"id": "a", "type": "cred", "credentials": {"api": {"key": "k"}}}])

        await WorkflowEngine(registry).execute_workflow(workflow)

        assert seen == {"api": {"key": "k"}}

    @pytest.mark.asyncio
    async def test_input_is_not_mutated(self, engine):
        input_data = {"x": 1}
        workflow = make_workflow([{"id": "a", "type": "set", "parameters": {"values": {"y": 2}}}])

        await engine.execute_workflow(workflow, input_data)

        assert input_data == {"x": 1}


class TestStepLimit:

    @pytest.mark.asyncio
    async def test_cycle_stops_at_limit(self, registry, spy_calls):
        engine = WorkflowEngine(registry, max_steps=5)
        workflow = make_workflow(
            [{"id": "start", "type": "echo"}, {"id": "a", "type": "spy"}, {"id": "b", "type": "spy"}],
            {"start": ["a"], "a": ["b"], "b": ["a"]},
        )

        execution = await engine.execute_workflow(workflow)

        assert execution.status == ExecutionStatus.ERROR
        assert "5" in execution.error
        assert len(execution.node_executions) == 5
        assert spy_calls == ["a", "b", "a", "b"]

    @pytest.mark.asyncio
    async def test_limit_not_hit_by_short_chain(self, registry):
        engine = WorkflowEngine(registry, max_steps=2)
        workflow = make_workflow([{"id": "a", "type": "echo"}, {"id": "b", "type": "echo"}], {"a": ["b"]})

        execution = await engine.execute_workflow(workflow, {"x": 1})

        assert execution.is_success


# ============================================================================
# SCHEMAS
# ============================================================================

class TestNodeSchemas:

    @pytest.mark.asyncio
    async def test_declared_parameters_cover_parameters_read(self, engine):
        parameters = RecordingParameters(values={"y": 2})
        workflow = make_workflow([{"id": "a", "type": "set", "parameters": parameters}])

        execution = await engine.execute_workflow(workflow, {})

        assert execution.is_success
        declared = set(engine.get_node_definition("set").parameter_names)
        assert parameters.read
        assert parameters.read <= declared

    def test_describe_nodes(self, engine):
        described = engine.describe_nodes()

        assert set(described) == {"echo", "set", "fail", "raise", "spy"}
        assert described["set"]["properties"][0]["name"] == "values"

    def test_unknown_definition(self, engine):
        with pytest.raises(UnknownNodeType):
            engine.get_node_definition("mystery")

    def test_available_node_types(self):
        registry = NodeRegistry()
        assert WorkflowEngine(registry).available_node_types() == []
