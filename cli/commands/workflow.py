# cli/commands/workflow.py
"""Workflow commands: run and validate definition files."""

import asyncio
import json
import sys
from pathlib import Path
from typing import List

import click

from core.config import get_settings
from core.errors import WorkflowError
from core.workflow.models import WorkflowDefinition


@click.group()
def workflow():
    """Run and validate workflow definitions (YAML or JSON)."""
    pass


def _load(workflow_file: Path) -> WorkflowDefinition:
    try:
        return WorkflowDefinition.from_yaml(workflow_file.read_text())
    except WorkflowError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)


def _problems(definition: WorkflowDefinition) -> List[str]:
    from plugins import create_engine

    engine = create_engine(get_settings())
    problems = definition.validate()

    for node in definition.nodes:
        if node.type not in engine.registry:
            problems.append(f"Unknown node type '{node.type}' on node {node.id}")

    if not definition.nodes:
        problems.append("Workflow has no nodes")
    else:
        try:
            engine.find_start_node(definition)
        except WorkflowError as e:
            problems.append(str(e))

    return problems


@workflow.command()
@click.argument('workflow_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--input', '-i', 'input_json', default='{}', help='Input data as a JSON object')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def run(workflow_file: Path, input_json: str, verbose: bool):
    """Run a workflow definition file and print the execution record."""
    from plugins import create_engine

    try:
        input_data = json.loads(input_json)
    except json.JSONDecodeError as e:
        click.echo(f"❌ --input is not valid JSON: {e}", err=True)
        sys.exit(1)
    if not isinstance(input_data, dict):
        click.echo("❌ --input must be a JSON object", err=True)
        sys.exit(1)

    definition = _load(workflow_file)
    if verbose:
        click.echo(f"📁 Loaded {definition.name} ({len(definition.nodes)} nodes)", err=True)

    engine = create_engine(get_settings())
    execution = asyncio.run(engine.execute_workflow(definition, input_data))

    click.echo(json.dumps(execution.to_dict(), indent=2, default=str))

    if not execution.is_success:
        click.echo(f"❌ Workflow failed: {execution.error}", err=True)
        sys.exit(1)
    if verbose:
        click.echo(f"✅ Workflow completed in {execution.duration:.2f}s", err=True)


@workflow.command()
@click.argument('workflow_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(workflow_file: Path):
    """Check a workflow definition file without running it."""
    definition = _load(workflow_file)
    problems = _problems(definition)

    if problems:
        click.echo(f"❌ {workflow_file.name} has {len(problems)} problem(s):")
        for problem in problems:
            click.echo(f"  • {problem}")
        sys.exit(1)

    click.echo(f"✅ {workflow_file.name} is valid ({len(definition.nodes)} nodes)")
