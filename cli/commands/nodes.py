# cli/commands/nodes.py
"""Node type commands."""

import json
import sys

import click
import yaml

from core.errors import UnknownNodeType


@click.group()
def nodes():
    """Inspect the registered node types."""
    pass


def _engine():
    from core.config import get_settings
    from plugins import create_engine

    return create_engine(get_settings())


@nodes.command(name='list')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table', help='Output format')
def list_nodes(output_format):
    """List all available node types."""
    engine = _engine()
    definitions = engine.describe_nodes()

    if output_format == 'json':
        click.echo(json.dumps(sorted(definitions), indent=2))
        return

    click.echo("Available node types:")
    click.echo("-" * 60)
    for node_type, definition in sorted(definitions.items()):
        operations = next(
            (p.get('options') or [] for p in definition['properties'] if p['name'] == 'operation'),
            [],
        )
        click.echo(f"📦 {node_type} - {definition['description']}")
        if operations:
            click.echo(f"   Operations: {', '.join(o['value'] for o in operations)}")


@nodes.command()
@click.argument('node_type')
@click.option('--format', 'output_format', type=click.Choice(['yaml', 'json']), default='yaml', help='Output format')
def describe(node_type, output_format):
    """Show the definition of a node type."""
    try:
        definition = _engine().get_node_definition(node_type).to_dict()
    except UnknownNodeType as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        click.echo(json.dumps(definition, indent=2))
    else:
        click.echo(yaml.dump(definition, default_flow_style=False, sort_keys=False))
