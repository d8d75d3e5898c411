# cli/commands/tools.py
"""MCP tool commands."""

import json

import click


@click.group()
def tools():
    """Inspect the tools exposed over MCP."""
    pass


@tools.command(name='list')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table', help='Output format')
def list_tools(output_format):
    """List the MCP tools and their arguments."""
    from core.config import get_settings
    from plugins import create_engine
    from server import ToolServer

    settings = get_settings()
    server = ToolServer.from_engine(create_engine(settings), settings)
    available = server.list_tools()

    if output_format == 'json':
        click.echo(json.dumps([tool.model_dump(by_alias=True, exclude_none=True) for tool in available], indent=2))
        return

    click.echo("Available tools:")
    click.echo("-" * 60)
    for tool in available:
        properties = tool.inputSchema.get('properties', {})
        required = set(tool.inputSchema.get('required', []))
        arguments = ', '.join(f"{name}{'*' if name in required else ''}" for name in properties)
        click.echo(f"🔧 {tool.name}")
        click.echo(f"   {tool.description}")
        click.echo(f"   Arguments: {arguments}")
