# cli/commands/serve.py
"""Run the MCP server."""

import asyncio

import click

from core.config import get_settings


@click.command()
def serve():
    """Serve the agent tools over MCP on stdio."""
    from server import serve as serve_stdio

    click.echo(f"🚀 {get_settings().app_name} MCP server running on stdio", err=True)
    asyncio.run(serve_stdio(get_settings()))
