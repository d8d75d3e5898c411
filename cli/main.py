# cli/main.py
"""Main CLI entry point for agent-lazy-x1."""

import click

from core import __version__
from core.config import get_settings
from core.logging import configure_logging


@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', default=None, help='Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)')
@click.option('--json-logs/--console-logs', default=None, help='Emit JSON log lines on stderr')
def cli(log_level, json_logs):
    """agent-lazy-x1 - Jira, Android build and Google Workspace tools over MCP."""
    settings = get_settings()
    configure_logging(
        level=log_level or settings.log_level,
        json_logs=settings.log_json if json_logs is None else json_logs,
    )


# Import and register command groups
def register_commands():
    """Register all CLI command groups."""
    from cli.commands.serve import serve
    cli.add_command(serve)

    from cli.commands.workflow import workflow
    cli.add_command(workflow)

    from cli.commands.nodes import nodes
    cli.add_command(nodes)

    from cli.commands.tools import tools
    cli.add_command(tools)


# Register all commands
register_commands()


if __name__ == '__main__':
    cli()
