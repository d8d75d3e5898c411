# setup.py
"""Setup script for agent-lazy-x1."""

from setuptools import setup, find_packages

setup(
    name="agent-lazy-x1",
    version="1.0.0",
    description="MCP tool server for Jira, Android release builds and Google Drive/Chat, driven by a node-chain workflow engine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "plugins": ["*/manifest.yaml"],
    },
    install_requires=[
        "click>=8.0",
        "pyyaml>=6.0",
        "aiohttp>=3.8",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "structlog>=23.1",
        "mcp>=1.0,<2",
        "google-api-python-client>=2.100",
        "google-auth>=2.20",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "black>=23.0",
            "flake8>=6.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "agent-lazy-x1=cli.main:cli",
            "lazyx1=cli.main:cli",  # Short alias
        ],
    },
    python_requires=">=3.10",
)
