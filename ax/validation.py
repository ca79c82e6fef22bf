"""Checks for executables that an agent's MCP tools launch."""

import shutil

from ax.core.agent import Agent

INSTALL_HINTS = {
    "docker": "Install Docker: https://docs.docker.com/get-docker/",
    "cargo": "Install Rust: https://rustup.rs/",
    "npm": "Install Node.js: https://nodejs.org/",
    "npx": "Install Node.js: https://nodejs.org/",
    "python": "Install Python: https://www.python.org/downloads/",
    "python3": "Install Python: https://www.python.org/downloads/",
    "go": "Install Go: https://go.dev/dl/",
    "uv": "Install uv: pip install uv",
}


def is_tool_available(command: str) -> bool:
    """Check if a command is available on PATH."""
    return shutil.which(command) is not None


def check_agent_dependencies(agent: Agent) -> list[str]:
    """Return the tool commands that are not on PATH.

    Args:
        agent: Agent whose MCP tools are checked

    Returns:
        Missing commands, deduplicated, in declaration order
    """
    missing: list[str] = []
    for tool in agent.mcp:
        if tool.command not in missing and not is_tool_available(tool.command):
            missing.append(tool.command)
    return missing


def get_install_hint(command: str) -> str | None:
    """Installation hint for a well-known command, if any."""
    return INSTALL_HINTS.get(command)
