"""Codex adapter implementation.

Codex only understands skills and MCP servers:
- ~/.codex/skills/<skill>/SKILL.md   skill-standard directories, tagged
                                     with metadata.agent for uninstall
- ~/.codex/config.toml               [mcp_servers.<name>] sections

Codex has no project scope, so --global makes no difference.
"""

import shutil
from dataclasses import replace
from pathlib import Path

import tomli_w
import yaml

from ax.adapters.base import Downloader, TargetFormat, install_skill_tree
from ax.adapters.registry import AdapterRegistry
from ax.constants import SKILL_MARKER, SKILLS_SUBDIR
from ax.core.agent import Agent, McpTool
from ax.core.skill_md import split_frontmatter
from ax.fetcher import download_file
from ax.logging import get_logger
from ax.paths import codex_config_dir

logger = get_logger("adapters.codex")

MCP_SERVERS_TABLE = "mcp_servers"
# Codex has no identity document to list skills in, so each SKILL.md
# records its owner under metadata
OWNER_METADATA_KEY = "agent"


def render_server_section(tool: McpTool) -> str:
    """Render the TOML section(s) for one MCP server.

    Returns:
        ``[mcp_servers.<name>]`` with command and args, followed by an
        ``[mcp_servers.<name>.env]`` table when the tool has env vars
    """
    server: dict = {"command": tool.command}
    if tool.args:
        server["args"] = list(tool.args)
    if tool.env:
        server["env"] = dict(tool.env)
    return tomli_w.dumps({MCP_SERVERS_TABLE: {tool.name: server}})


def section_header(section: str) -> str:
    """First line of a rendered section, e.g. ``[mcp_servers.context7]``."""
    return section.split("\n", 1)[0]


class CodexAdapter:
    """Adapter for OpenAI Codex.

    Args:
        global_install: Accepted for interface parity; ignored
        root: Override for the ~/.codex directory
        downloader: Fetches auxiliary files of remote skills
    """

    def __init__(
        self,
        global_install: bool = False,
        root: Path | None = None,
        downloader: Downloader = download_file,
    ) -> None:
        self._format = TargetFormat(
            name="codex",
            display_name="Codex",
            config_dir=".codex",
            supports_identity=False,
            supports_separate_skill_files=True,
            supports_tools=True,
            tool_config_format="toml",
            next_steps=(
                "Restart Codex to load the new skills",
                "Skills are picked up automatically when relevant",
            ),
        )
        self._root = root
        self._downloader = downloader

    @property
    def format(self) -> TargetFormat:
        """Return the target format configuration."""
        return self._format

    @property
    def root(self) -> Path:
        if self._root is not None:
            return self._root
        return codex_config_dir()

    @property
    def skills_dir(self) -> Path:
        return self.root / SKILLS_SUBDIR

    @property
    def config_path(self) -> Path:
        return self.root / "config.toml"

    def install_identity(self, agent: Agent) -> None:
        # Codex has no persona document
        logger.debug("Codex has no identity concept, skipping '%s'", agent.name)

    def install_skills(self, agent: Agent) -> None:
        """Write each skill, tagging its SKILL.md metadata with the owning agent."""
        for skill in agent.skills:
            metadata = {**(skill.metadata or {}), OWNER_METADATA_KEY: agent.name}
            owned = replace(skill, metadata=metadata)
            install_skill_tree(self.skills_dir, owned, agent.description, self._downloader)

    def install_tools(self, agent: Agent) -> None:
        """Append one section per tool unless its header is already present.

        Existing sections are never edited, so re-installing is a no-op.
        """
        if not agent.mcp:
            return

        path = self.config_path
        existing = path.read_text(encoding="utf-8") if path.exists() else ""
        content = existing

        for tool in agent.mcp:
            section = render_server_section(tool)
            header = section_header(section)
            if header in content:
                logger.debug("%s already present in %s, skipping", header, path)
                continue
            content += "\n" + section

        if content == existing:
            return
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def _skill_owner(self, skill_dir: Path) -> str | None:
        """Read the owning agent from a skill's SKILL.md metadata."""
        skill_md = skill_dir / SKILL_MARKER
        if not skill_md.is_file():
            return None
        parts = split_frontmatter(skill_md.read_text(encoding="utf-8"))
        if parts is None:
            return None
        try:
            data = yaml.safe_load(parts[0])
        except yaml.YAMLError:
            logger.debug("Unreadable frontmatter in %s", skill_md)
            return None
        metadata = data.get("metadata") if isinstance(data, dict) else None
        if not isinstance(metadata, dict):
            return None
        owner = metadata.get(OWNER_METADATA_KEY)
        return owner if isinstance(owner, str) else None

    def uninstall(self, agent_name: str) -> None:
        """Remove skills/<agent_name> and every skill owned by the agent."""
        if not self.skills_dir.is_dir():
            return
        for skill_dir in self.skills_dir.iterdir():
            if not skill_dir.is_dir():
                continue
            if skill_dir.name == agent_name or self._skill_owner(skill_dir) == agent_name:
                logger.debug("Removing %s", skill_dir)
                shutil.rmtree(skill_dir)


# Register the adapter
AdapterRegistry.register("codex", CodexAdapter)
