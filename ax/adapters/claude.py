"""Claude Code adapter implementation.

Output layout (under ./.claude, or the platform Claude directory with
--global):
- agents/<name>.md           identity with YAML frontmatter
- skills/<skill>/SKILL.md    skill-standard directories
- .mcp.json / config.json    MCP servers (project / global)
"""

import shutil
from pathlib import Path

import yaml

from ax.adapters.base import (
    DEFAULT_ICON,
    Downloader,
    TargetFormat,
    install_skill_tree,
    merge_json_servers,
    normalize_model,
)
from ax.adapters.registry import AdapterRegistry
from ax.constants import SKILLS_SUBDIR
from ax.core.agent import Agent, is_safe_name
from ax.core.skill_md import render_frontmatter, split_frontmatter
from ax.fetcher import download_file
from ax.logging import get_logger
from ax.paths import claude_config_dir, claude_mcp_config_path

logger = get_logger("adapters.claude")

MCP_SERVERS_KEY = "mcpServers"
PROJECT_MCP_FILENAME = ".mcp.json"


class ClaudeAdapter:
    """Adapter for Claude Code.

    Args:
        global_install: Use the platform Claude directory instead of ./.claude
        root: Override for the Claude directory
        mcp_config_path: Override for the MCP tool-config document
        downloader: Fetches auxiliary files of remote skills
    """

    def __init__(
        self,
        global_install: bool = False,
        root: Path | None = None,
        mcp_config_path: Path | None = None,
        downloader: Downloader = download_file,
    ) -> None:
        self._format = TargetFormat(
            name="claude",
            display_name="Claude Code",
            config_dir=".claude",
            supports_identity=True,
            supports_separate_skill_files=True,
            supports_tools=True,
            tool_config_format="json",
            next_steps=(
                "Restart Claude Code to load the new agent",
                "The agent will be available in your conversations",
            ),
        )
        self._global = global_install
        self._root = root
        self._mcp_config_path = mcp_config_path
        self._downloader = downloader

    @property
    def format(self) -> TargetFormat:
        """Return the target format configuration."""
        return self._format

    @property
    def root(self) -> Path:
        if self._root is not None:
            return self._root
        if self._global:
            return claude_config_dir()
        return Path.cwd() / self._format.config_dir

    @property
    def agents_dir(self) -> Path:
        return self.root / "agents"

    @property
    def skills_dir(self) -> Path:
        return self.root / SKILLS_SUBDIR

    @property
    def mcp_config_path(self) -> Path:
        if self._mcp_config_path is not None:
            return self._mcp_config_path
        if self._root is not None:
            return self._root / PROJECT_MCP_FILENAME
        if self._global:
            return claude_mcp_config_path()
        return Path.cwd() / PROJECT_MCP_FILENAME

    def identity_path(self, agent_name: str) -> Path:
        return self.agents_dir / f"{agent_name}.md"

    def render_identity(self, agent: Agent) -> str:
        """Render agents/<name>.md: frontmatter followed by the system prompt."""
        fields: list[tuple[str, str]] = [
            ("name", agent.name),
            ("description", agent.description),
            ("model", normalize_model(agent.identity.model)),
            ("icon", agent.identity.icon or DEFAULT_ICON),
        ]
        if agent.skills:
            fields.append(("skills", ", ".join(skill.name for skill in agent.skills)))
        return render_frontmatter(fields) + "\n" + agent.identity.system_prompt

    def install_identity(self, agent: Agent) -> None:
        path = self.identity_path(agent.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_identity(agent), encoding="utf-8")

    def install_skills(self, agent: Agent) -> None:
        for skill in agent.skills:
            install_skill_tree(self.skills_dir, skill, agent.description, self._downloader)

    def install_tools(self, agent: Agent) -> None:
        if not agent.mcp:
            return
        entries = {
            tool.name: {
                "type": "stdio",
                "command": tool.command,
                "args": list(tool.args),
                "env": dict(tool.env),
            }
            for tool in agent.mcp
        }
        merge_json_servers(self.mcp_config_path, MCP_SERVERS_KEY, entries)

    def _installed_skill_names(self, identity_path: Path) -> list[str]:
        """Read the skills line of an installed identity document."""
        parts = split_frontmatter(identity_path.read_text(encoding="utf-8"))
        if parts is None:
            return []
        try:
            data = yaml.safe_load(parts[0])
        except yaml.YAMLError:
            logger.debug("Unreadable frontmatter in %s", identity_path)
            return []
        skills = data.get("skills") if isinstance(data, dict) else None
        if not isinstance(skills, str):
            return []
        return [name.strip() for name in skills.split(",") if name.strip()]

    def uninstall(self, agent_name: str) -> None:
        identity = self.identity_path(agent_name)
        skill_names = [agent_name]
        if identity.exists():
            skill_names.extend(self._installed_skill_names(identity))
            identity.unlink()

        for name in skill_names:
            if not is_safe_name(name):
                continue
            skill_dir = self.skills_dir / name
            if skill_dir.is_dir():
                shutil.rmtree(skill_dir)


# Register the adapter
AdapterRegistry.register("claude", ClaudeAdapter)
