"""Cursor adapter implementation.

Output layout (under ./.cursor, or the platform Cursor directory with
--global):
- rules/<name>-identity.mdc      identity as an always-applied rule
- rules/<name>-<skill>.mdc       one rule per skill
- mcp.json                       MCP servers
"""

from pathlib import Path

from ax.adapters.base import DEFAULT_ICON, TargetFormat, merge_json_servers
from ax.adapters.registry import AdapterRegistry
from ax.core.agent import Agent
from ax.exceptions import AxError
from ax.core.skill_md import render_frontmatter
from ax.logging import get_logger
from ax.paths import cursor_config_dir

logger = get_logger("adapters.cursor")

MCP_SERVERS_KEY = "mcpServers"
RULE_SUFFIX = ".mdc"
IDENTITY_STEM = "identity"


def render_mdc(title: str, description: str, content: str) -> str:
    """Render a Cursor rule document.

    Args:
        title: Rendered as the first heading
        description: Rule description shown by Cursor
        content: Markdown body

    Returns:
        MDC text with an always-applied frontmatter header
    """
    header = render_frontmatter([
        ("description", description),
        ("globs", ""),
        ("alwaysApply", True),
    ])
    return f"{header}\n# {title}\n\n{content}\n"


class CursorAdapter:
    """Adapter for Cursor.

    Cursor has no separate skill directories; each skill becomes a rule
    file prefixed with the agent name so uninstall can find it.

    Args:
        global_install: Use the platform Cursor directory instead of ./.cursor
        root: Override for the Cursor directory
    """

    def __init__(self, global_install: bool = False, root: Path | None = None) -> None:
        self._format = TargetFormat(
            name="cursor",
            display_name="Cursor",
            config_dir=".cursor",
            supports_identity=True,
            supports_separate_skill_files=True,
            supports_tools=True,
            tool_config_format="json",
            next_steps=(
                "Restart Cursor to load the new rules",
                "The agent context will be available in Composer",
            ),
        )
        self._global = global_install
        self._root = root

    @property
    def format(self) -> TargetFormat:
        """Return the target format configuration."""
        return self._format

    @property
    def root(self) -> Path:
        if self._root is not None:
            return self._root
        if self._global:
            return cursor_config_dir()
        return Path.cwd() / self._format.config_dir

    @property
    def rules_dir(self) -> Path:
        return self.root / "rules"

    @property
    def mcp_config_path(self) -> Path:
        return self.root / "mcp.json"

    def identity_path(self, agent_name: str) -> Path:
        return self.rules_dir / f"{agent_name}-{IDENTITY_STEM}{RULE_SUFFIX}"

    def skill_path(self, agent_name: str, skill_name: str) -> Path:
        return self.rules_dir / f"{agent_name}-{skill_name}{RULE_SUFFIX}"

    def check_skill_names(self, agent: Agent) -> None:
        """Reject skills whose rule file would replace the identity rule.

        Raises:
            AxError: If a skill is named like the identity rule stem
        """
        for skill in agent.skills:
            if skill.name == IDENTITY_STEM:
                raise AxError(
                    f"Skill '{skill.name}' of agent '{agent.name}' would overwrite "
                    f"its identity rule in Cursor"
                )

    def install_identity(self, agent: Agent) -> None:
        self.check_skill_names(agent)
        icon = agent.identity.icon or DEFAULT_ICON
        path = self.identity_path(agent.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            render_mdc(f"{icon} {agent.name} Agent", agent.description, agent.identity.system_prompt),
            encoding="utf-8",
        )

    def install_skills(self, agent: Agent) -> None:
        self.check_skill_names(agent)
        self.rules_dir.mkdir(parents=True, exist_ok=True)
        for skill in agent.skills:
            description = skill.description or f"Knowledge base for {agent.name} agent"
            self.skill_path(agent.name, skill.name).write_text(
                render_mdc(f"{agent.name} - {skill.name}", description, skill.content),
                encoding="utf-8",
            )

    def install_tools(self, agent: Agent) -> None:
        if not agent.mcp:
            return
        entries = {
            tool.name: {
                "command": tool.command,
                "args": list(tool.args),
                "env": dict(tool.env),
            }
            for tool in agent.mcp
        }
        merge_json_servers(self.mcp_config_path, MCP_SERVERS_KEY, entries)

    def uninstall(self, agent_name: str) -> None:
        identity = self.identity_path(agent_name)
        if identity.exists():
            identity.unlink()

        if not self.rules_dir.is_dir():
            return
        # Skill rules share the agent-name prefix
        for path in self.rules_dir.iterdir():
            if path.name.startswith(f"{agent_name}-") and path.name.endswith(RULE_SUFFIX):
                logger.debug("Removing %s", path)
                path.unlink()


# Register the adapter
AdapterRegistry.register("cursor", CursorAdapter)
