"""Orchestrator for coordinating agent installation.

Sequences resolve -> dependency check -> identity -> skills -> tools
against one installer adapter. Steps run in order and stop at the first
error; files written by earlier steps are left in place.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ax.adapters import InstallerAdapter, Target, TargetFormat, get_adapter
from ax.core.agent import Agent, is_safe_name
from ax.exceptions import AxError
from ax.logging import get_logger
from ax.resolver import Resolver
from ax.validation import check_agent_dependencies

logger = get_logger("orchestrator")


class InstallStep(Enum):
    """Steps reported to progress callbacks."""

    IDENTITY = "identity"
    SKILLS = "skills"
    TOOLS = "tools"


# Called after each completed step with a short status message
StepCallback = Callable[[InstallStep, str], None]
AdapterFactory = Callable[[Target, bool], InstallerAdapter]


@dataclass
class InstallResult:
    """Result of an install operation."""

    agent: Agent
    target: Target
    target_format: TargetFormat
    missing_dependencies: list[str] = field(default_factory=list)
    setup_notes: list[tuple[str, str]] = field(default_factory=list)


class Orchestrator:
    """Coordinates the install/uninstall pipeline for agents.

    Args:
        resolver: Resolves agent names to Agent bundles
        adapter_factory: Builds the adapter for a target and scope
    """

    def __init__(
        self,
        resolver: Resolver,
        adapter_factory: AdapterFactory = get_adapter,
    ) -> None:
        self._resolver = resolver
        self._adapter_factory = adapter_factory

    @property
    def resolver(self) -> Resolver:
        return self._resolver

    def resolve(self, name: str) -> Agent:
        """Resolve a name without installing anything."""
        return self._resolver.resolve(name)

    def install(
        self,
        name: str,
        target: Target,
        global_install: bool = False,
        on_step: StepCallback | None = None,
    ) -> InstallResult:
        """Resolve an agent and install it into a target.

        Args:
            name: Agent or skill name, or a local path
            target: Editor to install into
            global_install: Use the editor's user-wide directory
            on_step: Optional progress callback

        Returns:
            InstallResult describing what was installed

        Raises:
            AgentNotFoundError: If the name cannot be resolved
            AxError: If an adapter rejects the install
            OSError: If writing to the editor's directory fails
        """
        agent = self.resolve(name)
        return self.install_agent(agent, target, global_install, on_step)

    def install_agent(
        self,
        agent: Agent,
        target: Target,
        global_install: bool = False,
        on_step: StepCallback | None = None,
    ) -> InstallResult:
        """Install an already-resolved agent into a target."""
        missing = check_agent_dependencies(agent)
        if missing:
            logger.debug("Missing tool commands for '%s': %s", agent.name, ", ".join(missing))

        adapter = self._adapter_factory(target, global_install)
        fmt = adapter.format

        def report(step: InstallStep, message: str) -> None:
            logger.debug("[%s] %s: %s", fmt.name, step.value, message)
            if on_step is not None:
                on_step(step, message)

        adapter.install_identity(agent)
        if fmt.supports_identity:
            report(InstallStep.IDENTITY, "Identity installed")
        else:
            report(InstallStep.IDENTITY, f"{fmt.display_name} has no identity concept, skipped")

        if agent.skills:
            if fmt.supports_separate_skill_files:
                adapter.install_skills(agent)
                report(InstallStep.SKILLS, f"{len(agent.skills)} skill(s) installed")
            else:
                report(InstallStep.SKILLS, "Skills included in the identity document")

        if agent.mcp:
            adapter.install_tools(agent)
            report(InstallStep.TOOLS, f"{len(agent.mcp)} MCP tool(s) configured")

        return InstallResult(
            agent=agent,
            target=target,
            target_format=fmt,
            missing_dependencies=missing,
            setup_notes=[(tool.name, tool.setup_url) for tool in agent.mcp if tool.setup_url],
        )

    def uninstall(self, name: str, target: Target, global_install: bool = False) -> TargetFormat:
        """Remove an agent's identity and skills from a target.

        Tool-config entries are kept since other agents may share them.

        Returns:
            Format of the target the agent was removed from

        Raises:
            AxError: If the name is not a valid agent name
        """
        if not is_safe_name(name):
            raise AxError(f"Invalid agent name '{name}'")
        adapter = self._adapter_factory(target, global_install)
        adapter.uninstall(name)
        return adapter.format
