"""Name resolution for ax install.

Resolves an agent name through ordered tiers, first success wins:
0. "./path" or "/path" -> local skill directory or descriptor file
1. "name" -> registry agents/<name>.yaml descriptor
2. "name" -> registry <name>/SKILL.md, wrapped into a one-skill agent
3. "name" -> built-in demo agent
"""

import json
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

import yaml

from ax.constants import (
    SKILL_MARKER,
    STANDALONE_SKILL_AUTHOR,
    STANDALONE_SKILL_ICON,
    STANDALONE_SKILL_VERSION,
)
from ax.core.agent import (
    Agent,
    AgentSummary,
    Identity,
    LocalSource,
    RemoteSource,
    Skill,
    is_safe_name,
)
from ax.core.builtins import BUILTIN_AGENTS
from ax.core.skill_md import parse_skill_md
from ax.exceptions import AgentNotFoundError, DescriptorParseError
from ax.fetcher import FetchStatus, RegistryClient
from ax.logging import get_logger

logger = get_logger("resolver")

# A tier returns an Agent, or None to fall through to the next one
ResolutionTier = Callable[[str], Agent | None]


def is_local_path(ref: str) -> bool:
    """Check if a reference is a local path."""
    return ref.startswith(("./", "../", "/", "~/"))


def parse_agent_yaml(text: str) -> Agent:
    """Parse an agent descriptor document.

    Args:
        text: YAML text

    Returns:
        The parsed Agent

    Raises:
        DescriptorParseError: If the YAML is invalid or not a valid agent
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DescriptorParseError(f"Failed to parse agent configuration: {e}") from e
    return Agent.from_dict(data)


def wrap_skill(skill: Skill, name: str | None = None) -> Agent:
    """Wrap a standalone skill into a minimal agent.

    Args:
        skill: The standalone skill
        name: Agent name, defaults to the skill name. Registry skills are
            wrapped under the requested name so uninstall finds them by it.
    """
    name = name or skill.name
    return Agent(
        name=name,
        version=STANDALONE_SKILL_VERSION,
        description=skill.description or f"Skill: {name}",
        author=STANDALONE_SKILL_AUTHOR,
        identity=Identity(
            system_prompt=f"You have the {name} skill installed.",
            icon=STANDALONE_SKILL_ICON,
        ),
        skills=(skill,),
    )


def load_local(ref: str) -> Agent:
    """Load an agent from a local skill directory or descriptor file.

    Args:
        ref: Local path (directory containing SKILL.md, or a .yaml/.yml file)

    Returns:
        The loaded Agent; local skills carry a LocalSource

    Raises:
        AgentNotFoundError: If the path does not hold a skill or descriptor
        DescriptorParseError: If a descriptor file is malformed
    """
    path = Path(ref).expanduser()

    if path.is_dir():
        skill_md = path / SKILL_MARKER
        if not skill_md.is_file():
            raise AgentNotFoundError(f"'{path}' is not a valid skill (missing {SKILL_MARKER})")
        skill = parse_skill_md(path.resolve().name, skill_md.read_text(encoding="utf-8"))
        if not is_safe_name(skill.name):
            raise AgentNotFoundError(f"'{skill.name}' is not a valid skill name")
        skill = replace(skill, source=LocalSource(path.resolve()))
        return wrap_skill(skill)

    if path.is_file() and path.suffix in (".yaml", ".yml"):
        return parse_agent_yaml(path.read_text(encoding="utf-8"))

    raise AgentNotFoundError(f"Local path '{ref}' is not a skill directory or agent descriptor")


class Resolver:
    """Resolves agent names against the registry with built-in fallbacks.

    Args:
        client: Registry client used for every remote tier
        builtins: Built-in agents keyed by name
    """

    def __init__(
        self,
        client: RegistryClient,
        builtins: dict[str, Agent] | None = None,
    ) -> None:
        self._client = client
        self._builtins = BUILTIN_AGENTS if builtins is None else builtins

    @property
    def client(self) -> RegistryClient:
        return self._client

    @property
    def tiers(self) -> list[ResolutionTier]:
        """Remote and built-in tiers in resolution order."""
        return [self.fetch_agent, self.fetch_skill_as_agent, self.builtin_agent]

    def resolve(self, name: str) -> Agent:
        """Resolve a name to an Agent.

        Args:
            name: Agent or skill name, or a local path

        Returns:
            The first Agent produced by a tier

        Raises:
            AgentNotFoundError: If the name is not filesystem-safe or no
                tier produced an agent
        """
        if is_local_path(name):
            return load_local(name)

        # Registry names become file and directory stems on install
        if not is_safe_name(name):
            raise AgentNotFoundError(f"'{name}' is not a valid agent or skill name")

        for tier in self.tiers:
            agent = tier(name)
            if agent is not None:
                logger.debug("Resolved '%s' via %s", name, tier.__name__)
                return agent

        raise AgentNotFoundError(f"Agent or skill '{name}' not found in registry")

    def fetch_agent(self, name: str) -> Agent | None:
        """Tier 1: fetch and parse agents/<name>.yaml."""
        result = self._client.fetch(self._client.agent_url(name))
        if result.status is FetchStatus.ERROR:
            logger.warning("Registry unreachable while fetching agent '%s': %s", name, result.error)
            return None
        if not result.found:
            return None

        try:
            return parse_agent_yaml(result.text)
        except DescriptorParseError as e:
            logger.warning("Ignoring malformed descriptor for '%s': %s", name, e)
            return None

    def fetch_skill_as_agent(self, name: str) -> Agent | None:
        """Tier 2: fetch <name>/SKILL.md and wrap it in a minimal agent."""
        result = self._client.fetch(self._client.skill_url(name))
        if not result.found:
            return None

        skill = parse_skill_md(name, result.text)
        skill = replace(skill, source=RemoteSource(self._client.skill_base_url(name)))
        return wrap_skill(skill, name)

    def builtin_agent(self, name: str) -> Agent | None:
        """Tier 3: exact match in the built-in table."""
        return self._builtins.get(name)

    def builtin_summaries(self) -> list[AgentSummary]:
        return [agent.summary() for agent in self._builtins.values()]

    def list_agents(self) -> list[AgentSummary]:
        """List registry agents, falling back to built-ins on any failure.

        Returns:
            Agent summaries from registry.json, or the built-in summaries if
            the registry cannot be reached or its index cannot be read
        """
        result = self._client.fetch(self._client.registry_url())
        if not result.found:
            logger.debug("Registry index unavailable (%s), using built-in agents", result.status.value)
            return self.builtin_summaries()

        try:
            data = json.loads(result.text)
            if isinstance(data, dict):
                data = data.get("agents")
            if not isinstance(data, list):
                raise DescriptorParseError("registry.json must contain a list of agents")
            return [AgentSummary.from_dict(entry) for entry in data]
        except (ValueError, DescriptorParseError) as e:
            logger.warning("Failed to parse registry response: %s", e)
            return self.builtin_summaries()
