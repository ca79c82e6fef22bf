"""Agent bundle models.

Defines the canonical in-memory form of an agent descriptor
(``agents/<name>.yaml`` in the registry) and its parts.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ax.exceptions import DescriptorParseError

# Names become file and directory stems in every target
SAFE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


def is_safe_name(name: str) -> bool:
    """Check whether a name is usable as a file or directory stem.

    Args:
        name: Agent, skill, or tool name

    Returns:
        True if the name is non-empty and filesystem-safe
    """
    return bool(name) and bool(SAFE_NAME_PATTERN.match(name)) and ".." not in name


@dataclass(frozen=True)
class LocalSource:
    """Skill loaded from a directory on disk."""

    path: Path


@dataclass(frozen=True)
class RemoteSource:
    """Skill fetched from a registry subdirectory."""

    base_url: str


# Where a skill's scripts/, references/ and assets/ live during install
SkillSource = LocalSource | RemoteSource | None


def _require_str(data: dict[str, Any], key: str, context: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise DescriptorParseError(f"{context} missing required string field '{key}'")
    return value


def _optional_str(data: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            return ", ".join(str(item) for item in value)
        return str(value)
    return None


def _string_map(value: Any, context: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DescriptorParseError(f"{context} must be a mapping")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


@dataclass(frozen=True)
class Identity:
    """Identity configuration - becomes the system prompt."""

    system_prompt: str
    model: str | None = None
    icon: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Identity":
        """Create an Identity from a descriptor mapping."""
        if not isinstance(data, dict):
            raise DescriptorParseError("Agent 'identity' must be a mapping")
        return cls(
            system_prompt=_require_str(data, "system_prompt", "Identity"),
            model=_optional_str(data, "model"),
            icon=_optional_str(data, "icon"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a descriptor mapping."""
        result: dict[str, Any] = {}
        if self.model is not None:
            result["model"] = self.model
        if self.icon is not None:
            result["icon"] = self.icon
        result["system_prompt"] = self.system_prompt
        return result


@dataclass(frozen=True)
class Skill:
    """A knowledge unit, installed as its own file or directory.

    Attributes:
        name: Skill name, used as directory/file name and lookup key
        content: Markdown body
        description: Short description used by the editor to pick the skill
        allowed_tools: Free-form tool allow list (skill standard field)
        license: License string
        compatibility: Compatibility note
        dependencies: Free-form dependency note
        metadata: Extra string-to-string metadata
        source: Transient locator for auxiliary subdirectories; never serialized
    """

    name: str
    content: str
    description: str | None = None
    allowed_tools: str | None = None
    license: str | None = None
    compatibility: str | None = None
    dependencies: str | None = None
    metadata: dict[str, str] | None = None
    source: SkillSource = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "Skill":
        """Create a Skill from a descriptor or frontmatter mapping.

        Accepts both ``allowed-tools`` (skill standard) and ``allowed_tools``.
        """
        if not isinstance(data, dict):
            raise DescriptorParseError("Each skill must be a mapping")
        name = _require_str(data, "name", "Skill")
        if not is_safe_name(name):
            raise DescriptorParseError(f"Skill name '{name}' is not a valid file name")
        content = data.get("content")
        if not isinstance(content, str):
            raise DescriptorParseError(f"Skill '{name}' missing required string field 'content'")
        metadata = data.get("metadata")
        return cls(
            name=name,
            content=content,
            description=_optional_str(data, "description"),
            allowed_tools=_optional_str(data, "allowed-tools", "allowed_tools"),
            license=_optional_str(data, "license"),
            compatibility=_optional_str(data, "compatibility"),
            dependencies=_optional_str(data, "dependencies"),
            metadata=_string_map(metadata, f"Skill '{name}' metadata") if metadata is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a descriptor mapping (without the source locator)."""
        result: dict[str, Any] = {"name": self.name}
        for key in ("description", "allowed_tools", "license", "compatibility", "dependencies"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata is not None:
            result["metadata"] = dict(self.metadata)
        result["content"] = self.content
        return result


@dataclass(frozen=True)
class McpTool:
    """MCP tool configuration."""

    name: str
    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict)
    setup_url: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "McpTool":
        """Create an McpTool from a descriptor mapping."""
        if not isinstance(data, dict):
            raise DescriptorParseError("Each MCP tool must be a mapping")
        name = _require_str(data, "name", "MCP tool")
        args = data.get("args") or []
        if not isinstance(args, list):
            raise DescriptorParseError(f"MCP tool '{name}' args must be a list")
        return cls(
            name=name,
            command=_require_str(data, "command", f"MCP tool '{name}'"),
            args=tuple(str(arg) for arg in args),
            env=_string_map(data.get("env"), f"MCP tool '{name}' env"),
            setup_url=_optional_str(data, "setup_url"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a descriptor mapping."""
        result: dict[str, Any] = {
            "name": self.name,
            "command": self.command,
            "args": list(self.args),
            "env": dict(self.env),
        }
        if self.setup_url is not None:
            result["setup_url"] = self.setup_url
        return result


@dataclass(frozen=True)
class AgentSummary:
    """Minimal agent info for registry listing."""

    name: str
    version: str
    description: str
    author: str

    @classmethod
    def from_dict(cls, data: Any) -> "AgentSummary":
        """Create an AgentSummary from a registry.json entry."""
        if not isinstance(data, dict):
            raise DescriptorParseError("Registry entries must be mappings")
        return cls(
            name=_require_str(data, "name", "Registry entry"),
            version=str(data.get("version", "")),
            description=str(data.get("description", "")),
            author=str(data.get("author", "")),
        )

    def to_dict(self) -> dict[str, str]:
        """Convert to a registry.json entry."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "author": self.author,
        }


@dataclass(frozen=True)
class Agent:
    """An installable agent bundle matching the agent.yaml schema."""

    name: str
    version: str
    description: str
    author: str
    identity: Identity
    skills: tuple[Skill, ...] = ()
    mcp: tuple[McpTool, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Agent":
        """Create an Agent from a parsed descriptor.

        Args:
            data: Mapping loaded from agent YAML

        Returns:
            The parsed Agent

        Raises:
            DescriptorParseError: If required fields are missing or invalid,
                or if two MCP tools share a name
        """
        if not isinstance(data, dict):
            raise DescriptorParseError("Agent descriptor must be a mapping")

        name = _require_str(data, "name", "Agent")
        if not is_safe_name(name):
            raise DescriptorParseError(f"Agent name '{name}' is not a valid file name")

        skills_data = data.get("skills") or []
        mcp_data = data.get("mcp") or []
        if not isinstance(skills_data, list):
            raise DescriptorParseError(f"Agent '{name}' skills must be a list")
        if not isinstance(mcp_data, list):
            raise DescriptorParseError(f"Agent '{name}' mcp must be a list")

        tools = tuple(McpTool.from_dict(item) for item in mcp_data)
        seen: set[str] = set()
        for tool in tools:
            if tool.name in seen:
                raise DescriptorParseError(
                    f"Agent '{name}' declares MCP tool '{tool.name}' more than once"
                )
            seen.add(tool.name)

        return cls(
            name=name,
            version=str(_require_field(data, "version", name)),
            description=str(_require_field(data, "description", name)),
            author=str(_require_field(data, "author", name)),
            identity=Identity.from_dict(data.get("identity")),
            skills=tuple(Skill.from_dict(item) for item in skills_data),
            mcp=tools,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a descriptor mapping."""
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "identity": self.identity.to_dict(),
            "skills": [skill.to_dict() for skill in self.skills],
            "mcp": [tool.to_dict() for tool in self.mcp],
        }

    def summary(self) -> AgentSummary:
        """Return the listing row for this agent."""
        return AgentSummary(
            name=self.name,
            version=self.version,
            description=self.description,
            author=self.author,
        )


def _require_field(data: dict[str, Any], key: str, agent_name: str) -> Any:
    if data.get(key) is None:
        raise DescriptorParseError(f"Agent '{agent_name}' missing required field '{key}'")
    return data[key]
