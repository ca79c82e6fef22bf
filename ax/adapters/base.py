"""Base classes and protocols for editor installer adapters.

This module defines the core abstractions shared by the Claude Code,
Cursor and Codex adapters, plus the file helpers they have in common.
"""

import json
import shutil
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from ax.constants import REMOTE_SKILL_ASSET_CANDIDATES, SKILL_MARKER, SKILL_SUBDIRECTORIES
from ax.core.agent import Agent, LocalSource, RemoteSource, Skill
from ax.core.skill_md import render_skill_md
from ax.exceptions import ToolConfigParseError
from ax.logging import get_logger

logger = get_logger("adapters")

# Downloads one URL to a path, returning False when the file is absent
Downloader = Callable[[str, Path], bool]

MODEL_FAMILIES = ("sonnet", "opus", "haiku")
DEFAULT_MODEL_FAMILY = "sonnet"
DEFAULT_ICON = "🤖"


@dataclass(frozen=True)
class TargetFormat:
    """Target-specific format configuration.

    Attributes:
        name: Short identifier for the target (e.g., "claude", "cursor")
        display_name: Human-readable editor name (e.g., "Claude Code")
        config_dir: Name of the project config directory (e.g., ".claude")
        supports_identity: Whether the editor has a persona document
        supports_separate_skill_files: Whether each skill gets its own
            file or directory instead of being inlined into the identity
        supports_tools: Whether MCP tools can be configured
        tool_config_format: "json" or "toml"
        next_steps: Hints printed after a successful install
    """

    name: str
    display_name: str
    config_dir: str
    supports_identity: bool
    supports_separate_skill_files: bool
    supports_tools: bool
    tool_config_format: str  # "json" | "toml"
    next_steps: tuple[str, ...] = ()


@runtime_checkable
class InstallerAdapter(Protocol):
    """Protocol for editor installer adapters.

    Every operation is idempotent with respect to its own output: identity
    and skill documents are overwritten, tool configs are merged.
    """

    @property
    def format(self) -> TargetFormat:
        """Return the target format configuration."""
        ...

    def install_identity(self, agent: Agent) -> None:
        """Write the agent's persona document."""
        ...

    def install_skills(self, agent: Agent) -> None:
        """Write one document (or directory) per skill."""
        ...

    def install_tools(self, agent: Agent) -> None:
        """Merge the agent's MCP tools into the editor's tool config."""
        ...

    def uninstall(self, agent_name: str) -> None:
        """Remove identity and skill artifacts; tool config is left as-is."""
        ...


def normalize_model(model: str | None) -> str:
    """Reduce a model identifier to its family name.

    Examples:
        >>> normalize_model("claude-3-5-sonnet-latest")
        'sonnet'
        >>> normalize_model("gpt-4o")
        'gpt-4o'
    """
    if model is None:
        return DEFAULT_MODEL_FAMILY
    for family in MODEL_FAMILIES:
        if family in model:
            return family
    return model


def write_skill_dir(skills_root: Path, skill: Skill, fallback_description: str) -> Path:
    """Write ``<skills_root>/<skill>/SKILL.md``.

    Args:
        skills_root: Directory holding all skill directories
        skill: Skill to write
        fallback_description: Description used when the skill has none

    Returns:
        Path to the skill directory
    """
    skill_dir = skills_root / skill.name
    skill_dir.mkdir(parents=True, exist_ok=True)
    (skill_dir / SKILL_MARKER).write_text(
        render_skill_md(skill, fallback_description), encoding="utf-8"
    )
    return skill_dir


def copy_skill_subdirectories(source_dir: Path, dest_dir: Path) -> None:
    """Copy scripts/, references/ and assets/ from a local skill."""
    for subdir in SKILL_SUBDIRECTORIES:
        source_subdir = source_dir / subdir
        if source_subdir.is_dir():
            shutil.copytree(source_subdir, dest_dir / subdir, dirs_exist_ok=True)


def download_skill_subdirectories(
    base_url: str, dest_dir: Path, downloader: Downloader
) -> int:
    """Download the known auxiliary files of a remote skill.

    Raw file hosting cannot list directories, so only the candidate names
    are probed. Missing files are skipped; a subdirectory only appears if
    at least one of its files was downloaded.

    Returns:
        Number of files written
    """
    written = 0
    for subdir, candidates in REMOTE_SKILL_ASSET_CANDIDATES.items():
        for filename in candidates:
            url = f"{base_url}/{subdir}/{filename}"
            if downloader(url, dest_dir / subdir / filename):
                written += 1
            else:
                logger.debug("Skipped skill asset %s", url)
    return written


def install_skill_tree(
    skills_root: Path, skill: Skill, fallback_description: str, downloader: Downloader
) -> Path:
    """Write a skill-standard directory and bring along its auxiliary files."""
    skill_dir = write_skill_dir(skills_root, skill, fallback_description)
    source = skill.source
    if isinstance(source, LocalSource):
        copy_skill_subdirectories(source.path, skill_dir)
    elif isinstance(source, RemoteSource):
        download_skill_subdirectories(source.base_url, skill_dir, downloader)
    return skill_dir


def merge_json_servers(path: Path, servers_key: str, entries: dict[str, dict[str, Any]]) -> None:
    """Merge server entries into a JSON tool-config document.

    Existing entries with the same name are overwritten; every other key
    in the document is preserved.

    Args:
        path: JSON document to update (created if missing)
        servers_key: Top-level key holding the server mapping
        entries: Server name to server config

    Raises:
        ToolConfigParseError: If the existing document is not valid JSON,
            or it or its servers key is not an object
    """
    config: dict[str, Any] = {}
    if path.exists():
        text = path.read_text(encoding="utf-8")
        if text.strip():
            try:
                config = json.loads(text)
            except ValueError as e:
                raise ToolConfigParseError(f"Failed to parse {path}: {e}") from e
            if not isinstance(config, dict):
                raise ToolConfigParseError(f"{path} must contain a JSON object")

    servers = config.setdefault(servers_key, {})
    if not isinstance(servers, dict):
        raise ToolConfigParseError(f"'{servers_key}' in {path} must be a JSON object")

    for name, entry in entries.items():
        logger.debug("Setting %s.%s in %s", servers_key, name, path)
        servers[name] = entry

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
