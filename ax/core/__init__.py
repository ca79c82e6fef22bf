"""Core models for ax.

- Agent, Identity, Skill, McpTool: the canonical agent bundle
- AgentSummary: a registry listing row
- LocalSource, RemoteSource: where a skill's auxiliary files come from
- parse_skill_md / render_skill_md: SKILL.md documents
- BUILTIN_AGENTS: demo agents available without network access
"""

from ax.core.agent import (
    Agent,
    AgentSummary,
    Identity,
    LocalSource,
    McpTool,
    RemoteSource,
    Skill,
    SkillSource,
    is_safe_name,
)
from ax.core.builtins import BUILTIN_AGENTS, builtin_summaries, get_builtin_agent
from ax.core.skill_md import parse_skill_md, render_frontmatter, render_skill_md

__all__ = [
    # Models
    "Agent",
    "AgentSummary",
    "Identity",
    "Skill",
    "McpTool",
    "LocalSource",
    "RemoteSource",
    "SkillSource",
    "is_safe_name",
    # Skill documents
    "parse_skill_md",
    "render_skill_md",
    "render_frontmatter",
    # Built-ins
    "BUILTIN_AGENTS",
    "builtin_summaries",
    "get_builtin_agent",
]
