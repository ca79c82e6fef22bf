"""Centralized constants for the ax package."""

# Registry that hosts agents/, registry.json and standalone skills
DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/ahmed6ww/ax-agents/main"

# Registry path conventions
REGISTRY_INDEX_FILE = "registry.json"
AGENTS_SUBDIR = "agents"
AGENT_DESCRIPTOR_SUFFIX = ".yaml"

# Skill standard layout
SKILL_MARKER = "SKILL.md"
SKILLS_SUBDIR = "skills"
SKILL_SUBDIRECTORIES = ("scripts", "references", "assets")

# Raw file hosting cannot list directories, so remote skills are probed
# for these file names only.
REMOTE_SKILL_ASSET_CANDIDATES: dict[str, tuple[str, ...]] = {
    "scripts": ("run_ruff.py", "scaffold_test.py", "main.py", "setup.py"),
    "references": (
        "cleanup_rules.md",
        "clean_rules.md",
        "quad_strategy.md",
        "repo_strategy.md",
        "clean_arch.md",
        "REFERENCE.md",
    ),
    "assets": ("project_layout.txt", "template.json"),
}

# Synthetic agents built around a standalone skill
STANDALONE_SKILL_VERSION = "1.0.0"
STANDALONE_SKILL_AUTHOR = "community"
STANDALONE_SKILL_ICON = "📚"

# Local settings (~/.ax/config.toml)
AX_DIR_NAME = ".ax"
CONFIG_FILENAME = "config.toml"
