"""Cross-platform resolution of editor and ax configuration directories."""

import os
import sys
from pathlib import Path

from ax.constants import AX_DIR_NAME, CONFIG_FILENAME
from ax.exceptions import ConfigDirNotFoundError


def home_dir() -> Path:
    """Return the user's home directory.

    Raises:
        ConfigDirNotFoundError: If the home directory cannot be determined
    """
    try:
        return Path.home()
    except RuntimeError as e:
        raise ConfigDirNotFoundError("Could not find home directory") from e


def user_config_dir() -> Path:
    """Return the platform's per-user configuration root.

    Linux honours XDG_CONFIG_HOME, Windows uses APPDATA and macOS uses
    ~/Library/Application Support.
    """
    if sys.platform == "darwin":
        return home_dir() / "Library" / "Application Support"
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigDirNotFoundError("APPDATA is not set")
        return Path(appdata)
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home_dir() / ".config"


def ax_config_dir() -> Path:
    """Directory holding ax's own settings (~/.ax)."""
    return home_dir() / AX_DIR_NAME


def ax_config_path() -> Path:
    """Path to ~/.ax/config.toml."""
    return ax_config_dir() / CONFIG_FILENAME


def claude_config_dir() -> Path:
    """Global Claude Code directory.

    Linux prefers $XDG_CONFIG_HOME/claude when it already exists and
    otherwise falls back to ~/.claude.
    """
    if sys.platform == "darwin":
        return user_config_dir() / "Claude"
    if sys.platform == "win32":
        return user_config_dir() / "Claude"
    xdg_claude = user_config_dir() / "claude"
    if xdg_claude.exists():
        return xdg_claude
    return home_dir() / ".claude"


def claude_mcp_config_path() -> Path:
    """Global Claude tool-config document (config.json)."""
    if sys.platform in ("darwin", "win32"):
        return user_config_dir() / "Claude" / "config.json"
    return user_config_dir() / "claude" / "config.json"


def cursor_config_dir() -> Path:
    """Global Cursor directory."""
    return user_config_dir() / "Cursor"


def codex_config_dir() -> Path:
    """Codex directory (~/.codex); Codex has no project scope."""
    return home_dir() / ".codex"
