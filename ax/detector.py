"""Detection of installed editors for ``ax init``."""

import shutil
from dataclasses import dataclass
from pathlib import Path

from ax.exceptions import ConfigDirNotFoundError
from ax.logging import get_logger
from ax.paths import claude_config_dir, codex_config_dir, cursor_config_dir

logger = get_logger("detector")


@dataclass(frozen=True)
class DetectedEditor:
    """Detection result for one editor.

    Attributes:
        name: Target name ("claude", "cursor", "codex") or "vscode"
        display_name: Human-readable editor name
        detected: Whether the editor appears to be installed
        config_dir: Directory that signalled the editor, if any
    """

    name: str
    display_name: str
    detected: bool
    config_dir: Path | None = None


def _existing(resolve) -> Path | None:
    try:
        path = resolve()
    except ConfigDirNotFoundError as e:
        logger.debug("Skipping directory check: %s", e)
        return None
    return path if path.exists() else None


def detect_editors(cwd: Path | None = None) -> list[DetectedEditor]:
    """Detect Claude Code, Cursor, Codex and VS Code.

    Args:
        cwd: Project directory checked for a local .cursor (defaults to cwd)

    Returns:
        One entry per editor, in display order
    """
    if cwd is None:
        cwd = Path.cwd()

    claude_dir = _existing(claude_config_dir)
    cursor_dir = _existing(cursor_config_dir)
    if cursor_dir is None and (cwd / ".cursor").exists():
        cursor_dir = cwd / ".cursor"
    codex_dir = _existing(codex_config_dir)

    return [
        DetectedEditor("claude", "Claude Code", claude_dir is not None, claude_dir),
        DetectedEditor("cursor", "Cursor", cursor_dir is not None, cursor_dir),
        DetectedEditor("codex", "Codex", codex_dir is not None, codex_dir),
        DetectedEditor("vscode", "VS Code", shutil.which("code") is not None),
    ]


def choose_default_target(detected: list[DetectedEditor]) -> str:
    """Pick the default install target from detection results.

    Prefers Claude Code, then Cursor, then Codex; Claude Code is the
    default when nothing is detected.
    """
    found = {editor.name for editor in detected if editor.detected}
    for target in ("claude", "cursor", "codex"):
        if target in found:
            return target
    return "claude"
