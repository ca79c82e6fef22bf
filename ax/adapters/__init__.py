"""Installer adapters for the editors ax supports.

Public exports:
- TargetFormat: Configuration dataclass for target-specific formats
- InstallerAdapter: Protocol defining the adapter interface
- AdapterRegistry: Registry for adapter management
- AdapterNotFoundError: Exception for missing adapters
- Target: Enum of supported editors
- get_adapter: Build the adapter for a target and scope
- ClaudeAdapter, CursorAdapter, CodexAdapter: Adapter implementations
"""

from ax.adapters.base import (
    InstallerAdapter,
    TargetFormat,
    copy_skill_subdirectories,
    download_skill_subdirectories,
    merge_json_servers,
    normalize_model,
    write_skill_dir,
)
from ax.adapters.registry import AdapterNotFoundError, AdapterRegistry, Target, get_adapter

# Import adapters to trigger registration
from ax.adapters.claude import ClaudeAdapter
from ax.adapters.codex import CodexAdapter
from ax.adapters.cursor import CursorAdapter

__all__ = [
    # Base types
    "TargetFormat",
    "InstallerAdapter",
    "normalize_model",
    "write_skill_dir",
    "copy_skill_subdirectories",
    "download_skill_subdirectories",
    "merge_json_servers",
    # Registry
    "AdapterRegistry",
    "AdapterNotFoundError",
    "Target",
    "get_adapter",
    # Adapters
    "ClaudeAdapter",
    "CursorAdapter",
    "CodexAdapter",
]
