"""Adapter registry for managing installer adapters.

Maps target names to adapter classes. Adapters register themselves at
import time; instances are built per call since they carry the
install scope.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any

from ax.exceptions import AxError

if TYPE_CHECKING:
    from ax.adapters.base import InstallerAdapter


class Target(str, Enum):
    """Editors ax can install into."""

    CLAUDE = "claude"
    CURSOR = "cursor"
    CODEX = "codex"


class AdapterNotFoundError(AxError):
    """Raised when a requested adapter is not found."""


class AdapterRegistry:
    """Registry for installer adapters.

    Usage:
        # Register adapters (done at import time by each adapter module)
        AdapterRegistry.register("claude", ClaudeAdapter)

        # Build an adapter for a scope
        adapter = AdapterRegistry.get("claude", global_install=True)

        # Get all registered adapter names
        names = AdapterRegistry.all_names()
    """

    _adapters: dict[str, type] = {}

    @classmethod
    def register(cls, name: str, adapter_class: type) -> None:
        """Register an adapter class.

        Args:
            name: Name to register the adapter under (e.g., "claude")
            adapter_class: The adapter class to register
        """
        cls._adapters[name] = adapter_class

    @classmethod
    def get(cls, target_name: str, **kwargs: Any) -> "InstallerAdapter":
        """Build an adapter instance by name.

        Args:
            target_name: Name of the target (e.g., "claude", "cursor")
            **kwargs: Passed to the adapter constructor

        Returns:
            A new adapter instance

        Raises:
            AdapterNotFoundError: If no adapter is registered for the name
        """
        if target_name not in cls._adapters:
            available = ", ".join(cls._adapters.keys()) if cls._adapters else "none"
            raise AdapterNotFoundError(
                f"No adapter registered for '{target_name}'. Available: {available}"
            )
        return cls._adapters[target_name](**kwargs)

    @classmethod
    def all_names(cls) -> list[str]:
        """Get all registered adapter names."""
        return list(cls._adapters.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered adapters.

        Primarily useful for testing.
        """
        cls._adapters.clear()


def get_adapter(target: Target | str, global_install: bool = False) -> "InstallerAdapter":
    """Build the adapter for a target and scope.

    Args:
        target: Target enum member or its name
        global_install: Install into the user-wide directory instead of
            the current project

    Returns:
        The adapter instance
    """
    name = target.value if isinstance(target, Target) else target
    return AdapterRegistry.get(name, global_install=global_install)
