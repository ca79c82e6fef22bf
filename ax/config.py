"""Configuration management for ~/.ax/config.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli
import tomli_w

from ax.constants import DEFAULT_REGISTRY_URL
from ax.exceptions import ConfigParseError, ConfigValidationError
from ax.paths import ax_config_path

VALID_TARGETS = ("claude", "cursor", "codex")
DEFAULT_TARGET = "claude"


@dataclass
class AxConfig:
    """User settings written by ``ax init``.

    Example:
        default_target = "claude"
        registry_url = "https://raw.githubusercontent.com/ahmed6ww/ax-agents/main"
        verbose = false
    """

    default_target: str = DEFAULT_TARGET
    registry_url: str = DEFAULT_REGISTRY_URL
    verbose: bool = False
    path: Path | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.registry_url = self.registry_url.rstrip("/")

    @classmethod
    def load(cls, path: Path | None = None) -> "AxConfig":
        """Load configuration from a TOML file.

        Args:
            path: Config file path (defaults to ~/.ax/config.toml)

        Returns:
            Parsed AxConfig

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigParseError: If the file cannot be parsed
            ConfigValidationError: If the configuration is invalid
        """
        if path is None:
            path = ax_config_path()

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigParseError(f"Failed to parse {path}: {e}") from e

        return cls._from_dict(path, data)

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AxConfig":
        """Load configuration, or return defaults if the file is absent."""
        if path is None:
            path = ax_config_path()
        if not path.exists():
            return cls(path=path)
        return cls.load(path)

    @classmethod
    def _from_dict(cls, path: Path, data: dict[str, Any]) -> "AxConfig":
        """Create an AxConfig from a parsed TOML dict."""
        target = data.get("default_target", DEFAULT_TARGET)
        if target not in VALID_TARGETS:
            raise ConfigValidationError(
                f"Invalid default_target '{target}'. "
                f"Must be one of: {', '.join(VALID_TARGETS)}"
            )

        registry_url = data.get("registry_url", DEFAULT_REGISTRY_URL)
        if not isinstance(registry_url, str) or not registry_url:
            raise ConfigValidationError("registry_url must be a non-empty string")

        verbose = data.get("verbose", False)
        if not isinstance(verbose, bool):
            raise ConfigValidationError(
                f"verbose must be a boolean, got {type(verbose).__name__}"
            )

        return cls(
            default_target=target,
            registry_url=registry_url,
            verbose=verbose,
            path=path,
        )

    def save(self, path: Path | None = None) -> Path:
        """Save configuration, creating ~/.ax if needed.

        Returns:
            The path written to
        """
        target = path or self.path or ax_config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "wb") as f:
            tomli_w.dump(self._to_dict(), f)
        self.path = target
        return target

    def _to_dict(self) -> dict[str, Any]:
        """Convert to a TOML-serializable dict."""
        return {
            "default_target": self.default_target,
            "registry_url": self.registry_url,
            "verbose": self.verbose,
        }
