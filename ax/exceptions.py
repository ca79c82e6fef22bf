"""Shared exception classes for ax."""


class AxError(Exception):
    """Base exception for ax errors."""


class AgentNotFoundError(AxError):
    """Raised when a name cannot be resolved by any registry tier."""


class RegistryConnectionError(AxError):
    """Raised when the registry host cannot be reached."""


class DescriptorParseError(AxError):
    """Raised when an agent descriptor is malformed."""


class ConfigDirNotFoundError(AxError):
    """Raised when a required platform directory cannot be resolved."""


class ConfigParseError(AxError):
    """Raised when ~/.ax/config.toml cannot be parsed."""


class ConfigValidationError(AxError):
    """Raised when ~/.ax/config.toml contains invalid settings."""


class ToolConfigParseError(AxError):
    """Raised when an existing editor tool config cannot be merged into."""
