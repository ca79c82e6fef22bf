"""Registry transport for agents, skills, and skill assets."""

from ax.fetcher.download import DEFAULT_TIMEOUT, RegistryClient, download_file
from ax.fetcher.types import FetchResult, FetchStatus

__all__ = [
    # Types
    "FetchStatus",
    "FetchResult",
    # Download operations
    "RegistryClient",
    "download_file",
    "DEFAULT_TIMEOUT",
]
