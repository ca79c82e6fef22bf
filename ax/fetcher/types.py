"""Type definitions for the fetcher module."""

from dataclasses import dataclass
from enum import Enum

from ax.exceptions import RegistryConnectionError


class FetchStatus(Enum):
    """Outcome of a single registry request."""

    FOUND = "found"  # 2xx response
    ABSENT = "absent"  # any other HTTP status
    ERROR = "error"  # connection, DNS or timeout failure


@dataclass(frozen=True)
class FetchResult:
    """Result of fetching one registry resource.

    Separates "the registry does not have it" from "the registry could not
    be reached" without raising for either.
    """

    url: str
    status: FetchStatus
    content: bytes = b""
    error: str | None = None

    @property
    def found(self) -> bool:
        """Return True if the resource was retrieved."""
        return self.status is FetchStatus.FOUND

    @property
    def text(self) -> str:
        """Response body decoded as UTF-8."""
        return self.content.decode("utf-8", errors="replace")

    def raise_for_error(self) -> None:
        """Raise RegistryConnectionError if the request never got a response."""
        if self.status is FetchStatus.ERROR:
            raise RegistryConnectionError(f"Failed to connect to registry ({self.url}): {self.error}")
