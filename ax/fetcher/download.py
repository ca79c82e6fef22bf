"""HTTP operations against the agent registry."""

from pathlib import Path

import httpx

from ax.constants import (
    AGENT_DESCRIPTOR_SUFFIX,
    AGENTS_SUBDIR,
    REGISTRY_INDEX_FILE,
    SKILL_MARKER,
)
from ax.fetcher.types import FetchResult, FetchStatus
from ax.logging import get_logger

logger = get_logger("fetcher")

DEFAULT_TIMEOUT = 30.0


class RegistryClient:
    """Fetches documents from a static-file agent registry.

    Layout under the base URL:
        registry.json             list of agent summaries
        agents/<name>.yaml        agent descriptors
        <name>/SKILL.md           standalone skills
        <name>/<subdir>/<file>    skill auxiliary files

    Args:
        base_url: Registry root, e.g. a raw.githubusercontent.com URL
        client: Optional preconfigured httpx client (tests pass one
            built on httpx.MockTransport)
        timeout: Request timeout in seconds for the default client
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(follow_redirects=True, timeout=timeout)

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def registry_url(self) -> str:
        return f"{self.base_url}/{REGISTRY_INDEX_FILE}"

    def agent_url(self, name: str) -> str:
        return f"{self.base_url}/{AGENTS_SUBDIR}/{name}{AGENT_DESCRIPTOR_SUFFIX}"

    def skill_base_url(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def skill_url(self, name: str) -> str:
        return f"{self.skill_base_url(name)}/{SKILL_MARKER}"

    def _get(self, url: str) -> httpx.Response:
        return self._client.get(url)

    def fetch(self, url: str) -> FetchResult:
        """Issue a single GET request.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchResult: FOUND on 2xx, ABSENT on any other status,
            ERROR if no response was received
        """
        try:
            response = self._get(url)
        except httpx.RequestError as e:
            logger.debug("Request to %s failed: %s", url, e)
            return FetchResult(url=url, status=FetchStatus.ERROR, error=str(e) or type(e).__name__)

        if not response.is_success:
            logger.debug("GET %s -> %s", url, response.status_code)
            return FetchResult(url=url, status=FetchStatus.ABSENT)

        return FetchResult(url=url, status=FetchStatus.FOUND, content=response.content)

    def download(self, url: str, dest_path: Path) -> bool:
        """Download a single file, skipping anything that is not found.

        Args:
            url: File URL
            dest_path: Where to write the file (parents are created)

        Returns:
            True if the file was written
        """
        result = self.fetch(url)
        if not result.found:
            return False
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_bytes(result.content)
        return True


def download_file(url: str, dest_path: Path) -> bool:
    """Download a single file with a short-lived client.

    Args:
        url: File URL
        dest_path: Where to write the file

    Returns:
        True if the file was written, False on non-2xx or connection failure
    """
    with httpx.Client(follow_redirects=True, timeout=DEFAULT_TIMEOUT) as client:
        return RegistryClient("", client=client).download(url, dest_path)
