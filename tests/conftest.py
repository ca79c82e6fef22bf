"""Test configuration and fixtures."""

import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from ax.fetcher import RegistryClient
from ax.logging import ROOT_LOGGER_NAME

REGISTRY_BASE = "https://registry.test/main"


@pytest.fixture(autouse=True)
def reset_ax_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME and XDG_CONFIG_HOME into tmp_path and chdir into a project dir."""
    home = tmp_path / "home"
    home.mkdir()
    project = tmp_path / "project"
    project.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("APPDATA", str(home / "AppData"))
    monkeypatch.chdir(project)
    return home


def mock_transport(files: dict[str, str | bytes], fail: bool = False) -> httpx.MockTransport:
    """Serve files relative to REGISTRY_BASE; anything else is a 404."""
    prefix = httpx.URL(REGISTRY_BASE).path.rstrip("/") + "/"

    def handler(request: httpx.Request) -> httpx.Response:
        if fail:
            raise httpx.ConnectError("connection refused", request=request)
        path = request.url.path
        key = path[len(prefix):] if path.startswith(prefix) else path.lstrip("/")
        if key in files:
            body = files[key]
            return httpx.Response(200, content=body.encode("utf-8") if isinstance(body, str) else body)
        return httpx.Response(404, text="404: Not Found")

    return httpx.MockTransport(handler)


@pytest.fixture
def make_registry() -> Callable[..., RegistryClient]:
    """Factory for a RegistryClient backed by an in-memory registry."""
    clients: list[httpx.Client] = []

    def _make(files: dict[str, str | bytes] | None = None, fail: bool = False) -> RegistryClient:
        client = httpx.Client(transport=mock_transport(files or {}, fail=fail))
        clients.append(client)
        return RegistryClient(REGISTRY_BASE, client=client)

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def offline_registry(make_registry) -> RegistryClient:
    """Registry that has nothing, so only built-in agents resolve."""
    return make_registry({})


SAMPLE_DESCRIPTOR = """\
name: python-pro
version: 2.0.0
description: Python expert
author: tester
identity:
  model: claude-3-opus
  icon: "🐍"
  system_prompt: You write idiomatic Python.
skills:
  - name: typing
    description: Type hint guidance
    allowed-tools: Read, Grep
    content: "# Typing\\nUse precise types."
mcp:
  - name: ruff
    command: uvx
    args: ["ruff-mcp"]
    env:
      RUFF_CACHE: /tmp/ruff
    setup_url: https://example.com/ruff
"""

SAMPLE_SKILL_MD = """\
---
name: clean-code
description: Keeps code tidy
license: MIT
---

# Clean Code

Prefer small functions.
"""


@pytest.fixture
def sample_descriptor() -> str:
    return SAMPLE_DESCRIPTOR


@pytest.fixture
def sample_skill_md() -> str:
    return SAMPLE_SKILL_MD
