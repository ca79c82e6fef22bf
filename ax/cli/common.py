"""Shared CLI utilities for ax commands."""

from contextlib import contextmanager

import typer
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner

from ax.config import AxConfig
from ax.exceptions import ConfigParseError, ConfigValidationError
from ax.fetcher import RegistryClient
from ax.logging import setup_logging

console = Console()


def print_header(title: str) -> None:
    console.print()
    console.print(f"[bold cyan]{escape(title)}[/bold cyan]")
    console.print()


def print_success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}")


def load_config() -> AxConfig:
    """Load ~/.ax/config.toml, exiting with an error if it is invalid."""
    try:
        config = AxConfig.load_or_default()
    except (ConfigParseError, ConfigValidationError) as e:
        print_error(str(e))
        raise typer.Exit(1)
    if config.verbose:
        setup_logging("DEBUG")
    return config


def create_registry_client(config: AxConfig) -> RegistryClient:
    """Build the registry client for the configured registry."""
    return RegistryClient(config.registry_url)


@contextmanager
def spinner(text: str):
    """Show a transient spinner while a block runs."""
    with Live(Spinner("dots", text=text), console=console, transient=True):
        yield
