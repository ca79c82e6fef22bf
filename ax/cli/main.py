"""CLI entry point for ax."""

from typing import Annotated

import typer

from ax import __version__
from ax.cli.init import init
from ax.cli.install import install, uninstall
from ax.cli.list_agents import list_agents
from ax.logging import setup_logging

app = typer.Typer(
    name="ax",
    help="Install AI agent bundles into Claude Code, Cursor, and Codex.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ax {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """ax - the agent installer."""
    setup_logging("DEBUG" if verbose else "WARNING")


app.command()(init)
app.command("list")(list_agents)
app.command()(install)
app.command()(uninstall)


if __name__ == "__main__":
    app()
