"""Install and uninstall commands for ax."""

from typing import Annotated, Optional

import typer
from rich.markup import escape

from ax.adapters import Target
from ax.cli.common import (
    console,
    create_registry_client,
    load_config,
    print_error,
    print_header,
    print_success,
    spinner,
)
from ax.exceptions import AxError
from ax.orchestrator import InstallStep, Orchestrator
from ax.resolver import Resolver
from ax.validation import get_install_hint

TargetOption = Annotated[
    Optional[Target],
    typer.Option(
        "--target",
        "-t",
        help="Editor to install into (defaults to the configured target)",
        case_sensitive=False,
    ),
]

GlobalOption = Annotated[
    bool,
    typer.Option(
        "--global",
        "-g",
        help="Use the editor's user-wide directory instead of the current project",
    ),
]


def _print_dependencies(missing: list[str]) -> None:
    console.print("\n[cyan]→[/cyan] Checking dependencies...")
    if not missing:
        console.print("  [green]✓[/green] All dependencies satisfied")
        return

    console.print()
    for command in missing:
        console.print(
            f"  [bold yellow]⚠[/bold yellow] [bold]{command}[/bold] is required but not found in PATH"
        )
        hint = get_install_hint(command)
        if hint:
            console.print(f"    [dim]{hint}[/dim]")
    console.print()
    console.print("  [yellow]![/yellow] Some MCP tools may not work without these dependencies.")
    console.print("  [cyan]→[/cyan] Install missing tools and try again, or continue anyway.")
    console.print()


def _print_step(step: InstallStep, message: str) -> None:
    console.print(f"  [green]✓[/green] {message}")


def install(
    agent_name: Annotated[
        str,
        typer.Argument(help="Agent or skill name, or a local skill path", metavar="AGENT"),
    ],
    target: TargetOption = None,
    global_install: GlobalOption = False,
) -> None:
    """Install an agent into an editor.

    Examples:
      ax install rust-architect
      ax install rust-architect --target cursor
      ax install ./skills/my-skill --target codex
    """
    config = load_config()
    target = target or Target(config.default_target)

    print_header(f"Installing {agent_name}")

    try:
        with create_registry_client(config) as client:
            orchestrator = Orchestrator(Resolver(client))
            with spinner("Fetching agent configuration..."):
                agent = orchestrator.resolve(agent_name)
            console.print(f"[green]✓[/green] Found {escape(agent.name)} v{escape(agent.version)}")

            result = orchestrator.install_agent(
                agent, target, global_install=global_install, on_step=_print_step
            )
    except (AxError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    fmt = result.target_format
    _print_dependencies(result.missing_dependencies)

    for tool_name, url in result.setup_notes:
        console.print(
            f"\n  [bold blue]ℹ[/bold blue] Setup required for MCP tool '[bold]{escape(tool_name)}[/bold]'"
        )
        console.print(f"  [cyan]→[/cyan] Get your API key here: [underline blue]{escape(url)}[/underline blue]")

    console.print()
    print_success(f"{escape(result.agent.name)} installed successfully to {fmt.display_name}!")

    if fmt.next_steps:
        console.print("\n  [cyan]→[/cyan] Next steps:")
        for number, hint in enumerate(fmt.next_steps, start=1):
            console.print(f"    {number}. {hint}")


def uninstall(
    agent_name: Annotated[
        str,
        typer.Argument(help="Name of the installed agent", metavar="AGENT"),
    ],
    target: TargetOption = None,
    global_install: GlobalOption = False,
) -> None:
    """Remove an agent's identity and skills from an editor.

    MCP tool entries are kept since other agents may use them.

    Examples:
      ax uninstall rust-architect
      ax uninstall rust-architect --target cursor --global
    """
    config = load_config()
    target = target or Target(config.default_target)

    try:
        with create_registry_client(config) as client:
            fmt = Orchestrator(Resolver(client)).uninstall(agent_name, target, global_install)
    except (AxError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Removed {escape(agent_name)} from {fmt.display_name}")
