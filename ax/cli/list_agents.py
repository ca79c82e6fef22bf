"""List command for ax - show agents available in the registry."""

from rich.markup import escape
from rich.table import Table

from ax.cli.common import console, create_registry_client, load_config, print_header, spinner
from ax.resolver import Resolver

DESCRIPTION_WIDTH = 38


def truncate(text: str, width: int = DESCRIPTION_WIDTH) -> str:
    """Shorten text to the given width, ending with an ellipsis."""
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def list_agents() -> None:
    """List available agents.

    Falls back to the built-in agents when the registry is unreachable.

    Examples:
      ax list
    """
    print_header("Available Agents")
    config = load_config()

    with create_registry_client(config) as client:
        with spinner("Fetching registry..."):
            agents = Resolver(client).list_agents()

    if not agents:
        console.print("  [bold yellow]![/bold yellow] No agents found in registry.")
        return

    table = Table(box=None, pad_edge=False)
    table.add_column("NAME", style="green", header_style="bold cyan")
    table.add_column("VERSION", style="dim", header_style="bold cyan")
    table.add_column("DESCRIPTION", header_style="bold cyan")
    table.add_column("AUTHOR", style="dim", header_style="bold cyan")
    for agent in agents:
        table.add_row(
            escape(agent.name),
            escape(agent.version),
            escape(truncate(agent.description)),
            escape(agent.author),
        )
    console.print(table)

    console.print()
    console.print(f"  [cyan]→[/cyan] [bold]{len(agents)}[/bold] agent(s) available")
    console.print("  [cyan]→[/cyan] Install with: [bold cyan]ax install <agent-name>[/bold cyan]")
