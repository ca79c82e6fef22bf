"""Init command for ax - detect editors and write ~/.ax/config.toml."""

import typer

from ax.cli.common import console, load_config, print_error, print_header, print_success
from ax.detector import DetectedEditor, choose_default_target, detect_editors
from ax.exceptions import AxError


def _print_editor_status(editor: DetectedEditor) -> None:
    if editor.detected:
        line = f"  [bold green]✓[/bold green] [bold]{editor.display_name}[/bold] - [green]detected[/green]"
        if editor.config_dir is not None:
            line += f" [dim]({editor.config_dir})[/dim]"
    else:
        line = f"  [bold red]✗[/bold red] [bold]{editor.display_name}[/bold] - [dim]not found[/dim]"
    console.print(line)


def init() -> None:
    """Detect installed editors and create the ax configuration.

    Examples:
      ax init
    """
    print_header("ax Initialization")
    console.print("[cyan]→[/cyan] Detecting installed editors...\n")

    config = load_config()
    try:
        detected = detect_editors()
        for editor in detected:
            _print_editor_status(editor)
        console.print()

        config.default_target = choose_default_target(detected)
        path = config.save()
    except (AxError, OSError) as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Created configuration at [cyan]{path}[/cyan]")
    print_success(f"Default target set to: [bold cyan]{config.default_target}[/bold cyan]")
    console.print()
    print_success("ax initialized successfully!")
    console.print("\n  Run [bold cyan]ax list[/bold cyan] to see available agents.")
