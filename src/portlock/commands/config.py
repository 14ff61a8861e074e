"""Config command - show effective configuration."""

import typer
from rich.table import Table

from ..config import get_config_path
from .common import console, get_settings


def config(
    show: bool = typer.Option(False, "--show", help="Show effective configuration"),
    path: bool = typer.Option(False, "--path", help="Print the config file path"),
) -> None:
    """Show portlock configuration.

    Examples:
        portlock config --show
        portlock config --path
    """
    if path:
        print(get_config_path())
        return

    if show:
        settings = get_settings()
        config_path = get_config_path()

        table = Table(title="portlock Configuration")
        table.add_column("Setting", style="green")
        table.add_column("Value", style="yellow")

        table.add_row("config file", f"{config_path}{'' if config_path.exists() else ' (missing)'}")
        table.add_row("default_port", str(settings.default_port) if settings.default_port else "-")
        table.add_row("exit_code", str(settings.exit_code))
        for name, port in sorted(settings.ports.items()):
            table.add_row(f"ports.{name}", str(port))

        console.print(table)
        return

    console.print("[yellow]Use --show or --path[/yellow]")
