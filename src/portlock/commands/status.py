"""Status command - show lock ports."""

import typer
from rich.table import Table

from ..system import SystemScanner
from .common import console, get_port, get_settings, info


def status(
    ports: list[str] | None = typer.Argument(None, help="Ports or names (default: configured)"),
    scan: bool = typer.Option(False, "--scan", help="Also list every bound UDP port"),
) -> None:
    """Show whether lock ports are held.

    Examples:
        portlock status
        portlock status 47200 myapp
        portlock status --scan
    """
    settings = get_settings()
    scanner = SystemScanner()

    rows: list[tuple[str, int]] = []
    if ports:
        for value in ports:
            port = get_port(value, settings)
            name = value if value in settings.ports else "-"
            rows.append((name, port))
    else:
        rows.extend(sorted(settings.ports.items(), key=lambda item: item[1]))
        if settings.default_port is not None and settings.default_port not in settings.ports.values():
            rows.append(("(default)", settings.default_port))

    if not rows and not scan:
        console.print("[yellow]No lock ports configured[/yellow]")
        return

    if rows:
        table = Table(title="Lock Ports")
        table.add_column("Name", style="green")
        table.add_column("Port", style="yellow")
        table.add_column("Status", style="magenta")
        for name, port in rows:
            held = scanner.is_port_held(port)
            if held is None:
                state = "? unknown"
            else:
                state = "● held" if held else "○ free"
            table.add_row(name, str(port), state)
        console.print(table)

    if scan:
        bound = sorted(scanner.get_bound_udp_ports())
        if bound:
            info("Bound UDP ports: " + ", ".join(str(p) for p in bound))
        else:
            console.print("[yellow]No bound UDP ports found (ss, lsof and netstat unavailable?)[/yellow]")
