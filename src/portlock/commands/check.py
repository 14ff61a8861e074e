"""Check command - test whether a lock port is free."""

import typer

from ..lock import ErrorKind, PortLock
from .common import console, error, get_port, get_settings


def check(
    port: str | None = typer.Argument(None, help="Port number or configured name"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="No output, exit code only"),
) -> None:
    """Check whether a lock port is free.

    Exits 0 when free, with the configured exit code when another
    instance holds it, and 1 on any other failure.

    Examples:
        portlock check 47200
        portlock check myapp -q && ./myapp
    """
    settings = get_settings()
    port_number = get_port(port, settings)

    lock = PortLock(port_number)
    result = lock.try_acquire()
    lock.release()

    if result.ok:
        if not quiet:
            console.print(f"[green]free[/green]: {lock.description}")
        return

    if result.error is ErrorKind.ALREADY_HELD:
        if not quiet:
            console.print(f"[yellow]held[/yellow]: {lock.description}")
        raise typer.Exit(settings.exit_code)

    if not quiet:
        error(f"Cannot probe {lock.description}: {result.cause}")
    raise typer.Exit(1)
