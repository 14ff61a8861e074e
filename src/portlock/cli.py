"""Typer CLI for portlock - Main entry point."""

import typer

from . import __version__
from .commands import check, config, hold, run, status

app = typer.Typer(
    name="portlock",
    help="Single-instance locks on loopback ports",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"portlock version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Single-instance locks on loopback ports."""
    pass

# Register all commands
app.command()(check)
app.command()(hold)
app.command()(run)
app.command()(status)
app.command()(config)


def main() -> None:
    """Main entry point."""
    app()
