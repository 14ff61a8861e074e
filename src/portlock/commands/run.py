"""Run command - run a program while holding a lock."""

import subprocess

import typer

from .common import acquire_or_exit, debug, error, get_port, get_settings


def run(
    port: str = typer.Argument(..., help="Port number or configured name"),
    command: list[str] = typer.Argument(..., help="Command to run (after --)"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="No notice when already running"),
) -> None:
    """Run a command unless another instance already holds the lock.

    The lock is held for the lifetime of the child and released when it
    exits. The child's exit code is passed through.

    Examples:
        portlock run 47200 -- ./sync.sh
        portlock run myapp -q -- python -m myapp
    """
    settings = get_settings()
    port_number = get_port(port, settings)

    with acquire_or_exit(port_number, settings, quiet=quiet) as lock:
        debug(f"running {command!r} under {lock.description}")
        try:
            completed = subprocess.run(command)
        except FileNotFoundError:
            error(f"Command not found: {command[0]}")
            raise typer.Exit(127)
        except PermissionError:
            error(f"Command not executable: {command[0]}")
            raise typer.Exit(126)
        except KeyboardInterrupt:
            raise typer.Exit(130)

    raise typer.Exit(completed.returncode)
