"""Common utilities for CLI commands."""

import typer

from ..config import ConfigError, Settings, load_settings, resolve_port
from ..console import console, debug, error, error_console, info, success, warning
from ..lock import ErrorKind, PortLock

# Re-export console utilities
__all__ = [
    "console",
    "error_console",
    "debug",
    "info",
    "success",
    "warning",
    "error",
    "get_settings",
    "get_port",
    "acquire_or_exit",
]


def get_settings() -> Settings:
    """Load settings, exiting with an error message if they are invalid."""
    try:
        return load_settings()
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)


def get_port(value: str | None, settings: Settings) -> int:
    """Resolve a port argument, exiting on bad input."""
    try:
        return resolve_port(value, settings)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)


def acquire_or_exit(port: int, settings: Settings, quiet: bool = False) -> PortLock:
    """Acquire a lock on port or exit the CLI.

    A duplicate instance exits with settings.exit_code so wrappers can
    tell it apart from a misconfiguration, which exits with 1.

    Args:
        port: Port to lock
        settings: Effective settings
        quiet: Suppress the duplicate-instance notice

    Returns:
        Held lock
    """
    lock = PortLock(port)
    result = lock.try_acquire()
    debug(f"try_acquire({port}) -> {result}")

    if result.ok:
        return lock

    if result.error is ErrorKind.ALREADY_HELD:
        if not quiet:
            warning(f"Another instance holds {lock.description}")
        raise typer.Exit(settings.exit_code)

    error(f"Cannot lock {lock.description}: {result.cause}")
    raise typer.Exit(1)
