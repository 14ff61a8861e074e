"""Hold command - keep a lock until interrupted."""

import time

import typer

from .common import acquire_or_exit, debug, get_port, get_settings, success


def hold(
    port: str | None = typer.Argument(None, help="Port number or configured name"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Release after this many seconds"
    ),
) -> None:
    """Acquire a lock and hold it until Ctrl-C or timeout.

    Examples:
        portlock hold 47200
        portlock hold myapp --timeout 30
    """
    settings = get_settings()
    port_number = get_port(port, settings)

    lock = acquire_or_exit(port_number, settings)
    success(f"Holding {lock.description}")

    try:
        if timeout is None:
            while True:
                time.sleep(1)
        else:
            time.sleep(max(timeout, 0))
    except KeyboardInterrupt:
        debug("interrupted")
    finally:
        lock.release()

    success(f"Released {lock.description}")
