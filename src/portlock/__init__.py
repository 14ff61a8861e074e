"""portlock - single-instance guard using a loopback port as the lock."""

__version__ = "0.1.0"

from .config import ConfigError, Settings, load_settings, resolve_port
from .lock import (
    AcquireResult,
    AlreadyHeldError,
    BindError,
    ErrorKind,
    LockState,
    PortLock,
    PortLockError,
    SocketCreateError,
)
from .system import SystemScanner

__all__ = [
    "__version__",
    "AcquireResult",
    "AlreadyHeldError",
    "BindError",
    "ErrorKind",
    "LockState",
    "PortLock",
    "PortLockError",
    "SocketCreateError",
    "ConfigError",
    "Settings",
    "load_settings",
    "resolve_port",
    "SystemScanner",
]
