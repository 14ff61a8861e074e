"""Single-instance lock backed by a loopback UDP port."""

import errno as errno_codes
import socket
from dataclasses import dataclass
from enum import Enum

LOOPBACK_HOST = "127.0.0.1"
MAX_PORT = 65535

ALREADY_HELD_MESSAGE = "another instance holds this lock"


class LockState(Enum):
    """Lifecycle state of a PortLock."""

    UNACQUIRED = "unacquired"
    HELD = "held"
    FAILED = "failed"


class ErrorKind(Enum):
    """Why an acquisition attempt failed."""

    SOCKET_CREATE_FAILED = "socket_create_failed"
    BIND_FAILED = "bind_failed"
    ALREADY_HELD = "already_held"


class PortLockError(Exception):
    """Raised when a port lock cannot be acquired."""

    def __init__(
        self,
        port: int,
        kind: ErrorKind,
        message: str,
        errno: int | None = None,
    ) -> None:
        super().__init__(message)
        self.port = port
        self.kind = kind
        self.errno = errno


class SocketCreateError(PortLockError):
    """Raised when the OS refuses to allocate the lock socket."""

    pass


class BindError(PortLockError):
    """Raised when the bind fails for a reason other than contention."""

    pass


class AlreadyHeldError(PortLockError):
    """Raised when another process already holds the port."""

    pass


_ERRORS: dict[ErrorKind, type[PortLockError]] = {
    ErrorKind.SOCKET_CREATE_FAILED: SocketCreateError,
    ErrorKind.BIND_FAILED: BindError,
    ErrorKind.ALREADY_HELD: AlreadyHeldError,
}


@dataclass(frozen=True)
class AcquireResult:
    """Outcome of a single acquisition attempt."""

    error: ErrorKind | None = None
    cause: str = ""
    errno: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self, port: int) -> None:
        """Raise the exception matching this result's error kind.

        Args:
            port: Port the result refers to, attached to the exception

        Raises:
            PortLockError: Subclass selected by ``error``
        """
        if self.error is None:
            return
        exc_class = _ERRORS[self.error]
        raise exc_class(port, self.error, f"port {port}: {self.cause}", self.errno)


SUCCESS = AcquireResult()


def classify_bind_error(exc: OSError) -> ErrorKind:
    """Map a bind failure to an error kind.

    Args:
        exc: Error raised by ``socket.bind``

    Returns:
        ALREADY_HELD for address-in-use, BIND_FAILED otherwise
    """
    if exc.errno == errno_codes.EADDRINUSE:
        return ErrorKind.ALREADY_HELD
    return ErrorKind.BIND_FAILED


def _cause(exc: OSError) -> str:
    return exc.strerror or str(exc)


class PortLock:
    """Hold a loopback port so only one process on the host can run.

    The kernel allows a single bind per address and port, so whichever
    process binds first is the active instance. The socket is never used
    for I/O and is closed on release, on garbage collection, or by the OS
    when the process exits.

    Example:
        lock = PortLock(47200)
        result = lock.try_acquire()
        if result.error is ErrorKind.ALREADY_HELD:
            sys.exit(0)
    """

    def __init__(self, port: int) -> None:
        """Initialize lock. Performs no I/O.

        Args:
            port: Loopback port used as the lock, 1-65535

        Raises:
            TypeError: If port is not an integer
            ValueError: If port is 0 or outside the 16-bit range
        """
        if isinstance(port, bool) or not isinstance(port, int):
            raise TypeError(f"port must be an int, not {type(port).__name__}")
        if port == 0:
            raise ValueError("port 0 requests an ephemeral port and cannot act as a lock")
        if not 0 < port <= MAX_PORT:
            raise ValueError(f"port must be between 1 and {MAX_PORT}, got {port}")

        self._port = port
        self._state = LockState.UNACQUIRED
        self._socket: socket.socket | None = None

    @property
    def port(self) -> int:
        return self._port

    @property
    def state(self) -> LockState:
        return self._state

    @property
    def held(self) -> bool:
        return self._state is LockState.HELD

    @property
    def description(self) -> str:
        """Human-readable name of the locked resource."""
        return f"port {self._port}"

    def try_acquire(self) -> AcquireResult:
        """Try to bind the lock port.

        Repeated calls after a success return success without touching
        the OS. A failed lock may be retried.

        Returns:
            SUCCESS, or a result carrying the error kind and OS cause
        """
        if self._state is LockState.HELD:
            return SUCCESS

        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            self._state = LockState.FAILED
            return AcquireResult(ErrorKind.SOCKET_CREATE_FAILED, _cause(e), e.errno)

        try:
            sock.bind((LOOPBACK_HOST, self._port))
        except OSError as e:
            sock.close()
            self._state = LockState.FAILED
            kind = classify_bind_error(e)
            if kind is ErrorKind.ALREADY_HELD:
                return AcquireResult(kind, ALREADY_HELD_MESSAGE, e.errno)
            return AcquireResult(kind, _cause(e), e.errno)

        self._socket = sock
        self._state = LockState.HELD
        return SUCCESS

    def acquire(self) -> "PortLock":
        """Acquire the lock or raise.

        Returns:
            This lock, now held

        Raises:
            AlreadyHeldError: If another process holds the port
            BindError: If the bind failed for another reason
            SocketCreateError: If no socket could be created
        """
        self.try_acquire().raise_for_error(self._port)
        return self

    def release(self) -> None:
        """Close the lock socket and return to UNACQUIRED.

        Safe to call on a lock that is not held.
        """
        sock, self._socket = self._socket, None
        self._state = LockState.UNACQUIRED
        if sock is not None:
            sock.close()

    def __enter__(self) -> "PortLock":
        return self.acquire()

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __del__(self) -> None:
        # __init__ may have raised before _socket existed
        sock = getattr(self, "_socket", None)
        if sock is not None:
            sock.close()

    def __repr__(self) -> str:
        return f"PortLock(port={self._port}, state={self._state.value})"
