"""System port scanner for portlock."""

import errno
import re
import socket
import subprocess

from .lock import LOOPBACK_HOST


class SystemScanner:
    """Inspect loopback UDP ports used as locks."""

    def is_port_held(self, port: int) -> bool | None:
        """Test whether another socket already holds a loopback UDP port.

        Binds a throwaway datagram socket and closes it straight away, so
        the probe never keeps the lock itself.

        Args:
            port: Port number to test

        Returns:
            True if the port is in use, False if it is free, None if the
            probe failed for another reason (e.g. permission denied)
        """
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
                s.bind((LOOPBACK_HOST, port))
                return False
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                return True
            return None

    def get_bound_udp_ports(self) -> set[int]:
        """Get all UDP ports currently bound on the system.

        Tries multiple methods in order:
        1. ss (Linux, fast)
        2. lsof (macOS/Linux, slower)
        3. netstat (Windows/universal, slowest)

        Returns:
            Set of bound port numbers
        """
        ports: set[int] = set()

        ports.update(self._scan_ss())

        if not ports:
            ports.update(self._scan_lsof())

        if not ports:
            ports.update(self._scan_netstat())

        return ports

    def _scan_ss(self) -> set[int]:
        """Scan ports using ss command (Linux).

        Returns:
            Set of bound ports
        """
        try:
            result = subprocess.run(
                ["ss", "-ulnH"],  # UDP, listening, numeric, no header
                capture_output=True,
                text=True,
                timeout=5,
            )
            # Format: UNCONN 0 0 127.0.0.1:47200 0.0.0.0:*
            return _parse_local_ports(result.stdout.splitlines())
        except (subprocess.SubprocessError, FileNotFoundError):
            return set()

    def _scan_lsof(self) -> set[int]:
        """Scan ports using lsof command (macOS/Linux).

        Returns:
            Set of bound ports
        """
        try:
            result = subprocess.run(
                ["lsof", "-iUDP", "-P", "-n"],
                capture_output=True,
                text=True,
                timeout=10,
            )
            # NAME column is like: 127.0.0.1:47200 or 127.0.0.1:47200->127.0.0.1:5000
            return _parse_local_ports(result.stdout.splitlines()[1:], trailing=r"(?:->|\s|$)")
        except (subprocess.SubprocessError, FileNotFoundError):
            return set()

    def _scan_netstat(self) -> set[int]:
        """Scan ports using netstat command (Windows/universal).

        Returns:
            Set of bound ports
        """
        try:
            result = subprocess.run(
                ["netstat", "-uln"],
                capture_output=True,
                text=True,
                timeout=10,
            )
            lines = [line for line in result.stdout.splitlines() if line.lower().startswith("udp")]
            return _parse_local_ports(lines)
        except (subprocess.SubprocessError, FileNotFoundError):
            return set()


def _parse_local_ports(lines: list[str], trailing: str = r"\s") -> set[int]:
    """Extract the first address:port field from each line.

    Args:
        lines: Scanner output lines
        trailing: Pattern that must follow the port digits

    Returns:
        Set of ports
    """
    pattern = re.compile(r":(\d+)" + trailing)
    ports = set()
    for line in lines:
        match = pattern.search(line)
        if match:
            ports.add(int(match.group(1)))
    return ports
