"""Test fixtures and configuration."""

import socket
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def free_port():
    """A loopback UDP port that is free right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def held_port(free_port):
    """A loopback UDP port held by another socket for the test's duration."""
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    s.bind(("127.0.0.1", free_port))
    yield free_port
    s.close()


@pytest.fixture(autouse=True)
def isolated_config(temp_dir, monkeypatch):
    """Point portlock at an empty config file and clear env overrides."""
    config_path = temp_dir / "config.yaml"
    monkeypatch.setenv("PORTLOCK_CONFIG", str(config_path))
    monkeypatch.delenv("PORTLOCK_PORT", raising=False)
    return config_path
