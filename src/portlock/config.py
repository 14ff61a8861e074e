"""Configuration management for portlock."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import yaml

from .lock import MAX_PORT

DEFAULT_EXIT_CODE = 3

PORT_ENV = "PORTLOCK_PORT"
CONFIG_ENV = "PORTLOCK_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file or environment is invalid."""

    pass


@dataclass
class Settings:
    """Effective portlock settings."""

    default_port: int | None = None
    exit_code: int = DEFAULT_EXIT_CODE
    ports: dict[str, int] = field(default_factory=dict)


def get_config_dir() -> Path:
    """Get the configuration directory for portlock.

    Returns:
        Path to config directory
    """
    return Path(platformdirs.user_config_dir("portlock", "portlock"))


def get_config_path() -> Path:
    """Get the configuration file path.

    PORTLOCK_CONFIG overrides the default location.

    Returns:
        Path to config file
    """
    override = os.getenv(CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return get_config_dir() / "config.yaml"


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from the config file and environment.

    A missing file yields defaults. PORTLOCK_PORT overrides default_port.

    Args:
        path: Config file to read. If None, uses get_config_path().

    Returns:
        Settings instance

    Raises:
        ConfigError: If the file cannot be parsed or holds invalid values
    """
    path = path or get_config_path()
    data: dict[str, Any] = {}

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Cannot parse {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read {path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        data = loaded

    settings = Settings()

    if data.get("default_port") is not None:
        settings.default_port = _check_port(data["default_port"], "default_port")

    if "exit_code" in data:
        exit_code = data["exit_code"]
        if isinstance(exit_code, bool) or not isinstance(exit_code, int):
            raise ConfigError(f"exit_code must be an integer, got {exit_code!r}")
        # 0 would make a duplicate look like success
        if not 0 < exit_code <= 255:
            raise ConfigError(f"exit_code must be between 1 and 255, got {exit_code}")
        settings.exit_code = exit_code

    ports = data.get("ports") or {}
    if not isinstance(ports, dict):
        raise ConfigError("ports must be a mapping of name to port")
    for name, port in ports.items():
        settings.ports[str(name)] = _check_port(port, f"ports.{name}")

    env_port = os.getenv(PORT_ENV)
    if env_port:
        settings.default_port = _check_port(env_port, PORT_ENV)

    return settings


def resolve_port(value: str | int | None, settings: Settings) -> int:
    """Turn a CLI port argument into a port number.

    Accepts a port number, a name from settings.ports, or None for
    settings.default_port.

    Args:
        value: Port, name, or None
        settings: Effective settings

    Returns:
        Port number

    Raises:
        ConfigError: If the value cannot be resolved
    """
    if value is None:
        if settings.default_port is None:
            raise ConfigError(f"No port given and no default_port configured (set {PORT_ENV})")
        return settings.default_port
    if isinstance(value, str) and value in settings.ports:
        return settings.ports[value]
    return _check_port(value, "port")


def _check_port(value: Any, name: str) -> int:
    """Validate a port value.

    Args:
        value: Raw value from YAML, the environment or the CLI
        name: Setting name for the error message

    Returns:
        Port as int

    Raises:
        ConfigError: If value is not a port in 1-65535
    """
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a port number, got {value!r}")
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a port number, got {value!r}") from None
    if not 0 < port <= MAX_PORT:
        raise ConfigError(f"{name} must be between 1 and {MAX_PORT}, got {port}")
    return port
