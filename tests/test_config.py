"""Tests for config module."""

import pytest

from portlock.config import (
    DEFAULT_EXIT_CODE,
    ConfigError,
    Settings,
    get_config_path,
    load_settings,
    resolve_port,
)


def test_missing_file_gives_defaults(isolated_config):
    """Test that no config file means default settings."""
    settings = load_settings()

    assert settings.default_port is None
    assert settings.exit_code == DEFAULT_EXIT_CODE
    assert settings.ports == {}


def test_config_path_env_override(isolated_config):
    """Test that PORTLOCK_CONFIG selects the file."""
    assert get_config_path() == isolated_config


def test_load_yaml(isolated_config):
    """Test loading all settings from YAML."""
    isolated_config.write_text(
        "default_port: 47200\n"
        "exit_code: 0\n"
        "ports:\n"
        "  backup: 47201\n"
        "  sync: '47202'\n"
    )

    settings = load_settings()

    assert settings.default_port == 47200
    assert settings.exit_code == 0
    assert settings.ports == {"backup": 47201, "sync": 47202}


def test_empty_file(isolated_config):
    """Test that an empty file is treated as no settings."""
    isolated_config.write_text("")

    assert load_settings() == Settings()


def test_env_port_overrides_file(isolated_config, monkeypatch):
    """Test that PORTLOCK_PORT wins over default_port."""
    isolated_config.write_text("default_port: 47200\n")
    monkeypatch.setenv("PORTLOCK_PORT", "47300")

    assert load_settings().default_port == 47300


@pytest.mark.parametrize(
    "content",
    [
        "default_port: [1, 2\n",
        "- just\n- a list\n",
        "default_port: 70000\n",
        "default_port: http\n",
        "exit_code: yes\n",
        "ports: [47200]\n",
        "ports:\n  app: 0\n",
        "exit_code: 0\n",
        "exit_code: 300\n",
    ],
)
def test_invalid_config(isolated_config, content):
    """Test that malformed or out-of-range values raise ConfigError."""
    isolated_config.write_text(content)

    with pytest.raises(ConfigError):
        load_settings()


def test_invalid_env_port(monkeypatch):
    """Test that a bad PORTLOCK_PORT raises ConfigError."""
    monkeypatch.setenv("PORTLOCK_PORT", "not-a-port")

    with pytest.raises(ConfigError, match="PORTLOCK_PORT"):
        load_settings()


def test_resolve_port():
    """Test resolving numbers, names and the default."""
    settings = Settings(default_port=47200, ports={"backup": 47201})

    assert resolve_port("8080", settings) == 8080
    assert resolve_port(8080, settings) == 8080
    assert resolve_port("backup", settings) == 47201
    assert resolve_port(None, settings) == 47200


def test_resolve_port_errors():
    """Test that unresolvable ports raise ConfigError."""
    settings = Settings()

    with pytest.raises(ConfigError, match="default_port"):
        resolve_port(None, settings)
    with pytest.raises(ConfigError):
        resolve_port("unknown-app", settings)
    with pytest.raises(ConfigError):
        resolve_port("0", settings)


def test_invalid_utf8_file(isolated_config):
    """Test that a file that is not UTF-8 raises ConfigError."""
    isolated_config.write_bytes(b"default_port: 47200\n# \xff\xfe bad\n")

    with pytest.raises(ConfigError, match="Cannot read"):
        load_settings()


def test_config_path_is_directory(temp_dir, monkeypatch):
    """Test that a config path naming a directory raises ConfigError."""
    config_dir = temp_dir / "conf.d"
    config_dir.mkdir()
    monkeypatch.setenv("PORTLOCK_CONFIG", str(config_dir))

    with pytest.raises(ConfigError, match="Cannot read"):
        load_settings()
