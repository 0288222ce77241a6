"""Configuration management for podembed.

Handles TOML configuration loading from local and global paths, with
environment variable precedence for the fetch timeout.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from podembed.core.errors import ConfigError

# Configuration file paths
LOCAL_CONFIG_PATH = Path(".podembed/config")
GLOBAL_CONFIG_PATH = Path.home() / ".podembed" / "config"

TIMEOUT_ENV_VAR = "PODEMBED_FETCH_TIMEOUT"

DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "podembed/0.1"

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "fetch": {
        "timeout": DEFAULT_FETCH_TIMEOUT,
        "user_agent": DEFAULT_USER_AGENT,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
    },
    "logging": {
        "level": "WARNING",
    },
}

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


class Verbosity(Enum):
    """Output verbosity levels for the CLI."""

    QUIET = "quiet"
    ERROR = "error"
    NORMAL = "normal"
    VERBOSE = "verbose"

    @property
    def log_level(self) -> int:
        return {
            Verbosity.QUIET: logging.CRITICAL,
            Verbosity.ERROR: logging.ERROR,
            Verbosity.NORMAL: logging.WARNING,
            Verbosity.VERBOSE: logging.DEBUG,
        }[self]


@dataclass
class FetchConfig:
    """Upstream fetch settings for feeds and transcripts."""

    timeout: float = DEFAULT_FETCH_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "127.0.0.1"
    port: int = 8000


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "WARNING"


@dataclass
class Config:
    """Main configuration container.

    Holds all configuration settings for podembed, loaded from local and
    global config files with environment variable overrides.
    """

    fetch: FetchConfig = field(default_factory=FetchConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def get_fetch_timeout(self) -> float:
        """Get the fetch timeout with environment variable precedence.

        Returns:
            The timeout from PODEMBED_FETCH_TIMEOUT if set to a positive
            number, otherwise the value from the config file.
        """
        env_timeout = os.environ.get(TIMEOUT_ENV_VAR, "")
        if env_timeout:
            try:
                value = float(env_timeout)
            except ValueError as e:
                raise ConfigError(f"{TIMEOUT_ENV_VAR} must be a number, got {env_timeout!r}") from e
            if value > 0:
                return value
        return self.fetch.timeout

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """Load configuration, optionally from an explicit file only."""
        if config_path is not None:
            path = Path(config_path)
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return load_config(local_path=path, global_path=path)
        return load_config()


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load and parse a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed configuration dictionary, empty if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        return {}

    try:
        return tomllib.loads(path.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigError: If configuration values are invalid.
    """
    timeout = config_dict["fetch"].get("timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
        raise ConfigError(f"fetch.timeout must be a positive number, got {timeout!r}")

    user_agent = config_dict["fetch"].get("user_agent")
    if not isinstance(user_agent, str):
        raise ConfigError(f"fetch.user_agent must be a string, got {type(user_agent).__name__}")

    host = config_dict["server"].get("host")
    if not isinstance(host, str) or not host:
        raise ConfigError("server.host must be a non-empty string")

    port = config_dict["server"].get("port")
    if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
        raise ConfigError(f"server.port must be an integer between 1 and 65535, got {port!r}")

    level = config_dict["logging"].get("level")
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid logging level {level!r}. "
            f"Valid options: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )


def _dict_to_config(config_dict: dict[str, Any]) -> Config:
    fetch_dict = config_dict["fetch"]
    server_dict = config_dict["server"]

    return Config(
        fetch=FetchConfig(
            timeout=float(fetch_dict["timeout"]),
            user_agent=fetch_dict["user_agent"],
        ),
        server=ServerConfig(
            host=server_dict["host"],
            port=server_dict["port"],
        ),
        logging=LoggingConfig(level=config_dict["logging"]["level"].upper()),
    )


def load_config(
    local_path: Path | None = None,
    global_path: Path | None = None,
) -> Config:
    """Load configuration from local and global config files.

    Configuration priority (highest to lowest):
    1. Local config file (.podembed/config in current directory)
    2. Global config file ($HOME/.podembed/config)
    3. Default values

    Args:
        local_path: Override path for local config file.
        global_path: Override path for global config file.

    Returns:
        Config object with merged configuration values.

    Raises:
        ConfigError: If configuration files are invalid.
    """
    local_path = local_path or LOCAL_CONFIG_PATH
    global_path = global_path or GLOBAL_CONFIG_PATH

    merged_config = {section: values.copy() for section, values in DEFAULT_CONFIG.items()}
    merged_config = _deep_merge(merged_config, _load_toml_file(global_path))
    merged_config = _deep_merge(merged_config, _load_toml_file(local_path))

    for section in DEFAULT_CONFIG:
        if not isinstance(merged_config.get(section), dict):
            raise ConfigError(f"[{section}] must be a table")

    _validate_config(merged_config)
    return _dict_to_config(merged_config)
