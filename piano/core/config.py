"""
Configuration management for piano-client.

This module handles loading, validating, and providing access to the
library configuration. Every section is optional: a client constructed
without a configuration uses default_config(), which never touches the
filesystem.

The configuration file contains:
    - RPC endpoints (plain and secure) and the client identification string
    - HTTP timeout
    - The Blowfish key used to obscure request bodies
    - Logging level and optional log directory

Example piano.yaml:
    rpc:
      url: "http://www.pandora.com/radio/xmlrpc/v19"
      secure_url: "https://www.pandora.com/radio/xmlrpc/v19"
      user_agent: "piano-client/0.1"
      timeout: 30

    cipher:
      key: "..."

    logging:
      level: "INFO"
      directory: null
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from piano.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "piano.yaml"

DEFAULT_RPC_URL = "http://www.pandora.com/radio/xmlrpc/v19"
DEFAULT_SECURE_RPC_URL = "https://www.pandora.com/radio/xmlrpc/v19"
DEFAULT_USER_AGENT = "piano-client/0.1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CIPHER_KEY = "6#26FRL$ZWD"
DEFAULT_LOG_LEVEL = "INFO"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class RpcConfig:
    """
    Remote endpoint configuration.

    Attributes:
        url: Endpoint used for every call except authentication.
        secure_url: Endpoint used for listener authentication.
        user_agent: Client identification string sent with every request.
                    Set once on the transport at construction.
        timeout: Seconds before an HTTP request is abandoned.
    """
    url: str
    secure_url: str
    user_agent: str
    timeout: float


@dataclass(frozen=True)
class CipherConfig:
    """
    Request body cipher configuration.

    Attributes:
        key: Blowfish key (4 to 56 bytes once UTF-8 encoded).
    """
    key: str


@dataclass(frozen=True)
class LoggingConfig:
    """
    Attributes:
        level: Console log level name.
        directory: Directory for log files, or None for console only.
    """
    level: str
    directory: Path | None


@dataclass(frozen=True)
class Config:
    """
    Complete library configuration.

    Created by load_config() or default_config() and treated as immutable.

    Example:
        config = load_config()
        client = PianoClient(config)
    """
    rpc: RpcConfig
    cipher: CipherConfig
    logging: LoggingConfig


def default_config() -> Config:
    """Return the built-in configuration."""
    return Config(
        rpc=RpcConfig(
            url=DEFAULT_RPC_URL,
            secure_url=DEFAULT_SECURE_RPC_URL,
            user_agent=DEFAULT_USER_AGENT,
            timeout=DEFAULT_TIMEOUT
        ),
        cipher=CipherConfig(key=DEFAULT_CIPHER_KEY),
        logging=LoggingConfig(level=DEFAULT_LOG_LEVEL, directory=None)
    )


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from piano.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for piano.yaml in the current working
                     directory and falls back to default_config() when it
                     is absent.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, has invalid
                     YAML syntax, or contains invalid values.

    Example:
        try:
            config = load_config(Path("piano.yaml"))
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return default_config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file is a valid "use every default" configuration
    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return Config(
        rpc=_parse_rpc_config(_section(raw_config, "rpc")),
        cipher=_parse_cipher_config(_section(raw_config, "cipher")),
        logging=_parse_logging_config(_section(raw_config, "logging"))
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _string_field(section: dict[str, Any], name: str, field: str, default: str) -> str:
    value = section.get(name)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"'{field}' must be a non-empty string",
            details={"field": field}
        )
    return value.strip()


def _parse_rpc_config(rpc_section: dict[str, Any]) -> RpcConfig:
    """
    Parse and validate the rpc configuration section.

    Raises:
        ConfigError: If a URL is not http(s) or timeout is not positive.
    """
    url = _string_field(rpc_section, "url", "rpc.url", DEFAULT_RPC_URL)
    secure_url = _string_field(
        rpc_section, "secure_url", "rpc.secure_url", DEFAULT_SECURE_RPC_URL
    )
    user_agent = _string_field(
        rpc_section, "user_agent", "rpc.user_agent", DEFAULT_USER_AGENT
    )

    for field, value in (("rpc.url", url), ("rpc.secure_url", secure_url)):
        if not value.startswith(("http://", "https://")):
            raise ConfigError(
                f"'{field}' must be an http:// or https:// URL",
                details={"field": field, "value": value}
            )

    timeout = rpc_section.get("timeout", DEFAULT_TIMEOUT)
    # bool is an int subclass; reject it explicitly
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'rpc.timeout' must be a positive number",
            details={"field": "rpc.timeout", "value": timeout}
        )

    return RpcConfig(
        url=url,
        secure_url=secure_url,
        user_agent=user_agent,
        timeout=float(timeout)
    )


def _parse_cipher_config(cipher_section: dict[str, Any]) -> CipherConfig:
    """
    Parse and validate the cipher configuration section.

    Raises:
        ConfigError: If the key does not fit Blowfish's 4-56 byte range.
    """
    key = cipher_section.get("key", DEFAULT_CIPHER_KEY)
    if not isinstance(key, str):
        raise ConfigError(
            "'cipher.key' must be a string",
            details={"field": "cipher.key"}
        )

    key_length = len(key.encode("utf-8"))
    if not 4 <= key_length <= 56:
        raise ConfigError(
            "'cipher.key' must be between 4 and 56 bytes long",
            details={"field": "cipher.key", "length": key_length}
        )

    return CipherConfig(key=key)


def _parse_logging_config(logging_section: dict[str, Any]) -> LoggingConfig:
    level = _string_field(logging_section, "level", "logging.level", DEFAULT_LOG_LEVEL).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"'logging.level' must be one of {', '.join(_LOG_LEVELS)}",
            details={"field": "logging.level", "value": level}
        )

    directory = None
    raw_directory = logging_section.get("directory")
    if raw_directory is not None:
        if not isinstance(raw_directory, str) or not raw_directory.strip():
            raise ConfigError(
                "'logging.directory' must be a string path or null",
                details={"field": "logging.directory"}
            )
        directory = Path(raw_directory.strip()).expanduser().resolve()

    return LoggingConfig(level=level, directory=directory)
