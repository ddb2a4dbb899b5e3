"""
Core module for piano-client.

This module provides the foundational components used throughout the library:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Opt-in logging setup

Usage:
    from piano.core import (
        Config, load_config, default_config,
        setup_logging, get_logger,
        PianoError, TransportError
    )
"""

from piano.core.config import (
    CipherConfig,
    Config,
    LoggingConfig,
    RpcConfig,
    default_config,
    load_config,
)
from piano.core.exceptions import (
    ConfigError,
    DecodeError,
    InvalidRatingError,
    PianoError,
    TransportError,
)
from piano.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "RpcConfig",
    "CipherConfig",
    "LoggingConfig",
    "default_config",
    "load_config",
    # Exceptions
    "PianoError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "InvalidRatingError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
