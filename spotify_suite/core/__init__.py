"""
Core module for spotify-suite.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and optional file outputs
    - pacing: Delays between sequential remote calls
    - file_manager: Export file naming

Usage:
    from spotify_suite.core import (
        Config, load_config,
        setup_logging, get_logger,
        SpotifySuiteError, ConfigError, AuthError
    )
"""

from spotify_suite.core.config import (
    Config,
    Credentials,
    FormatConfig,
    LoggingConfig,
    OutputConfig,
    PacingConfig,
    SpotifyConfig,
    check_credentials,
    load_config,
)
from spotify_suite.core.exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    InvalidUrlError,
    NetworkError,
    NotFoundError,
    SpotifySuiteError,
    ValidationError,
)
from spotify_suite.core.logger import (
    get_logger,
    log_enrichment_miss,
    setup_logging,
    shutdown_logging,
)
from spotify_suite.core.pacing import Pacer, fixed_delay, minimum_interval, no_delay

__all__ = [
    # Config
    "Config",
    "Credentials",
    "SpotifyConfig",
    "OutputConfig",
    "PacingConfig",
    "FormatConfig",
    "LoggingConfig",
    "load_config",
    "check_credentials",
    # Exceptions
    "SpotifySuiteError",
    "ConfigError",
    "AuthError",
    "NetworkError",
    "ApiError",
    "NotFoundError",
    "ValidationError",
    "InvalidUrlError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_enrichment_miss",
    "shutdown_logging",
    # Pacing
    "Pacer",
    "fixed_delay",
    "minimum_interval",
    "no_delay",
]
