"""
Configuration management for spotify-suite.

This module builds the application configuration from three sources,
in increasing order of precedence:
    1. Built-in defaults
    2. An optional config.yaml in the current working directory
    3. Environment variables (a .env file is loaded first if present)

Spotify credentials are mandatory. Everything else has a default, so a
bare environment with SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET set is
a valid configuration.

Example config.yaml:
    spotify:
      client_id: "your_client_id_here"        # overridden by SPOTIFY_CLIENT_ID
      client_secret: "your_client_secret_here" # overridden by SPOTIFY_CLIENT_SECRET
      redirect_uri: "http://127.0.0.1:8888/callback"
      requests_timeout: null
      retries: 3

    output:
      directory: "."

    pacing:
      request_delay: 0.1     # seconds between remote calls in batch loops
      progress_interval: 10  # rows between progress lines

    formatting:
      grouping_separator: "."
      decimal_separator: ","
      date_format: "%d.%m.%Y"

    logging:
      directory: null        # set to a path to also write log files
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from spotify_suite.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

CLIENT_ID_ENV = "SPOTIFY_CLIENT_ID"
CLIENT_SECRET_ENV = "SPOTIFY_CLIENT_SECRET"

DEFAULT_REDIRECT_URI = "http://127.0.0.1:8888/callback"
DEFAULT_RETRIES = 3
DEFAULT_REQUEST_DELAY = 0.1
DEFAULT_PROGRESS_INTERVAL = 10


@dataclass(frozen=True)
class Credentials:
    """
    Spotify application credentials.

    Obtained from the Spotify Developer Dashboard:
    https://developer.spotify.com/dashboard

    Attributes:
        client_id: The Spotify application client ID.
        client_secret: The Spotify application client secret.
    """
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class SpotifyConfig:
    """
    Spotify API access settings.

    Attributes:
        credentials: Application credentials.
        redirect_uri: Loopback callback used by the user authorization flow.
                      Must be registered in the Spotify app settings.
        requests_timeout: Per-request timeout in seconds. None means no timeout.
        retries: Transport-level retries for 429 and 5xx responses.
    """
    credentials: Credentials
    redirect_uri: str = DEFAULT_REDIRECT_URI
    requests_timeout: float | None = None
    retries: int = DEFAULT_RETRIES


@dataclass(frozen=True)
class OutputConfig:
    """
    Output location for playlist exports.

    Attributes:
        directory: Directory where exported CSV files are written.
    """
    directory: Path


@dataclass(frozen=True)
class PacingConfig:
    """
    Pacing of sequential remote calls.

    Attributes:
        request_delay: Seconds to wait between remote calls in batch loops.
        progress_interval: Number of processed rows between progress lines.
    """
    request_delay: float = DEFAULT_REQUEST_DELAY
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL


@dataclass(frozen=True)
class FormatConfig:
    """
    Display formatting of numbers and dates in CSV output.

    The defaults reproduce the Turkish locale: 1.234,5 and 21.11.1975.
    """
    grouping_separator: str = "."
    decimal_separator: str = ","
    date_format: str = "%d.%m.%Y"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Log file settings.

    Attributes:
        directory: Directory where log files are written. None means
                   console logging only.
    """
    directory: Path | None = None


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and immutable afterwards.

    Example:
        config = load_config()
        client = SpotifyClient.from_client_credentials(
            config.spotify.credentials, config.spotify
        )
    """
    spotify: SpotifyConfig
    output: OutputConfig
    pacing: PacingConfig
    formatting: FormatConfig
    logging: LoggingConfig


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate the configuration.

    Args:
        config_path: Optional explicit path to a config file. If given, the
                     file must exist. If None, config.yaml in the current
                     working directory is used when present.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If credentials are missing, the file has invalid YAML
                     syntax, or a field has an invalid value.

    Behavior:
        1. Load .env from the working directory (does not override variables
           already set in the environment)
        2. Read config.yaml if present
        3. Resolve credentials (environment first, then YAML)
        4. Parse and validate the remaining sections with defaults
    """
    load_dotenv(find_dotenv(usecwd=True))

    raw_config = _read_config_file(config_path)

    spotify_section = _section(raw_config, "spotify")
    credentials = _resolve_credentials(spotify_section)

    return Config(
        spotify=_parse_spotify_config(spotify_section, credentials),
        output=_parse_output_config(_section(raw_config, "output")),
        pacing=_parse_pacing_config(_section(raw_config, "pacing")),
        formatting=_parse_format_config(_section(raw_config, "formatting")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
    )


def check_credentials() -> list[str]:
    """
    Return the names of required credential variables that are not set.

    Looks only at the environment (after loading .env). Used by the
    `check` command, which must not touch the network.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return [
        name for name in (CLIENT_ID_ENV, CLIENT_SECRET_ENV)
        if not os.environ.get(name, "").strip()
    ]


def _read_config_file(config_path: Path | None) -> dict[str, Any]:
    """
    Read and parse the YAML config file.

    Returns an empty dict when no explicit path was given and the default
    file does not exist.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return {}
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
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

    # An empty file parses to None
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, or an empty dict if it is missing."""
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _resolve_credentials(spotify_section: dict[str, Any]) -> Credentials:
    """
    Resolve client credentials from the environment or config.yaml.

    Raises:
        ConfigError: Naming every missing variable.
    """
    client_id = os.environ.get(CLIENT_ID_ENV) or spotify_section.get("client_id") or ""
    client_secret = (
        os.environ.get(CLIENT_SECRET_ENV) or spotify_section.get("client_secret") or ""
    )

    missing = []
    if not isinstance(client_id, str) or not client_id.strip():
        missing.append(CLIENT_ID_ENV)
    if not isinstance(client_secret, str) or not client_secret.strip():
        missing.append(CLIENT_SECRET_ENV)

    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}",
            details={"missing": missing}
        )

    return Credentials(client_id=client_id.strip(), client_secret=client_secret.strip())


def _parse_spotify_config(
    spotify_section: dict[str, Any],
    credentials: Credentials
) -> SpotifyConfig:
    redirect_uri = spotify_section.get("redirect_uri", DEFAULT_REDIRECT_URI)
    if not isinstance(redirect_uri, str) or not redirect_uri.strip():
        raise ConfigError(
            "'spotify.redirect_uri' must be a non-empty string",
            details={"field": "spotify.redirect_uri"}
        )

    timeout = spotify_section.get("requests_timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(
                "'spotify.requests_timeout' must be a positive number or null",
                details={"field": "spotify.requests_timeout", "value": timeout}
            )

    retries = spotify_section.get("retries", DEFAULT_RETRIES)
    if isinstance(retries, bool) or not isinstance(retries, int) or retries < 0:
        raise ConfigError(
            "'spotify.retries' must be a non-negative integer",
            details={"field": "spotify.retries", "value": retries}
        )

    return SpotifyConfig(
        credentials=credentials,
        redirect_uri=redirect_uri.strip(),
        requests_timeout=timeout,
        retries=retries,
    )


def _parse_output_config(output_section: dict[str, Any]) -> OutputConfig:
    """
    Parse the output section.

    Expands ~ and makes the path absolute. Does NOT create the directory
    (that happens at export time).
    """
    directory = output_section.get("directory", ".")
    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )
    return OutputConfig(directory=Path(directory.strip()).expanduser().resolve())


def _parse_pacing_config(pacing_section: dict[str, Any]) -> PacingConfig:
    delay = pacing_section.get("request_delay", DEFAULT_REQUEST_DELAY)
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigError(
            "'pacing.request_delay' must be a non-negative number",
            details={"field": "pacing.request_delay", "value": delay}
        )

    interval = pacing_section.get("progress_interval", DEFAULT_PROGRESS_INTERVAL)
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 1:
        raise ConfigError(
            "'pacing.progress_interval' must be a positive integer",
            details={"field": "pacing.progress_interval", "value": interval}
        )

    return PacingConfig(request_delay=float(delay), progress_interval=interval)


def _parse_format_config(format_section: dict[str, Any]) -> FormatConfig:
    defaults = FormatConfig()
    values = {}
    for field_name in ("grouping_separator", "decimal_separator", "date_format"):
        value = format_section.get(field_name, getattr(defaults, field_name))
        if not isinstance(value, str):
            raise ConfigError(
                f"'formatting.{field_name}' must be a string",
                details={"field": f"formatting.{field_name}", "value": value}
            )
        values[field_name] = value

    if not values["date_format"]:
        raise ConfigError(
            "'formatting.date_format' must not be empty",
            details={"field": "formatting.date_format"}
        )

    return FormatConfig(**values)


def _parse_logging_config(logging_section: dict[str, Any]) -> LoggingConfig:
    directory = logging_section.get("directory")
    if directory is None:
        return LoggingConfig()
    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'logging.directory' must be a non-empty string or null",
            details={"field": "logging.directory"}
        )
    return LoggingConfig(directory=Path(directory.strip()).expanduser().resolve())
