"""
spotify-suite: Command-line tools around the Spotify Web API.

Tools:
    export            Export a playlist (by name, URL or id) to CSV
    find-albums       List the albums a track appears on, earliest first
    find-albums-csv   Add the earliest original album to every row of a CSV
    create-playlist   Create a playlist from a CSV of track ids

Modules:
    core/        - Configuration, logging, exceptions, pacing, file naming
    spotify/     - API client, playlist resolution, track collection,
                   album finding, playlist writing
    enrichment/  - Batch enrichment engine
    export/      - CSV adapters and export formatting
    utils/       - Small helpers (dates, chunking, durations)
    cli.py       - Command-line interface

Configuration:
    Credentials come from SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET
    (environment or .env). An optional config.yaml tunes the rest.

Dependencies:
    - spotipy: Spotify API client and OAuth flow
    - requests: Client-credentials token exchange
    - rich-click / rich: CLI and tables
    - tqdm: Progress-safe console logging
    - pyyaml: Configuration file parsing
    - python-dotenv: .env loading
"""

__version__ = "1.0.0"
__author__ = "spotify-suite"
__license__ = "MIT"

from spotify_suite.core import (
    ApiError,
    AuthError,
    Config,
    ConfigError,
    NetworkError,
    NotFoundError,
    SpotifySuiteError,
    ValidationError,
    get_logger,
    load_config,
    setup_logging,
)
from spotify_suite.spotify import SpotifyClient, Playlist, Track

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "SpotifySuiteError",
    "ConfigError",
    "AuthError",
    "NetworkError",
    "ApiError",
    "NotFoundError",
    "ValidationError",
    # Models
    "SpotifyClient",
    "Playlist",
    "Track",
]
