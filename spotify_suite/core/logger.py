"""
Logging configuration for spotify-suite.

This module sets up the logging system with up to four outputs:
    - Console: colored, tqdm-compatible output (always on)
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - enrichment_misses.log: Input rows for which no original album was found

File outputs are only created when a log directory is configured
(`logging.directory` in config.yaml). Without it the tool logs to the
console only and leaves no files behind besides its CSV output.

Usage:
    from spotify_suite.core.logger import setup_logging, get_logger

    setup_logging(log_dir)            # Call once at startup (log_dir may be None)
    logger = get_logger(__name__)     # Get logger for each module

    logger.info("Fetching playlist")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that colors the level name on console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        return f"{color}{record.levelname}{Colors.RESET}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes through tqdm.write().

    Messages written this way appear above any active tqdm progress bar
    instead of tearing it apart.

    Attributes:
        stream: The output stream (defaults to sys.stderr).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            # Resolve stderr lazily so pytest's capture swap is honored
            tqdm.write(msg, file=self.stream or sys.stderr)
        except Exception:
            self.handleError(record)


class EnrichmentMissHandler(logging.Handler):
    """
    Handler that collects enrichment misses into a report file.

    Listens for log records carrying the 'enrichment_miss_track' extra field
    and writes them in a simple, human-readable format:

        Yesterday - The Beatles (before 1970)
        spotify:track:3BQHpFgAp4l80e1XslIjNI

    Records without the extra field are ignored.

    Attributes:
        report_path: Path to the enrichment_misses.log file.
        report_file: Open file handle (None until open() is called).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "enrichment_miss_track"):
            return

        if self.report_file is None:
            return

        try:
            track_name = getattr(record, "enrichment_miss_track", "Unknown")
            artist = getattr(record, "enrichment_miss_artist", "Unknown")
            year = getattr(record, "enrichment_miss_year", "")
            track_id = getattr(record, "enrichment_miss_track_id", "")

            self.report_file.write(f"{track_name} - {artist} (before {year})\n")
            if track_id:
                self.report_file.write(f"spotify:track:{track_id}\n")
            self.report_file.write("\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def setup_logging(log_dir: Path | None = None, verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    Call this ONCE at startup, after the configuration is loaded.

    Args:
        log_dir: Directory where log files are created. If None, only the
                 console handler is installed.
        verbose: Show DEBUG messages on the console.

    Behavior:
        1. Configure root logger level to DEBUG and drop existing handlers
        2. Add the colored console handler (INFO, or DEBUG if verbose)
        3. If log_dir is given:
           - Create it if it doesn't exist
           - log_full_{timestamp}.log at DEBUG
           - log_errors_{timestamp}.log filtered to ERROR+
           - enrichment_misses_{timestamp}.log via EnrichmentMissHandler
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    # spotipy and urllib3 are chatty at DEBUG
    for noisy in ("spotipy", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if log_dir is None:
        return

    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    full_handler = logging.FileHandler(
        log_dir / f"log_full_{timestamp}.log", mode="w", encoding="utf-8"
    )
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_handler = logging.FileHandler(
        log_dir / f"log_errors_{timestamp}.log", mode="w", encoding="utf-8"
    )
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    miss_handler = EnrichmentMissHandler(log_dir / f"enrichment_misses_{timestamp}.log")
    miss_handler.open()
    root_logger.addHandler(miss_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger configured by setup_logging().
    """
    return logging.getLogger(name)


def format_progress_message(processed: int, total: int, found: int) -> str:
    """
    Format the batch enrichment progress line.

    Example:
        format_progress_message(10, 25, 7)
        # "Progress: 10/25 processed, 7 albums found"
    """
    return f"Progress: {processed}/{total} processed, {found} albums found"


def log_enrichment_miss(
    logger: logging.Logger,
    track_name: str,
    artist: str,
    year: str,
    track_id: str = ""
) -> None:
    """
    Log an input row for which no original album was found.

    Attaches the extra fields EnrichmentMissHandler picks up to write
    enrichment_misses.log.

    Args:
        logger: The logger to use for the message.
        track_name: Track name from the input row.
        artist: Artist name from the input row.
        year: Release year from the input row (raw string).
        track_id: Spotify track id from the input row, may be empty.
    """
    logger.debug(
        f"No original album found for: {track_name} - {artist}",
        extra={
            "enrichment_miss_track": track_name,
            "enrichment_miss_artist": artist,
            "enrichment_miss_year": year,
            "enrichment_miss_track_id": track_id,
        }
    )


def shutdown_logging() -> None:
    """
    Flush, close and remove all handlers from the root logger.

    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
