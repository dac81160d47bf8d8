"""
File naming for exported playlists.

Exports are named after the playlist. The name is sanitized so it is valid
on every major operating system, and an existing file is never overwritten:
a numeric suffix is appended instead.

    "My Playlist"   -> My_Playlist.csv
    (second export) -> My_Playlist_1.csv
    "AC/DC: Live?"  -> AC_DC_Live.csv

Usage:
    from spotify_suite.core.file_manager import generate_unique_path

    path = generate_unique_path(sanitize_filename(playlist.name), ".csv", output_dir)
"""

import re
from pathlib import Path


# Characters that are invalid in filenames on various operating systems
_INVALID_CHARS_PATTERN = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE_PATTERN = re.compile(r"\s+")
_REPEATED_UNDERSCORE_PATTERN = re.compile(r"_{2,}")

_MAX_FILENAME_LENGTH = 100

FALLBACK_FILENAME = "playlist"


def sanitize_filename(name: str) -> str:
    """
    Sanitize a playlist name for use as a filename (without extension).

    Args:
        name: The string to sanitize.

    Returns:
        A sanitized string safe for use in filenames.

    Behavior:
        - Replaces < > : " / \\ | ? * with underscores
        - Replaces whitespace runs with a single underscore
        - Collapses repeated underscores
        - Strips leading/trailing underscores
        - Truncates to 100 characters
        - Returns "playlist" if nothing is left
    """
    sanitized = _INVALID_CHARS_PATTERN.sub("_", name)
    sanitized = _WHITESPACE_PATTERN.sub("_", sanitized)
    sanitized = _REPEATED_UNDERSCORE_PATTERN.sub("_", sanitized)
    sanitized = sanitized.strip("_")
    sanitized = sanitized[:_MAX_FILENAME_LENGTH]

    return sanitized or FALLBACK_FILENAME


def generate_unique_path(
    base_name: str,
    extension: str = ".csv",
    directory: Path = Path(".")
) -> Path:
    """
    Return a path in `directory` that does not exist yet.

    Tries `{base_name}{extension}`, then `{base_name}_1{extension}`,
    `{base_name}_2{extension}`, and so on.

    Args:
        base_name: Already sanitized file stem.
        extension: File extension including the dot.
        directory: Target directory.

    Example:
        generate_unique_path("My_Playlist", ".csv", Path("exports"))
        # exports/My_Playlist.csv, or exports/My_Playlist_1.csv if taken
    """
    candidate = directory / f"{base_name}{extension}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{base_name}_{counter}{extension}"
        counter += 1
    return candidate


def ensure_directory(path: Path) -> Path:
    """Create `path` (and parents) if needed and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path
