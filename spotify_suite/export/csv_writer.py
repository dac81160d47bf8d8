"""
CSV output for spotify-suite.

Files are semicolon-separated, UTF-8, with CRLF line endings. Each file is
written to a temporary file in the target directory and renamed into place
once complete, so a crash never leaves a half-written CSV behind.
"""

import csv
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from spotify_suite.core.exceptions import ValidationError
from spotify_suite.core.file_manager import ensure_directory, generate_unique_path, sanitize_filename
from spotify_suite.core.logger import get_logger
from spotify_suite.enrichment.models import ENRICHED_COLUMNS, EnrichedRow
from spotify_suite.export.formatting import EXPORT_COLUMNS

logger = get_logger(__name__)


CSV_DELIMITER = ";"
CSV_LINE_TERMINATOR = "\r\n"


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of a playlist export.

    Attributes:
        filename: Name of the written file.
        full_path: Absolute path of the written file.
        track_count: Number of data rows written.
    """
    filename: str
    full_path: Path
    track_count: int


def write_csv(
    path: Path,
    fieldnames: Sequence[str],
    rows: Iterable[dict[str, str]]
) -> int:
    """
    Write rows to `path` atomically.

    Args:
        path: Destination file. Its directory must exist.
        fieldnames: Header row, in column order.
        rows: Rows keyed by fieldname.

    Returns:
        Number of data rows written.
    """
    directory = path.parent
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=directory)
    count = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=list(fieldnames),
                delimiter=CSV_DELIMITER,
                lineterminator=CSV_LINE_TERMINATOR,
                extrasaction="ignore",
            )
            writer.writeheader()
            for row in rows:
                writer.writerow(row)
                count += 1
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.remove(temp_name)
        raise

    logger.debug(f"Wrote {count} rows to {path}")
    return count


def export_tracks_to_csv(
    rows: list[dict[str, str]],
    playlist_name: str,
    directory: Path = Path(".")
) -> ExportResult:
    """
    Export formatted track rows to a new CSV file named after the playlist.

    The file name is sanitized and never overwrites an existing file
    (My_Playlist.csv, My_Playlist_1.csv, ...).

    Raises:
        ValidationError: If there are no rows or the playlist name is empty.
    """
    if not rows:
        raise ValidationError("No track data to export")
    if not playlist_name or not playlist_name.strip():
        raise ValidationError("Playlist name is required for export")

    ensure_directory(directory)
    path = generate_unique_path(sanitize_filename(playlist_name), ".csv", directory)

    missing_ids = sum(1 for row in rows if not row.get("Spotify Track ID"))
    if missing_ids:
        logger.warning(f"{missing_ids} exported tracks have no Spotify Track ID")

    count = write_csv(path, EXPORT_COLUMNS, rows)
    return ExportResult(filename=path.name, full_path=path.resolve(), track_count=count)


def write_enriched_csv(rows: list[EnrichedRow], path: Path) -> int:
    """Write enriched rows with the eight enrichment columns."""
    ensure_directory(path.parent)
    return write_csv(path, ENRICHED_COLUMNS, (row.to_csv_dict() for row in rows))
