"""CSV reading, writing and export row formatting."""

from spotify_suite.export.csv_reader import (
    extract_track_ids,
    read_csv_records,
    to_input_rows,
    validate_input_records,
)
from spotify_suite.export.csv_writer import (
    ExportResult,
    export_tracks_to_csv,
    write_csv,
    write_enriched_csv,
)
from spotify_suite.export.formatting import format_track_row, format_track_rows

__all__ = [
    "read_csv_records",
    "validate_input_records",
    "to_input_rows",
    "extract_track_ids",
    "ExportResult",
    "export_tracks_to_csv",
    "write_csv",
    "write_enriched_csv",
    "format_track_row",
    "format_track_rows",
]
