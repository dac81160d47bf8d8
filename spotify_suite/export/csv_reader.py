"""
CSV input for spotify-suite.

Reads the semicolon-separated, UTF-8 files the suite produces and consumes:
    - Header row required
    - Empty lines skipped
    - Values trimmed
    - A UTF-8 BOM (Excel) is tolerated
"""

import csv
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from spotify_suite.core.exceptions import ValidationError
from spotify_suite.core.logger import get_logger
from spotify_suite.enrichment.models import (
    INPUT_COLUMNS,
    RELEASE_YEAR,
    SPOTIFY_TRACK_ID,
    TRACK_NAME,
    InputRow,
)
from spotify_suite.utils import parse_leading_int

logger = get_logger(__name__)


CSV_DELIMITER = ";"

MIN_RELEASE_YEAR = 1900


@dataclass(frozen=True)
class InputValidation:
    """
    Result of validating input records.

    Attributes:
        record_count: Number of data rows.
        invalid_years: 1-based row numbers whose year is missing or out of range.
    """
    record_count: int
    invalid_years: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class TrackIdExtraction:
    """
    Track ids extracted for playlist creation.

    Attributes:
        track_ids: Non-empty ids in file order.
        invalid_rows: 1-based row numbers without an id.
    """
    track_ids: list[str]
    invalid_rows: list[int] = field(default_factory=list)


def read_csv_records(path: Path) -> list[dict[str, str]]:
    """
    Read a semicolon-separated CSV file into a list of dicts.

    Raises:
        ValidationError: If the file is missing or cannot be decoded.
    """
    if not path.is_file():
        raise ValidationError(
            f"Input file not found: {path}",
            details={"file_path": str(path)}
        )

    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f, delimiter=CSV_DELIMITER)
            records = []
            for raw in reader:
                record = {
                    (key or "").strip(): (value or "").strip()
                    for key, value in raw.items()
                    if key is not None
                }
                # Skip blank lines and rows made only of delimiters
                if not any(record.values()):
                    continue
                records.append(record)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise ValidationError(
            f"Failed to read CSV file {path}: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    logger.debug(f"Read {len(records)} records from {path}")
    return records


def validate_input_records(
    records: list[dict[str, str]],
    required_columns: tuple[str, ...] = INPUT_COLUMNS,
    current_year: int | None = None
) -> InputValidation:
    """
    Validate the enrichment input schema.

    Raises:
        ValidationError: If there are no records or required columns are missing.

    Returns:
        InputValidation. Rows whose year is missing or outside
        1900..current_year+1 are reported, not rejected.
    """
    if not records:
        raise ValidationError("CSV file is empty or has no data rows")

    present = set(records[0].keys())
    missing = [column for column in required_columns if column not in present]
    if missing:
        raise ValidationError(
            f"Missing required columns: {', '.join(missing)}",
            details={"missing": missing, "required": list(required_columns)}
        )

    max_year = (current_year or date.today().year) + 1
    invalid_years = []
    if RELEASE_YEAR in required_columns:
        for number, record in enumerate(records, start=1):
            year = parse_leading_int(record.get(RELEASE_YEAR))
            if year is None or not MIN_RELEASE_YEAR <= year <= max_year:
                invalid_years.append(number)

    if invalid_years:
        logger.warning(
            f"{len(invalid_years)} rows have a missing or implausible release year"
        )

    return InputValidation(record_count=len(records), invalid_years=invalid_years)


def to_input_rows(records: list[dict[str, str]]) -> list[InputRow]:
    """Convert CSV records to InputRow objects."""
    return [InputRow.from_record(record) for record in records]


def extract_track_ids(records: list[dict[str, str]]) -> TrackIdExtraction:
    """
    Collect the Spotify Track ID column for playlist creation.

    Raises:
        ValidationError: If there are no records or the column is missing.
    """
    validate_input_records(records, required_columns=(SPOTIFY_TRACK_ID,))

    track_ids = []
    invalid_rows = []
    for number, record in enumerate(records, start=1):
        track_id = record.get(SPOTIFY_TRACK_ID, "").strip()
        if track_id:
            track_ids.append(track_id)
        else:
            invalid_rows.append(number)
            logger.debug(
                f"Row {number}: no Spotify Track ID ({record.get(TRACK_NAME, 'Unknown')})"
            )

    return TrackIdExtraction(track_ids=track_ids, invalid_rows=invalid_rows)
