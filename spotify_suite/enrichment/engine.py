"""
Batch enrichment engine for spotify-suite.

Drives the AlbumFinder over every row of an input CSV and adds the earliest
original album released before the row's year.

Per-row outcome (terminal in one step):
    invalid input   -> empty enrichment, no remote call
    match           -> enrichment filled from the earliest candidate
    no match        -> empty enrichment
    error           -> empty enrichment, error logged, batch continues

Guarantees:
    - One output row per input row, in input order
    - Input columns are never modified
    - Remote calls are paced (100 ms by default), never after the last row
    - A progress line every N rows (10 by default) and on the last row
"""

from typing import Callable, Sequence

from spotify_suite.core.logger import (
    format_progress_message,
    get_logger,
    log_enrichment_miss,
)
from spotify_suite.core.pacing import Pacer
from spotify_suite.enrichment.models import EnrichedRow, EnrichmentResult, InputRow
from spotify_suite.spotify.albums import AlbumFinder
from spotify_suite.utils import parse_leading_int

logger = get_logger(__name__)


DEFAULT_PROGRESS_INTERVAL = 10


def parse_row_year(row: InputRow) -> int | None:
    """
    Validate a row and return its release year.

    Returns None if the track name or artist name is blank, or the year
    does not start with an integer.
    """
    if not row.track_name.strip() or not row.artist_name.strip():
        return None
    return parse_leading_int(row.release_year)


class EnrichmentEngine:
    """
    Enriches input rows with original-album data.

    Attributes:
        finder: AlbumFinder used for lookups.
        pacer: Pacing between remote-calling rows.
        progress_interval: Rows between progress lines.
        on_row: Optional callback(index, enriched_row) after each row.
    """

    def __init__(
        self,
        finder: AlbumFinder,
        pacer: Pacer | None = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        on_row: Callable[[int, EnrichedRow], None] | None = None
    ) -> None:
        self.finder = finder
        self.pacer = pacer or Pacer()
        self.progress_interval = progress_interval
        self.on_row = on_row

    def enrich(self, rows: Sequence[InputRow]) -> EnrichmentResult:
        """
        Enrich every row.

        Args:
            rows: Input rows.

        Returns:
            EnrichmentResult with len(rows) enriched rows.
        """
        total = len(rows)
        enriched: list[EnrichedRow] = []
        found = 0

        logger.info(f"Processing {total} tracks...")
        self.pacer.reset()

        for index, row in enumerate(rows):
            result = self._enrich_row(index, row)
            enriched.append(result)
            if result.has_match:
                found += 1
            else:
                log_enrichment_miss(
                    logger,
                    row.track_name,
                    row.artist_name,
                    row.release_year,
                    row.spotify_track_id,
                )

            processed = index + 1
            if processed % self.progress_interval == 0 or processed == total:
                logger.info(format_progress_message(processed, total, found))

            if self.on_row is not None:
                self.on_row(index, result)

        return EnrichmentResult(rows=enriched, processed=total, found=found)

    def _enrich_row(self, index: int, row: InputRow) -> EnrichedRow:
        year = parse_row_year(row)
        if year is None:
            logger.warning(
                f"Row {index + 1}: missing track name, artist or valid release year, skipping"
            )
            return EnrichedRow.empty(row)

        self.pacer.pause()
        try:
            candidate = self.finder.find_earliest_before_year(
                row.track_name, row.artist_name, year
            )
        except Exception as e:
            logger.error(
                f"Row {index + 1}: lookup failed for "
                f"'{row.track_name}' by '{row.artist_name}': {e}"
            )
            logger.debug("Lookup failure details", exc_info=True)
            return EnrichedRow.empty(row)

        if candidate is None:
            logger.debug(f"Row {index + 1}: no album before {year} for '{row.track_name}'")
            return EnrichedRow.empty(row)

        logger.debug(
            f"Row {index + 1}: '{row.track_name}' -> "
            f"{candidate.album_name} ({candidate.release_year})"
        )
        return EnrichedRow.from_candidate(row, candidate)
