"""
Row models for batch enrichment.

An InputRow is one line of the input CSV. An EnrichedRow is the same line
plus the four "New ..." columns, which stay empty when no original album
was found. Input fields are carried through untouched.
"""

from dataclasses import dataclass, field
from typing import Any

from spotify_suite.spotify.models import AlbumCandidate


# Input CSV columns (also the first four output columns)
TRACK_NAME = "Track Name"
ARTIST_NAME = "Artist Name"
RELEASE_YEAR = "Release Year"
SPOTIFY_TRACK_ID = "Spotify Track ID"

INPUT_COLUMNS = (TRACK_NAME, ARTIST_NAME, RELEASE_YEAR, SPOTIFY_TRACK_ID)

NEW_TRACK_NAME = "New Track Name"
NEW_ALBUM_NAME = "New Album Name"
NEW_ALBUM_RELEASE_YEAR = "New Album Release Year"
NEW_TRACK_SPOTIFY_ID = "New Track Spotify ID"

ENRICHED_COLUMNS = INPUT_COLUMNS + (
    NEW_TRACK_NAME,
    NEW_ALBUM_NAME,
    NEW_ALBUM_RELEASE_YEAR,
    NEW_TRACK_SPOTIFY_ID,
)


@dataclass(frozen=True)
class InputRow:
    """
    One row of the enrichment input.

    Attributes:
        track_name: Track name as written in the CSV.
        artist_name: Artist name as written in the CSV.
        release_year: Release year as written (raw string, may be invalid).
        spotify_track_id: Spotify track id, may be empty.
    """
    track_name: str
    artist_name: str
    release_year: str
    spotify_track_id: str = ""

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "InputRow":
        """Build an InputRow from a CSV record keyed by column name."""
        return cls(
            track_name=record.get(TRACK_NAME) or "",
            artist_name=record.get(ARTIST_NAME) or "",
            release_year=record.get(RELEASE_YEAR) or "",
            spotify_track_id=record.get(SPOTIFY_TRACK_ID) or "",
        )


@dataclass(frozen=True)
class EnrichedRow:
    """An input row with the original-album columns added."""
    input: InputRow
    new_track_name: str = ""
    new_album_name: str = ""
    new_album_release_year: str = ""
    new_track_spotify_id: str = ""

    @classmethod
    def empty(cls, row: InputRow) -> "EnrichedRow":
        return cls(input=row)

    @classmethod
    def from_candidate(cls, row: InputRow, candidate: AlbumCandidate) -> "EnrichedRow":
        return cls(
            input=row,
            new_track_name=candidate.track_name,
            new_album_name=candidate.album_name,
            new_album_release_year=str(candidate.release_year),
            new_track_spotify_id=candidate.track_id,
        )

    @property
    def has_match(self) -> bool:
        return bool(self.new_album_name)

    def to_csv_dict(self) -> dict[str, str]:
        """Return the row keyed by output column name."""
        return {
            TRACK_NAME: self.input.track_name,
            ARTIST_NAME: self.input.artist_name,
            RELEASE_YEAR: self.input.release_year,
            SPOTIFY_TRACK_ID: self.input.spotify_track_id,
            NEW_TRACK_NAME: self.new_track_name,
            NEW_ALBUM_NAME: self.new_album_name,
            NEW_ALBUM_RELEASE_YEAR: self.new_album_release_year,
            NEW_TRACK_SPOTIFY_ID: self.new_track_spotify_id,
        }


@dataclass(frozen=True)
class EnrichmentResult:
    """
    Outcome of an enrichment pass.

    Attributes:
        rows: One EnrichedRow per input row, in input order.
        processed: Number of rows processed.
        found: Number of rows with a non-empty new album.
    """
    rows: list[EnrichedRow] = field(default_factory=list)
    processed: int = 0
    found: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of processed rows that got an album (0.0 if none)."""
        if not self.processed:
            return 0.0
        return self.found / self.processed * 100
