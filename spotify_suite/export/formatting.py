"""
Export row formatting.

Maps a Track to the seven columns of a playlist export. Missing values get
fixed sentinels ("Unknown Artist", "Unknown Album") or an empty cell.
Numbers use the configured grouping and decimal separators.
"""

from spotify_suite.core.config import FormatConfig
from spotify_suite.spotify.models import Track
from spotify_suite.utils import format_duration, release_year


EXPORT_COLUMNS = (
    "Track Name",
    "Artist Name",
    "Album Name",
    "Album Year",
    "Track Duration",
    "Track Popularity",
    "Spotify Track ID",
)

UNKNOWN_TRACK = "Unknown Track"
UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"


def format_number(
    value: float,
    grouping_separator: str = ".",
    decimal_separator: str = ",",
    max_fraction_digits: int = 2
) -> str:
    """
    Format a number with grouping and up to `max_fraction_digits` decimals.

    Trailing zeros of the fraction are dropped.

    Examples:
        format_number(85)         # "85"
        format_number(1234.5)     # "1.234,5"
        format_number(1234567)    # "1.234.567"
    """
    rendered = f"{value:,.{max_fraction_digits}f}"
    integer_part, _, fraction = rendered.partition(".")
    fraction = fraction.rstrip("0")

    integer_part = integer_part.replace(",", grouping_separator)
    if fraction:
        return f"{integer_part}{decimal_separator}{fraction}"
    return integer_part


def format_track_row(track: Track, formatting: FormatConfig | None = None) -> dict[str, str]:
    """
    Build one export row for a track.

    Args:
        track: Collected track.
        formatting: Number separators (Turkish locale defaults).

    Returns:
        Dict keyed by EXPORT_COLUMNS.
    """
    formatting = formatting or FormatConfig()

    year = release_year(track.album_release_date)
    popularity = ""
    if track.popularity is not None:
        popularity = format_number(
            track.popularity,
            formatting.grouping_separator,
            formatting.decimal_separator,
        )

    return {
        "Track Name": track.name or UNKNOWN_TRACK,
        "Artist Name": ", ".join(track.artist_names) or UNKNOWN_ARTIST,
        "Album Name": track.album_name or UNKNOWN_ALBUM,
        "Album Year": str(year) if year else "",
        "Track Duration": format_duration(track.duration_ms) if track.duration_ms else "",
        "Track Popularity": popularity,
        "Spotify Track ID": track.id or "",
    }


def format_track_rows(
    tracks: list[Track],
    formatting: FormatConfig | None = None
) -> list[dict[str, str]]:
    """Format every track for export."""
    return [format_track_row(track, formatting) for track in tracks]
