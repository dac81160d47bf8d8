"""
Album finding for spotify-suite.

Given a track name and an artist, finds every album the track appears on
and picks the earliest one. Used to recover the original release of a
track that a playlist references through a compilation or remaster.

Matching policy:
    Track search is permissive: a result is kept when its name CONTAINS the
    queried name and one of its artists CONTAINS the queried artist (both
    case-insensitive). This is looser than playlist name
    matching, which is exact.

Ordering:
    Candidates are sorted by release year, then by album name (case and
    accent insensitive). "Earliest" always means the first element after
    this sort. Year 0 (unknown) never passes a before-year filter.

Usage:
    finder = AlbumFinder(client)
    original = finder.find_earliest_before_year("Yesterday", "The Beatles", 1970)
"""

import unicodedata
from typing import Iterable

from spotify_suite.core.logger import get_logger
from spotify_suite.spotify.client import SpotifyClient
from spotify_suite.spotify.models import AlbumCandidate

logger = get_logger(__name__)


SEARCH_LIMIT = 50

REGULAR_ALBUM_TYPE = "album"


def build_track_query(track_name: str, artist_name: str) -> str:
    """Build a field-filtered track search query."""
    return f'track:"{track_name}" artist:"{artist_name}"'


def _album_name_key(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def sort_candidates(candidates: Iterable[AlbumCandidate]) -> list[AlbumCandidate]:
    """Sort candidates by release year, then album name (stable)."""
    return sorted(
        candidates,
        key=lambda c: (c.release_year, _album_name_key(c.album_name), c.album_name),
    )


def filter_candidates(
    candidates: Iterable[AlbumCandidate],
    album_type: str | None = None,
    before_year: int | None = None
) -> list[AlbumCandidate]:
    """
    Filter candidates by album type and release year.

    Args:
        candidates: Candidates to filter.
        album_type: Keep only this type (case-insensitive exact match).
        before_year: Keep only candidates with 0 < release_year < before_year.
    """
    result = list(candidates)
    if album_type:
        wanted = album_type.casefold()
        result = [c for c in result if c.album_type.casefold() == wanted]
    if before_year is not None:
        result = [c for c in result if 0 < c.release_year < before_year]
    return result


class AlbumFinder:
    """
    Finds album appearances of a track.

    Attributes:
        client: Authenticated SpotifyClient.
        date_format: strftime format for AlbumCandidate.release_date.
    """

    def __init__(self, client: SpotifyClient, date_format: str = "%d.%m.%Y") -> None:
        self.client = client
        self.date_format = date_format

    def search_tracks(self, track_name: str, artist_name: str) -> list[AlbumCandidate]:
        """
        Search for a track and return one candidate per matching result.

        Args:
            track_name: Track name, matched as a case-insensitive substring.
            artist_name: Artist name, matched as a case-insensitive substring
                         of any credited artist.

        Returns:
            Candidates in search order.
        """
        query = build_track_query(track_name, artist_name)
        response = self.client.search(query, "track", limit=SEARCH_LIMIT)
        items = (response.get("tracks") or {}).get("items") or []

        wanted_track = track_name.casefold()
        wanted_artist = artist_name.casefold()

        candidates = []
        for item in items:
            if not item:
                continue
            name = (item.get("name") or "").casefold()
            if wanted_track not in name:
                continue
            artists = item.get("artists") or []
            if not any(
                wanted_artist in (artist.get("name") or "").casefold()
                for artist in artists if artist
            ):
                continue
            candidates.append(AlbumCandidate.from_spotify_api(item, self.date_format))

        logger.debug(
            f"Track search {query!r}: {len(candidates)} of {len(items)} results match"
        )
        return candidates

    def get_album_candidates(
        self,
        track_name: str,
        artist_name: str,
        album_type: str | None = None,
        before_year: int | None = None
    ) -> list[AlbumCandidate]:
        """Search, filter and sort album candidates for a track."""
        candidates = self.search_tracks(track_name, artist_name)
        return sort_candidates(filter_candidates(candidates, album_type, before_year))

    def find_earliest_before_year(
        self,
        track_name: str,
        artist_name: str,
        year: int
    ) -> AlbumCandidate | None:
        """
        Return the earliest regular album released before `year`.

        Singles and compilations are ignored. Returns None if no album
        with a known release year before `year` contains the track.
        """
        candidates = self.get_album_candidates(
            track_name, artist_name, album_type=REGULAR_ALBUM_TYPE, before_year=year
        )
        return candidates[0] if candidates else None
