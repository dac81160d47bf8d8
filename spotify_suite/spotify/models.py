"""
Data models for Spotify entities.

This module defines immutable dataclasses representing the Spotify objects
the suite works with: playlists, playlist tracks, and album candidates found
while searching for the original release of a track.

Design Decisions:
    - All dataclasses are frozen (immutable) to prevent accidental modification
    - Each model has a from_spotify_api() factory that owns the mapping from
      the raw JSON, including what happens when an optional field is missing
    - Sentinels ("Unknown", 0, "") replace missing optional values so the rest
      of the code never has to deal with None where a display value is needed

Usage:
    from spotify_suite.spotify.models import Playlist, Track, AlbumCandidate

    playlist = Playlist.from_spotify_api(client.playlist(playlist_id))
"""

from dataclasses import dataclass
from datetime import date
from typing import Any

from spotify_suite.utils import parse_release_date


UNKNOWN = "Unknown"
UNKNOWN_ALBUM_TYPE = "Unknown"


@dataclass(frozen=True)
class Playlist:
    """
    Immutable representation of a Spotify playlist (metadata only).

    Attributes:
        id: Spotify playlist ID (base62 string).
            Example: "37i9dQZF1DXcBWIGoYBM5M"

        name: Playlist name as shown on Spotify.

        owner_id: Spotify user id of the owner. "Unknown" if missing.

        owner_display_name: Owner display name. Falls back to owner_id,
                            then "Unknown".

        is_public: Whether the playlist is public. None if Spotify did not say.

        track_total: Number of tracks reported by Spotify (0 if missing).

        description: Playlist description ("" if missing).

        followers_total: Follower count (0 if missing; search results
                         usually omit it).

        url: open.spotify.com URL ("" if missing).

    Example:
        playlist = Playlist.from_spotify_api(search_result_item)
        print(f"{playlist.name} by {playlist.owner_display_name}")
    """

    id: str
    name: str
    owner_id: str = UNKNOWN
    owner_display_name: str = UNKNOWN
    is_public: bool | None = None
    track_total: int = 0
    description: str = ""
    followers_total: int = 0
    url: str = ""

    @classmethod
    def from_spotify_api(cls, data: dict[str, Any]) -> "Playlist":
        """
        Create a Playlist from a playlist object (full or simplified).

        Args:
            data: Response from GET /playlists/{id}, or one item of a
                  playlist search result.

        Returns:
            Playlist: A new Playlist instance.
        """
        owner = data.get("owner") or {}
        owner_id = owner.get("id") or UNKNOWN
        tracks = data.get("tracks") or {}
        followers = data.get("followers") or {}

        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            owner_id=owner_id,
            owner_display_name=owner.get("display_name") or owner_id,
            is_public=data.get("public"),
            track_total=tracks.get("total") or 0,
            description=data.get("description") or "",
            followers_total=followers.get("total") or 0,
            url=(data.get("external_urls") or {}).get("spotify", ""),
        )

    @property
    def visibility(self) -> str:
        """Human-readable visibility label."""
        if self.is_public is None:
            return UNKNOWN
        return "Public" if self.is_public else "Private"


@dataclass(frozen=True)
class Track:
    """
    Immutable representation of a playlist track.

    Only the fields requested by the playlist items projection are kept:
    id, name, artists, album name and release date, duration and popularity.

    Attributes:
        id: Spotify track ID. None for local files and unavailable tracks
            (the collector drops those).
        name: Track title ("" if missing).
        artist_names: Names of all credited artists, in order.
        album_name: Album name ("" if missing).
        album_release_date: Raw Spotify release date ("1975", "1975-11",
                            "1975-11-21"), "" if missing.
        duration_ms: Duration in milliseconds, None if missing.
        popularity: Spotify popularity score (0-100), None if missing.
    """

    id: str | None
    name: str
    artist_names: tuple[str, ...] = ()
    album_name: str = ""
    album_release_date: str = ""
    duration_ms: int | None = None
    popularity: int | None = None

    @classmethod
    def from_spotify_api(cls, track_data: dict[str, Any]) -> "Track":
        """
        Create a Track from the 'track' field of a playlist item.

        Args:
            track_data: Track object as returned in playlist items.

        Returns:
            Track: A new Track instance.
        """
        album = track_data.get("album") or {}
        artists = track_data.get("artists") or []

        return cls(
            id=track_data.get("id"),
            name=track_data.get("name") or "",
            artist_names=tuple(
                artist["name"] for artist in artists
                if artist and artist.get("name")
            ),
            album_name=album.get("name") or "",
            album_release_date=album.get("release_date") or "",
            duration_ms=track_data.get("duration_ms"),
            popularity=track_data.get("popularity"),
        )


@dataclass(frozen=True)
class AlbumCandidate:
    """
    One album appearance of a track, found through track search.

    The same recording usually shows up on several releases (original album,
    single, compilations, remasters). Sorting candidates by release year
    yields the earliest appearance.

    Attributes:
        track_name: Track title on this release.
        album_name: Album name ("Unknown Album" if missing).
        album_id: Spotify album ID ("" if missing).
        album_type: Capitalized album type: "Album", "Single", "Compilation",
                    or "Unknown".
        release_date: Display form of the release date (formatted with the
                      configured date format), or "Unknown".
        release_year: Release year, 0 if unknown.
        track_artists: Names of the credited artists.
        track_id: Spotify track ID of this appearance ("" if missing).
    """

    track_name: str
    album_name: str
    album_id: str
    album_type: str
    release_date: str
    release_year: int
    track_artists: tuple[str, ...]
    track_id: str

    @classmethod
    def from_spotify_api(
        cls,
        track_data: dict[str, Any],
        date_format: str = "%d.%m.%Y"
    ) -> "AlbumCandidate":
        """
        Create an AlbumCandidate from a track search result item.

        Args:
            track_data: Track object from GET /search?type=track.
            date_format: strftime format for the display release date.

        Returns:
            AlbumCandidate: A new instance. Unparsable release dates give
                            release_year 0 and release_date "Unknown".
        """
        album = track_data.get("album") or {}
        album_type = album.get("album_type") or ""
        released: date | None = parse_release_date(album.get("release_date"))
        artists = track_data.get("artists") or []

        return cls(
            track_name=track_data.get("name") or "Unknown Track",
            album_name=album.get("name") or "Unknown Album",
            album_id=album.get("id") or "",
            album_type=album_type[:1].upper() + album_type[1:] if album_type else UNKNOWN_ALBUM_TYPE,
            release_date=released.strftime(date_format) if released else UNKNOWN,
            release_year=released.year if released else 0,
            track_artists=tuple(
                artist["name"] for artist in artists
                if artist and artist.get("name")
            ),
            track_id=track_data.get("id") or "",
        )

    @property
    def track_artists_display(self) -> str:
        """Comma-separated artist names, "Unknown Artist" if none."""
        return ", ".join(self.track_artists) or "Unknown Artist"


@dataclass(frozen=True)
class BatchAddResult:
    """
    Outcome of adding a list of track ids to a playlist.

    Invariant: successful + failed + skipped == number of ids submitted.

    Attributes:
        successful: Tracks sent in chunks the API accepted.
        failed: Tracks sent in chunks the API rejected.
        skipped: Ids that were empty or not strings and were never sent.
    """

    successful: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.successful + self.failed + self.skipped
