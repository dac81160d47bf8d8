"""
Playlist resolution for spotify-suite.

Turns what the user typed into exactly one Playlist. Three modes, one per
invocation:

    by name (+ owner)  Search, keep exact case-insensitive name matches,
                       optionally filter by owner id, then disambiguate.
    by URL             Parse https://open.spotify.com/playlist/<id> or
                       spotify:playlist:<id>, then resolve by id.
    by id              Fetch directly.

Every "nothing to resolve" outcome raises NotFoundError.

Usage:
    resolver = PlaylistResolver(client, selector=InteractiveSelector())
    playlist = resolver.resolve("name", "Discover Weekly", owner="spotify")
"""

import re

from spotify_suite.core.exceptions import ApiError, InvalidUrlError, NotFoundError, ValidationError
from spotify_suite.core.logger import get_logger
from spotify_suite.spotify.client import SpotifyClient
from spotify_suite.spotify.models import Playlist
from spotify_suite.spotify.selection import InteractiveSelector, PlaylistSelector

logger = get_logger(__name__)


SEARCH_LIMIT = 50

_PLAYLIST_URL_PATTERNS = (
    re.compile(r"open\.spotify\.com/(?:intl-[a-z]{2}/)?playlist/([a-zA-Z0-9]+)"),
    re.compile(r"^spotify:playlist:([a-zA-Z0-9]+)$"),
)

RESOLVE_MODES = ("name", "url", "id")


def parse_playlist_url(url: str) -> str:
    """
    Extract the playlist id from a Spotify playlist URL or URI.

    Args:
        url: Web link (query string allowed) or spotify:playlist: URI.

    Returns:
        The playlist id.

    Raises:
        InvalidUrlError: If the input matches neither form.

    Examples:
        parse_playlist_url("https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=x")
        # "37i9dQZF1DXcBWIGoYBM5M"
        parse_playlist_url("spotify:playlist:37i9dQZF1DXcBWIGoYBM5M")
        # "37i9dQZF1DXcBWIGoYBM5M"
    """
    candidate = url.strip()
    for pattern in _PLAYLIST_URL_PATTERNS:
        match = pattern.search(candidate)
        if match:
            return match.group(1)

    raise InvalidUrlError(
        f"Invalid playlist URL: {url}. Use https://open.spotify.com/playlist/<id> "
        "or spotify:playlist:<id>",
        details={"url": url}
    )


class PlaylistResolver:
    """
    Resolves a single playlist by name, URL or id.

    Attributes:
        client: Authenticated SpotifyClient.
        selector: Strategy used when a name search returns several matches.
    """

    def __init__(
        self,
        client: SpotifyClient,
        selector: PlaylistSelector | None = None
    ) -> None:
        self.client = client
        self.selector = selector or InteractiveSelector()

    # =========================================================================
    # By Name
    # =========================================================================

    def search_by_name(self, name: str, owner: str | None = None) -> list[Playlist]:
        """
        Search playlists and keep exact name (and owner) matches.

        Args:
            name: Playlist name. Compared case-insensitively and exactly,
                  never as a substring.
            owner: Optional owner user id, compared the same way.

        Returns:
            Matching playlists in search order (possibly empty).
        """
        query = f"{name} owner:{owner}" if owner else name
        logger.debug(f"Searching playlists: {query!r}")

        response = self.client.search(query, "playlist", limit=SEARCH_LIMIT)
        items = (response.get("playlists") or {}).get("items") or []

        matches = []
        for item in items:
            # Search results can contain null entries
            if not item:
                continue
            playlist = Playlist.from_spotify_api(item)
            if playlist.name.lower() != name.lower():
                continue
            if owner and playlist.owner_id.lower() != owner.lower():
                continue
            matches.append(playlist)

        logger.debug(f"{len(matches)} of {len(items)} search results match exactly")
        return matches

    def resolve_by_name(self, name: str, owner: str | None = None) -> Playlist:
        """
        Resolve a playlist by exact name and optional owner.

        Raises:
            NotFoundError: If nothing matches.
            ValidationError: If the selector rejects the choice.
        """
        matches = self.search_by_name(name, owner)
        if not matches:
            by_owner = f" owned by '{owner}'" if owner else ""
            raise NotFoundError(
                f"No playlist found with name '{name}'{by_owner}",
                details={"name": name, "owner": owner},
                status=None,
            )
        return self.select_playlist(matches)

    def select_playlist(self, candidates: list[Playlist]) -> Playlist:
        """Return the only candidate, or let the selector choose."""
        if len(candidates) == 1:
            return candidates[0]
        logger.info(f"Found {len(candidates)} playlists with the same name")
        return self.selector(candidates)

    # =========================================================================
    # By URL / Id
    # =========================================================================

    def resolve_by_url(self, url: str) -> Playlist:
        """Resolve a playlist from its URL or URI."""
        return self.resolve_by_id(parse_playlist_url(url))

    def resolve_by_id(self, playlist_id: str) -> Playlist:
        """
        Fetch a playlist by id.

        Raises:
            NotFoundError: If Spotify answers 404 (missing or not public).
            ApiError: For any other remote rejection.
        """
        try:
            data = self.client.playlist(playlist_id)
        except ApiError as e:
            if e.status == 404:
                raise NotFoundError(
                    "Playlist not found. Please check the playlist ID and ensure it is public.",
                    details={"playlist_id": playlist_id}
                ) from e
            raise
        return Playlist.from_spotify_api(data)

    def resolve(self, mode: str, value: str, owner: str | None = None) -> Playlist:
        """
        Resolve a playlist in one of the modes "name", "url" or "id".

        Raises:
            ValidationError: For an unknown mode or an empty value.
        """
        if not value or not value.strip():
            raise ValidationError(f"Playlist {mode} must not be empty")

        if mode == "name":
            playlist = self.resolve_by_name(value.strip(), owner)
        elif mode == "url":
            playlist = self.resolve_by_url(value)
        elif mode == "id":
            playlist = self.resolve_by_id(value.strip())
        else:
            raise ValidationError(
                f"Unknown resolution mode '{mode}'",
                details={"mode": mode, "allowed": list(RESOLVE_MODES)}
            )

        logger.info(f"Resolved playlist: {playlist.name} ({playlist.id})")
        return playlist
