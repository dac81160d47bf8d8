"""
Spotify module for spotify-suite.

    - client: Authenticated Web API client with error translation
    - models: Playlist, Track, AlbumCandidate, BatchAddResult
    - resolver: Playlist lookup by name, URL or id
    - selection: Disambiguation strategies for name lookups
    - collector: Paginated playlist track collection
    - albums: Album appearances of a track, earliest first
    - writer: Playlist creation and chunked track adds
"""

from spotify_suite.spotify.albums import AlbumFinder, filter_candidates, sort_candidates
from spotify_suite.spotify.client import PLAYLIST_MODIFY_SCOPES, SpotifyClient
from spotify_suite.spotify.collector import TrackCollector
from spotify_suite.spotify.models import AlbumCandidate, BatchAddResult, Playlist, Track
from spotify_suite.spotify.resolver import PlaylistResolver, parse_playlist_url
from spotify_suite.spotify.selection import (
    FailFastSelector,
    FirstMatchSelector,
    InteractiveSelector,
)
from spotify_suite.spotify.writer import PlaylistWriter

__all__ = [
    "SpotifyClient",
    "PLAYLIST_MODIFY_SCOPES",
    "Playlist",
    "Track",
    "AlbumCandidate",
    "BatchAddResult",
    "PlaylistResolver",
    "parse_playlist_url",
    "InteractiveSelector",
    "FirstMatchSelector",
    "FailFastSelector",
    "TrackCollector",
    "AlbumFinder",
    "filter_candidates",
    "sort_candidates",
    "PlaylistWriter",
]
