"""
Playlist creation for spotify-suite.

Creates a playlist for the authorized user and fills it with tracks in
chunks of at most 100 (the API's per-request limit).

Accounting:
    skipped     ids that are not non-empty strings, never sent
    failed      every id of a chunk the API rejected
    successful  every id of a chunk the API accepted

    successful + failed + skipped == len(ids)

A failed chunk is not retried track by track: the chunk is the unit of
failure.
"""

from datetime import date
from typing import Any, Sequence

from spotify_suite.core.exceptions import SpotifySuiteError
from spotify_suite.core.logger import get_logger
from spotify_suite.core.pacing import Pacer
from spotify_suite.spotify.client import SpotifyClient
from spotify_suite.spotify.models import BatchAddResult, Playlist
from spotify_suite.utils import chunked

logger = get_logger(__name__)


CHUNK_SIZE = 100

DESCRIPTION_PREFIX = "Created via Spotify Suite"


def playlist_description(today: date | None = None) -> str:
    """Return the description stamped on created playlists."""
    today = today or date.today()
    return f"{DESCRIPTION_PREFIX} - {today.strftime('%d.%m.%Y')}"


class PlaylistWriter:
    """
    Creates playlists and adds tracks to them.

    Attributes:
        client: SpotifyClient authorized with playlist-modify scopes.
        pacer: Pacing between chunk submissions (100 ms by default).
        chunk_size: Maximum tracks per add request.
    """

    def __init__(
        self,
        client: SpotifyClient,
        pacer: Pacer | None = None,
        chunk_size: int = CHUNK_SIZE
    ) -> None:
        self.client = client
        self.pacer = pacer or Pacer()
        self.chunk_size = chunk_size

    def current_user_id(self) -> str:
        """Return the id of the authorized user."""
        profile = self.client.current_user()
        user_id = profile.get("id")
        if not user_id:
            raise SpotifySuiteError("Could not determine the current user's id")
        return user_id

    def create_playlist(self, user_id: str, name: str, is_public: bool = True) -> Playlist:
        """
        Create an empty playlist.

        Args:
            user_id: Owner of the new playlist (the authorized user).
            name: Playlist name.
            is_public: Public (True) or private (False).

        Returns:
            The created Playlist.
        """
        data = self.client.create_playlist(
            user_id,
            name,
            public=is_public,
            description=playlist_description(),
        )
        playlist = Playlist.from_spotify_api(data)
        logger.info(f"Created playlist: {playlist.name} ({playlist.id})")
        return playlist

    def add_tracks(self, playlist_id: str, ids: Sequence[Any]) -> BatchAddResult:
        """
        Add tracks to a playlist in chunks.

        Args:
            playlist_id: Target playlist id.
            ids: Candidate track ids. Anything that is not a non-empty
                 string is skipped.

        Returns:
            BatchAddResult whose counts sum to len(ids).
        """
        valid_ids = []
        skipped = 0
        for track_id in ids:
            if isinstance(track_id, str) and track_id.strip():
                valid_ids.append(track_id.strip())
            else:
                skipped += 1

        if skipped:
            logger.warning(f"Skipping {skipped} invalid track ids")

        successful = 0
        failed = 0
        chunks = list(chunked(valid_ids, self.chunk_size))

        self.pacer.reset()
        for number, chunk in enumerate(chunks, start=1):
            self.pacer.pause()
            uris = [f"spotify:track:{track_id}" for track_id in chunk]
            try:
                self.client.add_items(playlist_id, uris)
            except SpotifySuiteError as e:
                failed += len(chunk)
                logger.error(f"Failed to add batch {number}/{len(chunks)}: {e.message}")
                continue
            successful += len(chunk)
            logger.info(f"Added batch {number}/{len(chunks)}: {len(chunk)} tracks")

        return BatchAddResult(successful=successful, failed=failed, skipped=skipped)
