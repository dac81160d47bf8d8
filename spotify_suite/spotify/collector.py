"""
Track collection for spotify-suite.

Pages through a playlist's items and returns a flat list of Track objects.

Pagination:
    - 50 items per request with a minimal field projection
    - The first response's `total` is authoritative
    - The loop runs while offset < total

Filtering:
    Items whose track is null or has no id (removed, region-blocked and
    local tracks) are dropped silently. The result can therefore be shorter
    than the playlist's reported total.
"""

from spotify_suite.core.exceptions import ApiError
from spotify_suite.core.logger import get_logger
from spotify_suite.core.pacing import Pacer, no_delay
from spotify_suite.spotify.client import SpotifyClient
from spotify_suite.spotify.models import Track

logger = get_logger(__name__)


PAGE_SIZE = 50

ITEM_FIELDS = (
    "total,items(track(id,name,artists(name),album(name,release_date),"
    "duration_ms,popularity))"
)


class TrackCollector:
    """
    Collects every track of a playlist.

    Attributes:
        client: Authenticated SpotifyClient.
        page_size: Items per request.
        pacer: Pacing between page requests (no delay by default).
    """

    def __init__(
        self,
        client: SpotifyClient,
        page_size: int = PAGE_SIZE,
        pacer: Pacer | None = None
    ) -> None:
        self.client = client
        self.page_size = page_size
        self.pacer = pacer or Pacer(no_delay())

    def collect(self, playlist_id: str, deduplicate: bool = False) -> list[Track]:
        """
        Fetch all tracks of a playlist, in playlist order.

        Args:
            playlist_id: Spotify playlist id.
            deduplicate: Keep only the first occurrence of each track id.

        Returns:
            List of Track objects with non-empty ids.

        Raises:
            ApiError: If a page response has no 'items'.
            AuthError, NetworkError: From the client.
        """
        tracks: list[Track] = []
        offset = 0
        total: int | None = None
        dropped = 0

        self.pacer.reset()
        while total is None or offset < total:
            self.pacer.pause()
            page = self.client.playlist_items(
                playlist_id,
                offset=offset,
                limit=self.page_size,
                fields=ITEM_FIELDS,
            )

            items = page.get("items")
            if items is None:
                raise ApiError(
                    "Unexpected playlist items response: missing 'items'",
                    details={"playlist_id": playlist_id, "offset": offset}
                )

            if total is None:
                total = page.get("total") or 0
                logger.debug(f"Playlist {playlist_id} reports {total} items")

            for item in items:
                track_data = (item or {}).get("track")
                if not track_data or not track_data.get("id"):
                    dropped += 1
                    continue
                tracks.append(Track.from_spotify_api(track_data))

            # Stop on an empty page even if the reported total is larger
            if not items:
                break
            offset += self.page_size

        if dropped:
            logger.debug(f"Dropped {dropped} unavailable items")

        if deduplicate:
            tracks = _deduplicate(tracks)

        logger.info(f"Collected {len(tracks)} tracks")
        return tracks


def _deduplicate(tracks: list[Track]) -> list[Track]:
    seen: set[str] = set()
    unique = []
    for track in tracks:
        if track.id in seen:
            logger.debug(f"Skipping duplicate track: {track.name} ({track.id})")
            continue
        seen.add(track.id)
        unique.append(track)
    return unique
