"""
Spotify Web API client for spotify-suite.

This module wraps the spotipy library behind a small, typed surface and
translates every failure into the suite's exception hierarchy, so the
components above it never see a raw spotipy or requests exception.

Authentication:
    Two flows are supported:
    1. Client Credentials (default): the app's client_id and client_secret
       are exchanged for an app token. Enough for searching and reading
       public playlists.
    2. User Authorization: OAuth authorization-code flow through the
       browser and a loopback redirect. Required to create playlists.

    Tokens live only as long as the SpotifyClient holding them. They are
    never cached to disk and never refreshed: a 401 in the middle of an
    operation surfaces as AuthError.

Error Translation:
    HTTP 401               -> AuthError
    any other HTTP error   -> ApiError(status, remote message)
    no response received   -> NetworkError

    A 404 stays a plain ApiError with status 404 here. Whoever fetched the
    resource decides what "not found" means (see PlaylistResolver).

Usage:
    from spotify_suite.spotify.client import SpotifyClient

    client = SpotifyClient.from_client_credentials(
        config.spotify.credentials, config.spotify
    )
    playlist = client.playlist("37i9dQZF1DXcBWIGoYBM5M")
"""

import secrets
from typing import Any, Callable, Sequence, TypeVar

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from spotify_suite.core.config import DEFAULT_REDIRECT_URI, Credentials, SpotifyConfig
from spotify_suite.core.exceptions import ApiError, AuthError, NetworkError
from spotify_suite.core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


TOKEN_URL = "https://accounts.spotify.com/api/token"

PLAYLIST_MODIFY_SCOPES = ("playlist-modify-public", "playlist-modify-private")


class SpotifyClient:
    """
    Bearer-authorized Spotify API client.

    Wraps a spotipy.Spotify instance that authenticates with a fixed access
    token. Create instances through the factory classmethods rather than
    the constructor, unless a prepared spotipy instance is injected in tests.

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.

    Rate Limiting:
        spotipy retries 429 and 5xx responses with backoff (`retries`
        setting). Callers add their own pacing between calls on top.

    Example:
        client = SpotifyClient.from_client_credentials(credentials)
        results = client.search('track:"Yesterday" artist:"The Beatles"', "track")
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        requests_timeout: float | None = None,
        retries: int = 3,
        spotify: spotipy.Spotify | None = None
    ) -> None:
        """
        Initialize the client.

        Args:
            access_token: Bearer token. Ignored if `spotify` is given.
            requests_timeout: Per-request timeout in seconds, None for none.
            retries: Transport-level retries for 429/5xx responses.
            spotify: Prepared spotipy instance (used by tests).
        """
        if spotify is None:
            if not access_token:
                raise AuthError("No access token available")
            spotify = spotipy.Spotify(
                auth=access_token,
                requests_timeout=requests_timeout,
                retries=retries,
            )
        self._spotify = spotify

    # =========================================================================
    # Authentication
    # =========================================================================

    @staticmethod
    def authenticate(credentials: Credentials, token_url: str = TOKEN_URL) -> str:
        """
        Exchange client credentials for an app access token.

        Args:
            credentials: Application client id and secret.
            token_url: Token endpoint (overridable for tests).

        Returns:
            The access token string.

        Raises:
            AuthError: If the endpoint answers with a non-2xx status (the
                       remote status and message are propagated) or the
                       2xx response carries no access_token.
            NetworkError: If no response was received.
        """
        try:
            response = requests.post(
                token_url,
                data={"grant_type": "client_credentials"},
                auth=(credentials.client_id, credentials.client_secret),
            )
        except requests.RequestException as e:
            raise NetworkError(
                f"Could not reach the Spotify token endpoint: {e}",
                details={"url": token_url, "original_error": str(e)}
            ) from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if not isinstance(payload, dict):
            payload = {}

        if not response.ok:
            message = (
                payload.get("error_description")
                or payload.get("error")
                or response.reason
                or "Authentication failed"
            )
            raise AuthError(
                f"Authentication failed ({response.status_code}): {message}",
                details={"status": response.status_code, "remote_message": message},
                status=response.status_code,
            )

        token = payload.get("access_token")
        if not token:
            raise AuthError(
                "Authentication response did not contain an access token",
                details={"status": response.status_code},
                status=response.status_code,
            )

        logger.debug("Obtained client-credentials access token")
        return token

    @classmethod
    def from_client_credentials(
        cls,
        credentials: Credentials,
        settings: SpotifyConfig | None = None
    ) -> "SpotifyClient":
        """Authenticate with client credentials and return a ready client."""
        token = cls.authenticate(credentials)
        return cls(token, **_client_options(settings))

    @classmethod
    def from_user_authorization(
        cls,
        credentials: Credentials,
        scopes: Sequence[str] = PLAYLIST_MODIFY_SCOPES,
        settings: SpotifyConfig | None = None,
        open_browser: bool = True
    ) -> "SpotifyClient":
        """
        Run the OAuth authorization-code flow and return a user client.

        Opens the authorization page in the browser and waits for the
        redirect on the configured loopback URI. A random `state` value
        protects the callback against forgery; spotipy rejects a callback
        whose state does not match.

        Args:
            credentials: Application client id and secret.
            scopes: OAuth scopes to request.
            settings: Spotify settings (redirect URI, timeout, retries).
            open_browser: Open the authorization URL automatically.

        Raises:
            AuthError: If the user denies access, the state does not match,
                       or the code exchange fails.
            NetworkError: If the token endpoint cannot be reached.
        """
        redirect_uri = settings.redirect_uri if settings else DEFAULT_REDIRECT_URI

        auth_manager = SpotifyOAuth(
            client_id=credentials.client_id,
            client_secret=credentials.client_secret,
            redirect_uri=redirect_uri,
            state=secrets.token_hex(16),
            scope=" ".join(scopes),
            cache_handler=MemoryCacheHandler(),
            open_browser=open_browser,
        )

        logger.info("Waiting for Spotify authorization in the browser...")
        try:
            token = auth_manager.get_access_token(as_dict=False, check_cache=False)
        except SpotifyOauthError as e:
            raise AuthError(
                f"Spotify authorization failed: {e}",
                details={"redirect_uri": redirect_uri, "original_error": str(e)}
            ) from e
        except requests.RequestException as e:
            raise NetworkError(
                f"Could not complete Spotify authorization: {e}",
                details={"original_error": str(e)}
            ) from e

        if not token:
            raise AuthError("Spotify authorization did not return an access token")

        logger.info("Spotify authorization successful")
        return cls(token, **_client_options(settings))

    # =========================================================================
    # Read Operations
    # =========================================================================

    def search(
        self,
        query: str,
        search_type: str = "track",
        limit: int = 50,
        offset: int = 0
    ) -> dict[str, Any]:
        """
        Run a catalog search.

        Args:
            query: Search query (supports field filters like track:"x").
            search_type: "track", "playlist", "album" or "artist".
            limit: Maximum results (Spotify caps this at 50).
            offset: Index of the first result.

        Returns:
            Raw search response, e.g. {"tracks": {"items": [...]}}.
        """
        return self._call(
            lambda: self._spotify.search(q=query, limit=limit, offset=offset, type=search_type),
            f"search ({search_type})",
        )

    def playlist(self, playlist_id: str, fields: str | None = None) -> dict[str, Any]:
        """
        Get playlist metadata.

        Raises:
            ApiError: status 404 if the playlist does not exist or is private.
        """
        return self._call(
            lambda: self._spotify.playlist(playlist_id, fields=fields),
            f"playlists/{playlist_id}",
        )

    def playlist_items(
        self,
        playlist_id: str,
        offset: int = 0,
        limit: int = 50,
        fields: str | None = None
    ) -> dict[str, Any]:
        """Get one page of a playlist's items."""
        return self._call(
            lambda: self._spotify.playlist_items(
                playlist_id,
                fields=fields,
                limit=limit,
                offset=offset,
                additional_types=("track",),
            ),
            f"playlists/{playlist_id}/tracks",
        )

    def current_user(self) -> dict[str, Any]:
        """Get the profile of the authorized user (user tokens only)."""
        return self._call(self._spotify.current_user, "me")

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create_playlist(
        self,
        user_id: str,
        name: str,
        public: bool = True,
        description: str = ""
    ) -> dict[str, Any]:
        """Create a (never collaborative) playlist for `user_id`."""
        return self._call(
            lambda: self._spotify.user_playlist_create(
                user_id,
                name,
                public=public,
                collaborative=False,
                description=description,
            ),
            f"users/{user_id}/playlists",
        )

    def add_items(self, playlist_id: str, uris: Sequence[str]) -> dict[str, Any]:
        """Add up to 100 track URIs to a playlist in one request."""
        return self._call(
            lambda: self._spotify.playlist_add_items(playlist_id, list(uris)),
            f"playlists/{playlist_id}/tracks",
        )

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None
    ) -> Any:
        """
        Issue an arbitrary bearer-authorized request.

        Args:
            method: HTTP method ("GET", "POST", ...).
            path: Path relative to https://api.spotify.com/v1/ (or a full URL).
            params: Query string parameters.
            body: JSON body for POST/PUT.

        Returns:
            Decoded JSON response (None for empty bodies).
        """
        return self._call(
            lambda: self._spotify._internal_call(method.upper(), path, body, params or {}),
            path,
            allow_empty=True,
        )

    # =========================================================================
    # Error Translation
    # =========================================================================

    def _call(
        self,
        operation: Callable[[], T],
        description: str,
        allow_empty: bool = False
    ) -> T:
        """
        Run a spotipy call and translate its failures.

        Args:
            operation: Zero-argument callable performing the request.
            description: Short label of the endpoint, used in messages.
            allow_empty: Accept a None response body.

        Raises:
            AuthError: On HTTP 401.
            ApiError: On any other HTTP error, or an unexpected empty body.
            NetworkError: If no response was received.
        """
        try:
            result = operation()
        except spotipy.SpotifyException as e:
            message = _remote_message(e)
            if e.http_status == 401:
                raise AuthError(
                    f"Access token rejected: {message}",
                    details={"endpoint": description, "status": 401},
                    status=401,
                ) from e
            logger.debug(f"Spotify API error on {description}: {e.http_status} {message}")
            raise ApiError(
                message,
                details={"endpoint": description, "status": e.http_status},
                status=e.http_status,
            ) from e
        except requests.RequestException as e:
            raise NetworkError(
                f"Network error while calling {description}: {e}",
                details={"endpoint": description, "original_error": str(e)}
            ) from e

        if result is None and not allow_empty:
            raise ApiError(
                f"Empty response from {description}",
                details={"endpoint": description},
            )
        return result


def _remote_message(error: spotipy.SpotifyException) -> str:
    """Extract the remote error message from a SpotifyException."""
    msg = error.msg or str(error)
    # spotipy prefixes the URL: "https://api.spotify.com/v1/...:\n <message>"
    if ":\n" in msg:
        msg = msg.split(":\n", 1)[1]
    return msg.strip() or f"HTTP {error.http_status}"


def _client_options(settings: SpotifyConfig | None) -> dict[str, Any]:
    if settings is None:
        return {}
    return {"requests_timeout": settings.requests_timeout, "retries": settings.retries}
