"""
Exception classes for spotify-suite.

This module defines all custom exceptions used throughout the application.
Each exception carries a human-readable message and an optional details
dictionary so the CLI can print something useful while the log file keeps
the full context.

Exception Hierarchy:
    SpotifySuiteError (base)
        ConfigError - Missing credentials or invalid config.yaml
        AuthError - Credential exchange failed or token rejected
        NetworkError - No response received from the remote service
        ApiError - Remote service rejected a request
            NotFoundError - The requested resource does not exist
        ValidationError - Bad user input (CLI arguments, CSV schema, selection)
            InvalidUrlError - Malformed playlist URL
"""


class SpotifySuiteError(Exception):
    """
    Base exception for all spotify-suite errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (playlist id, status, ...).

    Example:
        try:
            resolver.resolve_by_id(playlist_id)
        except SpotifySuiteError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description shown to the user.
            details: Optional dictionary containing additional context about
                     the error. Common keys include:
                     - 'playlist_id': Playlist involved in the error
                     - 'status': HTTP status returned by the remote service
                     - 'original_error': The underlying exception text
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(SpotifySuiteError):
    """
    Raised when the configuration is incomplete or invalid.

    This is a CRITICAL error, raised before any network access happens.

    Common causes:
        - SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET not set
        - config.yaml has invalid YAML syntax
        - Invalid field values (e.g., negative request delay)

    Example:
        raise ConfigError(
            "Missing required environment variables: SPOTIFY_CLIENT_ID",
            details={'missing': ['SPOTIFY_CLIENT_ID']}
        )
    """
    pass


class AuthError(SpotifySuiteError):
    """
    Raised when authentication fails.

    This is always a CRITICAL error. It covers the client-credentials
    exchange, the user authorization flow, and any request rejected with
    HTTP 401 afterwards. Tokens are never refreshed automatically, so a
    401 in the middle of a long run surfaces here.

    Attributes:
        status: HTTP status returned by the token endpoint, if any.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.status = status


class NetworkError(SpotifySuiteError):
    """
    Raised when no response was received (DNS failure, refused connection,
    timeout).

    Fatal for single-resource operations, recoverable per row in batch mode.
    """
    pass


class ApiError(SpotifySuiteError):
    """
    Raised when the remote service answers with an error status.

    The remote message is kept verbatim so it can be shown to the user.

    Attributes:
        status: HTTP status code of the failed request (None if unknown).

    Example:
        raise ApiError(
            "Invalid base62 id",
            status=400,
            details={'path': 'playlists/xyz'}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = None
    ) -> None:
        """
        Initialize API error with the HTTP status.

        Args:
            message: Error message, usually the one sent by the remote service.
            details: Optional dictionary with additional context.
            status: HTTP status code of the failed request.
        """
        super().__init__(message, details)
        self.status = status


class NotFoundError(ApiError):
    """
    Raised when a requested resource does not exist or is not visible.

    Used consistently for every "nothing to resolve" outcome: zero playlists
    matching a name search, and a 404 on a playlist fetched by id or URL.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        status: int | None = 404
    ) -> None:
        super().__init__(message, details, status)


class ValidationError(SpotifySuiteError):
    """
    Raised when user-provided input is invalid.

    Common causes:
        - Input CSV is missing required columns or has no rows
        - Selection index is not a number or out of range
        - Export requested with no tracks or no playlist name
    """
    pass


class InvalidUrlError(ValidationError):
    """
    Raised when a playlist URL cannot be parsed.

    Accepted forms are https://open.spotify.com/playlist/<id> and
    spotify:playlist:<id>.
    """
    pass
