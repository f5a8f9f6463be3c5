"""Exception hierarchy for playlist export.

Exception Hierarchy:
    PlaylistExportError (base)
        NotConnectedError - No stored credential for the platform
        UnsupportedPlatformError - Unknown export platform name
        NoAccessTokenError - Credential exists but has no access token
        NoRefreshTokenError - Refresh requested without a refresh token
        TokenRefreshFailedError - Token endpoint rejected the refresh
        ApiRequestFailedError - Non-2xx response or transport failure
        TokenExpiredNoRefreshError - 401 received and no refresh token stored
        RefreshRetryFailedError - Request retried after refresh and failed again
        ExportFailedError - Orchestrator-level wrapper around any of the above

Every class carries a stable ``error_code`` so the HTTP layer can map errors
to responses without parsing messages. ``is_client_error`` separates failures
the user can fix (reconnect an account, pick another platform) from internal
or upstream failures.
"""

from typing import Any, ClassVar


class PlaylistExportError(Exception):
    """Base exception for all playlist export errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context (platform, status code, track info).
    """

    error_code: ClassVar[str] = "playlist.export.error"
    is_client_error: ClassVar[bool] = False

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class NotConnectedError(PlaylistExportError):
    """Raised when the user has no usable credential for the platform."""

    error_code = "playlist.export.not_connected"
    is_client_error = True

    def __init__(self, platform: str) -> None:
        super().__init__(
            f"User is not connected to {platform}", details={"platform": platform}
        )
        self.platform = platform


class UnsupportedPlatformError(PlaylistExportError):
    """Raised for platform names outside the supported set."""

    error_code = "playlist.export.unsupported_platform"
    is_client_error = True

    def __init__(self, platform: str) -> None:
        super().__init__(
            f"Platform '{platform}' is not supported", details={"platform": platform}
        )
        self.platform = platform


class NoAccessTokenError(PlaylistExportError):
    """Raised when a credential holds no access token."""

    error_code = "playlist.export.no_access_token"
    is_client_error = True

    def __init__(self, platform: str | None = None) -> None:
        super().__init__("No access token available", details={"platform": platform})
        self.platform = platform


class NoRefreshTokenError(PlaylistExportError):
    """Raised when a refresh is requested but no refresh token is stored."""

    error_code = "playlist.export.no_refresh_token"
    is_client_error = True

    def __init__(self, platform: str | None = None) -> None:
        super().__init__(
            "No refresh token available for this provider. "
            "Please reconnect to get a refresh token.",
            details={"platform": platform},
        )
        self.platform = platform


class TokenRefreshFailedError(PlaylistExportError):
    """Raised when the token endpoint does not answer 200, or the refreshed
    token cannot be persisted.
    """

    error_code = "playlist.export.token_refresh_failed"
    is_client_error = True

    def __init__(
        self, platform: str, status_code: int | None = None, reason: str | None = None
    ) -> None:
        message = f"Failed to refresh {platform} token"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            details={"platform": platform, "status_code": status_code, "reason": reason},
        )
        self.platform = platform
        self.status_code = status_code
        self.reason = reason


class ApiRequestFailedError(PlaylistExportError):
    """Raised for non-2xx platform responses and transport failures.

    ``status_code`` is None when the request never produced a response
    (timeout, DNS failure, connection reset).
    """

    error_code = "playlist.export.api_request_failed"

    def __init__(self, platform: str, status_code: int | None, message: str) -> None:
        status = status_code if status_code is not None else "transport"
        super().__init__(
            f"{platform} API request failed ({status}): {message}",
            details={
                "platform": platform,
                "status_code": status_code,
                "api_message": message,
            },
        )
        self.platform = platform
        self.status_code = status_code
        self.api_message = message

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class TokenExpiredNoRefreshError(PlaylistExportError):
    """Raised on a 401 when the credential cannot be refreshed."""

    error_code = "playlist.export.token_expired"
    is_client_error = True

    def __init__(self, platform: str) -> None:
        super().__init__(
            "Token expired and no refresh token available. "
            f"Please reconnect to {platform} to get a new token.",
            details={"platform": platform},
        )
        self.platform = platform


class RefreshRetryFailedError(PlaylistExportError):
    """Raised when the single post-refresh retry fails."""

    error_code = "playlist.export.refresh_retry_failed"

    def __init__(self, platform: str, inner_message: str) -> None:
        super().__init__(
            f"Failed to refresh token and retry request: {inner_message}",
            details={"platform": platform, "inner_message": inner_message},
        )
        self.platform = platform
        self.inner_message = inner_message


class ExportFailedError(PlaylistExportError):
    """Orchestrator boundary wrapper; the original error is kept as ``original``."""

    error_code = "playlist.export.failed"

    def __init__(self, platform: str, original: Exception) -> None:
        super().__init__(
            f"Failed to export playlist: {original}",
            details={
                "platform": platform,
                "original_message": str(original),
                "original_error_code": getattr(original, "error_code", None),
            },
        )
        self.platform = platform
        self.original = original

    @property
    def is_client_error(self) -> bool:  # type: ignore[override]
        return bool(getattr(self.original, "is_client_error", False))
