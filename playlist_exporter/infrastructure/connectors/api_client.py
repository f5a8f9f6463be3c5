"""Authenticated HTTP client shared by every export platform.

One client implementation serves Spotify, YouTube and SoundCloud. Platforms
differ only in the data held by PlatformApiConfig:
- base URL
- authorization scheme (``Bearer`` for standard OAuth2, ``OAuth`` for SoundCloud)
- how a human-readable message is pulled out of an error body

Request policy:
1. Attach ``<scheme> <access token>`` and send the request
2. 200/201 return the parsed JSON body
3. Any other status raises ApiRequestFailedError; transport failures raise the
   same error with ``status_code=None``
4. A 401 triggers exactly one refresh-and-retry when a refresh token exists
"""

from collections.abc import Callable
import json
from typing import Any, Self

from attrs import define, field
import httpx

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import Platform, ProviderCredential
from playlist_exporter.domain.exceptions import (
    ApiRequestFailedError,
    PlaylistExportError,
    RefreshRetryFailedError,
    TokenExpiredNoRefreshError,
)
from playlist_exporter.infrastructure.connectors.oauth import OAuthTokenManager

logger = get_logger(__name__).bind(service="connectors")

SUCCESS_STATUS_CODES = frozenset({200, 201})

ErrorMessageExtractor = Callable[[Any], str]


def create_http_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Build the shared async transport with the configured timeout."""
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.api.request_timeout,
        headers={"Accept": "application/json"},
    )


def extract_error_message(body: Any) -> str:
    """Best-effort error message from a platform error body.

    Tries ``error.message``, then ``error.errors`` serialized, then a bare
    ``message``; falls back to "Unknown error".
    """
    if not isinstance(body, dict):
        return "Unknown error"

    error = body.get("error")
    if isinstance(error, dict):
        if isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error.get("errors"), list):
            return json.dumps(error["errors"])

    if isinstance(body.get("message"), str):
        return body["message"]

    return "Unknown error"


def extract_soundcloud_error_message(body: Any) -> str:
    """SoundCloud variant: also reads ``errors[0].error_message``."""
    message = extract_error_message(body)
    if message != "Unknown error" or not isinstance(body, dict):
        return message

    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        error_message = errors[0].get("error_message")
        if isinstance(error_message, str):
            return error_message

    return message


@define(frozen=True, slots=True)
class PlatformApiConfig:
    """Per-platform parameters of the shared API client."""

    platform: Platform
    base_url: str
    auth_scheme: str = "Bearer"
    error_message_extractor: ErrorMessageExtractor = extract_error_message

    def build_url(self, url: str) -> str:
        """Absolute URLs pass through; paths are joined onto ``base_url``."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    @classmethod
    def spotify(cls) -> "PlatformApiConfig":
        return cls(platform=Platform.SPOTIFY, base_url=settings.api.spotify_base_url)

    @classmethod
    def youtube(cls) -> "PlatformApiConfig":
        return cls(platform=Platform.GOOGLE, base_url=settings.api.youtube_base_url)

    @classmethod
    def soundcloud(cls) -> "PlatformApiConfig":
        return cls(
            platform=Platform.SOUNDCLOUD,
            base_url=settings.api.soundcloud_base_url,
            auth_scheme="OAuth",
            error_message_extractor=extract_soundcloud_error_message,
        )


@define(slots=True)
class PlatformApiClient:
    """Makes authenticated calls to one platform API.

    Example:
        ```python
        client = PlatformApiClient(PlatformApiConfig.spotify(), token_manager, http)
        profile = await client.request(credential, "GET", "/me")
        ```
    """

    config: PlatformApiConfig
    token_manager: OAuthTokenManager
    # Closed by aclose() only when created here; an injected client belongs to the caller
    http_client: httpx.AsyncClient = field(default=None)
    _owns_client: bool = field(init=False, default=False)

    def __attrs_post_init__(self) -> None:
        if self.http_client is None:
            self.http_client = create_http_client()
            self._owns_client = True

    @property
    def platform(self) -> Platform:
        return self.config.platform

    async def request(
        self,
        credential: ProviderCredential,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        """Send an authenticated request and return the parsed body.

        Raises:
            NoAccessTokenError: The credential holds no access token
            ApiRequestFailedError: Non-2xx response or transport failure
            TokenExpiredNoRefreshError: 401 and no refresh token stored
            RefreshRetryFailedError: The refresh or the single retry failed
        """
        access_token = self.token_manager.get_valid_access_token(credential)

        try:
            return await self._send(method, url, access_token, params, json_body)
        except ApiRequestFailedError as e:
            if not e.is_unauthorized:
                raise
            return await self._retry_with_refreshed_token(
                credential, method, url, params, json_body, e
            )

    async def _retry_with_refreshed_token(
        self,
        credential: ProviderCredential,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        json_body: Any,
        unauthorized: ApiRequestFailedError,
    ) -> Any:
        if not self.token_manager.has_refresh_token(credential):
            raise TokenExpiredNoRefreshError(self.platform) from unauthorized

        logger.info(
            "Access token rejected, refreshing and retrying once",
            platform=self.platform,
            method=method,
            url=url,
        )
        try:
            new_token = await self.token_manager.refresh_access_token(credential)
            return await self._send(method, url, new_token, params, json_body)
        except PlaylistExportError as e:
            raise RefreshRetryFailedError(self.platform, str(e)) from e

    async def _send(
        self,
        method: str,
        url: str,
        access_token: str,
        params: dict[str, Any] | None,
        json_body: Any,
    ) -> Any:
        full_url = self.config.build_url(url)
        headers = {
            "Authorization": f"{self.config.auth_scheme} {access_token}",
            "Content-Type": "application/json",
        }

        try:
            response = await self.http_client.request(
                method, full_url, params=params, json=json_body, headers=headers
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Transport error",
                platform=self.platform,
                method=method,
                url=full_url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ApiRequestFailedError(
                self.platform, None, str(e) or type(e).__name__
            ) from e

        body = self._parse_body(response)
        if response.status_code in SUCCESS_STATUS_CODES:
            return body

        message = self.config.error_message_extractor(body)
        logger.debug(
            "API request failed",
            platform=self.platform,
            method=method,
            url=full_url,
            status_code=response.status_code,
            api_message=message,
        )
        raise ApiRequestFailedError(self.platform, response.status_code, message)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()
