"""OAuth2 token management for connected platform accounts.

The manager hands out stored access tokens and refreshes them on demand. It
does not track expiry: a refresh is always triggered by a 401 caught in
PlatformApiClient.

Each platform's token endpoint expects a different request shape:
- Spotify: client credentials in a Basic ``Authorization`` header
- Google, SoundCloud: client credentials embedded in the form body
"""

import base64
from typing import Any

from attrs import define, field
import httpx

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import Platform, ProviderCredential
from playlist_exporter.domain.exceptions import (
    NoAccessTokenError,
    NoRefreshTokenError,
    TokenRefreshFailedError,
)
from playlist_exporter.domain.repositories import CredentialStore

logger = get_logger(__name__).bind(service="oauth")


@define(frozen=True, slots=True)
class TokenEndpoint:
    """Where and how to refresh tokens for one platform."""

    url: str
    client_id: str
    client_secret: str = field(repr=False)
    basic_auth: bool = False

    def build_request(self, refresh_token: str) -> tuple[dict[str, str], dict[str, str]]:
        """Return (headers, form body) for a refresh_token grant."""
        headers = {"Content-Type": "application/x-www-form-urlencoded"}
        body = {"grant_type": "refresh_token", "refresh_token": refresh_token}

        if self.basic_auth:
            raw = f"{self.client_id}:{self.client_secret}".encode()
            headers["Authorization"] = f"Basic {base64.b64encode(raw).decode()}"
        else:
            body["client_id"] = self.client_id
            body["client_secret"] = self.client_secret

        return headers, body


def default_token_endpoints() -> dict[Platform, TokenEndpoint]:
    """Token endpoints for every platform, built from settings."""
    creds = settings.credentials
    api = settings.api
    return {
        Platform.SPOTIFY: TokenEndpoint(
            url=api.spotify_token_url,
            client_id=creds.spotify_client_id,
            client_secret=creds.spotify_client_secret,
            basic_auth=True,
        ),
        Platform.GOOGLE: TokenEndpoint(
            url=api.google_token_url,
            client_id=creds.google_client_id,
            client_secret=creds.google_client_secret,
        ),
        Platform.SOUNDCLOUD: TokenEndpoint(
            url=api.soundcloud_token_url,
            client_id=creds.soundcloud_client_id,
            client_secret=creds.soundcloud_client_secret,
        ),
    }


@define(slots=True)
class OAuthTokenManager:
    """Reads and refreshes per-platform OAuth2 tokens.

    Refreshed tokens are written back onto the credential and, when a
    credential store is configured, persisted. Concurrent refreshes of the
    same credential are not coordinated: the last writer wins.
    """

    http_client: httpx.AsyncClient
    credential_store: CredentialStore | None = None
    endpoints: dict[Platform, TokenEndpoint] = field(factory=default_token_endpoints)

    def get_valid_access_token(self, credential: ProviderCredential) -> str:
        """Return the stored access token without checking expiry."""
        if credential.access_token is None:
            raise NoAccessTokenError(credential.platform)
        return credential.access_token

    def has_refresh_token(self, credential: ProviderCredential) -> bool:
        return credential.has_refresh_token

    async def refresh_access_token(self, credential: ProviderCredential) -> str:
        """Exchange the refresh token for a new access token.

        Raises:
            NoRefreshTokenError: The credential has no refresh token
            TokenRefreshFailedError: The token endpoint did not answer 200, or
                the credential store could not save the new token
        """
        if credential.refresh_token is None:
            raise NoRefreshTokenError(credential.platform)

        platform = credential.platform
        endpoint = self.endpoints[platform]
        headers, body = endpoint.build_request(credential.refresh_token)

        logger.debug("Refreshing access token", platform=platform)
        try:
            response = await self.http_client.post(endpoint.url, headers=headers, data=body)
        except httpx.HTTPError as e:
            logger.error("Token endpoint unreachable", platform=platform, error=str(e))
            raise TokenRefreshFailedError(platform) from e

        if response.status_code != 200:
            logger.error(
                "Token refresh rejected",
                platform=platform,
                status_code=response.status_code,
            )
            raise TokenRefreshFailedError(platform, response.status_code)

        token_data = self._parse_token_response(response)
        access_token = token_data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            logger.error("Token response without access_token", platform=platform)
            raise TokenRefreshFailedError(platform, response.status_code)

        # The new tokens stay on the credential even if persisting them fails
        credential.update_tokens(access_token, token_data.get("refresh_token"))
        if self.credential_store is not None:
            try:
                await self.credential_store.save(credential)
            except Exception as e:
                logger.opt(exception=e).error(
                    "Refreshed token could not be persisted",
                    platform=platform,
                    user_id=credential.user_id,
                )
                raise TokenRefreshFailedError(
                    platform, reason=f"token not persisted ({e})"
                ) from e

        logger.info(
            "Access token refreshed",
            platform=platform,
            rotated_refresh_token="refresh_token" in token_data,
        )
        return access_token

    @staticmethod
    def _parse_token_response(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
