"""Tests for OAuth token refresh against mocked token endpoints."""

import base64

import httpx
import pytest

from playlist_exporter.domain.entities import Platform, ProviderCredential
from playlist_exporter.domain.exceptions import (
    NoAccessTokenError,
    NoRefreshTokenError,
    TokenRefreshFailedError,
)


def form(request: httpx.Request) -> dict[str, str]:
    return dict(httpx.QueryParams(request.content.decode()))


def credential(platform: Platform, refresh_token: str | None = "refresh") -> ProviderCredential:
    return ProviderCredential(
        platform=platform,
        access_token="old-access",
        refresh_token=refresh_token,
        user_id="user-1",
    )


class TestAccessToken:
    def test_returns_stored_token_without_expiry_check(self, token_manager):
        assert token_manager.get_valid_access_token(credential(Platform.SPOTIFY)) == "old-access"

    def test_missing_access_token(self, token_manager):
        empty = ProviderCredential(platform=Platform.SPOTIFY, user_id="user-1")

        with pytest.raises(NoAccessTokenError):
            token_manager.get_valid_access_token(empty)


class TestRefresh:
    async def test_spotify_uses_basic_auth(self, token_manager, fake_api):
        """Test Spotify client credentials go in the Authorization header."""
        fake_api.add("POST", "/api/token", (200, {"access_token": "new-access"}))

        token = await token_manager.refresh_access_token(credential(Platform.SPOTIFY))

        assert token == "new-access"
        request = fake_api.calls("POST", "/api/token")[0]
        expected = base64.b64encode(b"spotify-id:spotify-secret").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert form(request) == {"grant_type": "refresh_token", "refresh_token": "refresh"}

    @pytest.mark.parametrize(
        ("platform", "path", "client_id"),
        [
            (Platform.GOOGLE, "/token", "google-id"),
            (Platform.SOUNDCLOUD, "/oauth2/token", "soundcloud-id"),
        ],
    )
    async def test_body_credentials(self, token_manager, fake_api, platform, path, client_id):
        """Test Google and SoundCloud send client credentials in the form body."""
        fake_api.add("POST", path, (200, {"access_token": "new-access"}))

        await token_manager.refresh_access_token(credential(platform))

        request = fake_api.calls("POST", path)[0]
        assert "Authorization" not in request.headers
        body = form(request)
        assert body["client_id"] == client_id
        assert body["grant_type"] == "refresh_token"

    async def test_refresh_updates_and_persists_credential(
        self, token_manager, fake_api, credential_store
    ):
        fake_api.add("POST", "/token", (200, {"access_token": "new-access"}))
        cred = credential(Platform.GOOGLE)

        await token_manager.refresh_access_token(cred)

        assert cred.access_token == "new-access"
        assert cred.refresh_token == "refresh"
        assert await credential_store.get("user-1", Platform.GOOGLE) is cred

    async def test_rotated_refresh_token_is_kept(self, token_manager, fake_api):
        fake_api.add(
            "POST",
            "/api/token",
            (200, {"access_token": "new-access", "refresh_token": "rotated"}),
        )
        cred = credential(Platform.SPOTIFY)

        await token_manager.refresh_access_token(cred)

        assert cred.refresh_token == "rotated"

    async def test_no_refresh_token(self, token_manager, fake_api):
        with pytest.raises(NoRefreshTokenError):
            await token_manager.refresh_access_token(
                credential(Platform.SPOTIFY, refresh_token=None)
            )
        assert fake_api.requests == []

    async def test_rejected_refresh(self, token_manager, fake_api):
        fake_api.add("POST", "/api/token", (400, {"error": "invalid_grant"}))
        cred = credential(Platform.SPOTIFY)

        with pytest.raises(TokenRefreshFailedError) as exc_info:
            await token_manager.refresh_access_token(cred)

        assert exc_info.value.status_code == 400
        assert cred.access_token == "old-access"

    async def test_response_without_access_token(self, token_manager, fake_api):
        fake_api.add("POST", "/api/token", (200, {"token_type": "Bearer"}))

        with pytest.raises(TokenRefreshFailedError):
            await token_manager.refresh_access_token(credential(Platform.SPOTIFY))

    async def test_unreachable_token_endpoint(self, token_manager, fake_api):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        fake_api.add("POST", "/api/token", fail)

        with pytest.raises(TokenRefreshFailedError):
            await token_manager.refresh_access_token(credential(Platform.SPOTIFY))

    async def test_failed_persist_raises_refresh_error(self, token_manager, fake_api):
        """Test a store that cannot save surfaces as a typed refresh failure."""
        fake_api.add("POST", "/token", (200, {"access_token": "new-access"}))
        orphan = ProviderCredential(
            platform=Platform.GOOGLE, access_token="old-access", refresh_token="refresh"
        )

        with pytest.raises(TokenRefreshFailedError, match="not persisted") as exc_info:
            await token_manager.refresh_access_token(orphan)

        assert isinstance(exc_info.value.__cause__, ValueError)
        assert orphan.access_token == "new-access"
