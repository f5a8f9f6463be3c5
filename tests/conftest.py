from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from playlist_exporter.domain.entities import (
    ConnectedAccount,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
)
from playlist_exporter.infrastructure.connectors import (
    OAuthTokenManager,
    PlatformApiClient,
    PlatformApiConfig,
    TokenEndpoint,
)
from playlist_exporter.infrastructure.persistence import InMemoryCredentialStore

Responder = tuple[int, Any] | Callable[[httpx.Request], httpx.Response]


class FakePlatformApi:
    """Scripted HTTP backend for httpx.MockTransport.

    Routes are keyed by (method, URL path). Each route holds a queue of
    responses; the last one repeats once the queue is drained. Every request
    is recorded for assertions.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Responder]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *responses: Responder) -> None:
        self.routes.setdefault((method, path), []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404, json={"message": f"No route for {request.method} {request.url.path}"}
            )

        responder = queue.pop(0) if len(queue) > 1 else queue[0]
        if callable(responder):
            return responder(request)
        status, body = responder
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]


@pytest.fixture(autouse=True)
def sleep_mock():
    """Elide backoff and throttle waits; the mock records requested delays."""
    with patch("asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def fake_api() -> FakePlatformApi:
    return FakePlatformApi()


@pytest.fixture
async def http_client(fake_api):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_api.handler)
    ) as client:
        yield client


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def token_endpoints() -> dict[Platform, TokenEndpoint]:
    return {
        Platform.SPOTIFY: TokenEndpoint(
            url="https://accounts.spotify.com/api/token",
            client_id="spotify-id",
            client_secret="spotify-secret",
            basic_auth=True,
        ),
        Platform.GOOGLE: TokenEndpoint(
            url="https://oauth2.googleapis.com/token",
            client_id="google-id",
            client_secret="google-secret",
        ),
        Platform.SOUNDCLOUD: TokenEndpoint(
            url="https://api.soundcloud.com/oauth2/token",
            client_id="soundcloud-id",
            client_secret="soundcloud-secret",
        ),
    }


@pytest.fixture
def token_manager(http_client, credential_store, token_endpoints) -> OAuthTokenManager:
    return OAuthTokenManager(
        http_client=http_client,
        credential_store=credential_store,
        endpoints=token_endpoints,
    )


@pytest.fixture
def spotify_client(token_manager, http_client) -> PlatformApiClient:
    return PlatformApiClient(PlatformApiConfig.spotify(), token_manager, http_client)


@pytest.fixture
def youtube_client(token_manager, http_client) -> PlatformApiClient:
    return PlatformApiClient(PlatformApiConfig.youtube(), token_manager, http_client)


@pytest.fixture
def soundcloud_client(token_manager, http_client) -> PlatformApiClient:
    return PlatformApiClient(PlatformApiConfig.soundcloud(), token_manager, http_client)


@pytest.fixture
def account() -> ConnectedAccount:
    """An account connected to every platform."""
    account = ConnectedAccount(user_id="user-1")
    for platform in Platform:
        account.connect(
            ProviderCredential(
                platform=platform,
                access_token=f"access-{platform}",
                refresh_token=f"refresh-{platform}",
            )
        )
    return account


@pytest.fixture
def road_trip() -> Playlist:
    return Playlist(
        name="Road Trip",
        songs=[
            Song(title="One More Time", artists="Daft Punk", spotify_id="abc"),
            Song(title="Get Lucky", artists="Daft Punk, Pharrell Williams", spotify_id="def"),
        ],
        id="playlist-1",
    )
