"""Tests for the PlaylistExportService use case."""

from unittest.mock import AsyncMock, MagicMock, patch

from loguru import logger
import pytest

from playlist_exporter.application.services import create_export_service_factory
from playlist_exporter.application.use_cases import PlaylistExportService
from playlist_exporter.domain.entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
)
from playlist_exporter.domain.exceptions import (
    ApiRequestFailedError,
    ExportFailedError,
    NotConnectedError,
    UnsupportedPlatformError,
)


@pytest.fixture
def service(http_client, credential_store) -> PlaylistExportService:
    return PlaylistExportService(
        factory=create_export_service_factory(
            http_client=http_client, credential_store=credential_store
        )
    )


def spotify_routes(fake_api) -> None:
    fake_api.add("GET", "/v1/me", (200, {"id": "sp-user"}))
    fake_api.add(
        "POST",
        "/v1/users/sp-user/playlists",
        (201, {"id": "pl1", "external_urls": {"spotify": "https://open.spotify.com/playlist/pl1"}}),
    )
    fake_api.add("POST", "/v1/playlists/pl1/tracks", (201, {"snapshot_id": "s1"}))


class TestPlaylistExportService:
    async def test_spotify_export(self, service, fake_api, account, road_trip):
        spotify_routes(fake_api)

        result = await service.export_playlist(road_trip, account, "spotify")

        assert result == ExportResult(
            playlist_id="pl1",
            playlist_url="https://open.spotify.com/playlist/pl1",
            exported_tracks=2,
            failed_tracks=0,
            platform="spotify",
        )

    async def test_unsupported_platform_before_any_access(self, service, fake_api, road_trip):
        """Test an unknown platform fails before credentials or network are touched."""
        account = MagicMock(spec=ConnectedAccount)

        with pytest.raises(UnsupportedPlatformError):
            await service.export_playlist(road_trip, account, "tiktok")

        account.get_provider.assert_not_called()
        assert fake_api.requests == []

    async def test_not_connected_is_not_wrapped(self, service, fake_api, road_trip):
        with pytest.raises(NotConnectedError, match="SoundCloud"):
            await service.export_playlist(
                road_trip, ConnectedAccount(user_id="user-2"), "soundcloud"
            )
        assert fake_api.requests == []

    async def test_credential_without_access_token_is_not_connected(
        self, service, road_trip
    ):
        account = ConnectedAccount(user_id="user-2")
        account.connect(ProviderCredential(platform=Platform.GOOGLE, refresh_token="r"))

        with pytest.raises(NotConnectedError):
            await service.export_playlist(road_trip, account, "google")

    async def test_strategy_errors_are_wrapped(self, service, fake_api, account, road_trip):
        fake_api.add("GET", "/v1/me", (500, {"error": {"message": "Server error"}}))

        with pytest.raises(ExportFailedError) as exc_info:
            await service.export_playlist(road_trip, account, "spotify")

        error = exc_info.value
        assert isinstance(error.__cause__, ApiRequestFailedError)
        assert error.original is error.__cause__
        assert error.details["platform"] == "spotify"
        assert not error.is_client_error

    async def test_failed_export_logged_once_with_context(
        self, service, fake_api, account, road_trip
    ):
        fake_api.add("GET", "/v1/me", (500, {"error": {"message": "Server error"}}))
        records = []
        sink_id = logger.add(lambda message: records.append(message.record), level="ERROR")

        try:
            with pytest.raises(ExportFailedError):
                await service.export_playlist(road_trip, account, "spotify")
        finally:
            logger.remove(sink_id)

        assert len(records) == 1
        assert records[0]["exception"] is not None
        assert records[0]["extra"]["user_id"] == "user-1"
        assert records[0]["extra"]["platform"] == "spotify"

    async def test_unexpected_exceptions_are_wrapped(self, road_trip, account):
        strategy = MagicMock()
        strategy.is_user_connected.return_value = True
        strategy.export_playlist = AsyncMock(side_effect=RuntimeError("boom"))
        factory = MagicMock()
        factory.is_supported.return_value = True
        factory.create.return_value = strategy

        with pytest.raises(ExportFailedError, match="boom"):
            await PlaylistExportService(factory=factory).export_playlist(
                road_trip, account, "spotify"
            )

    async def test_partial_failure_logs_warning(self, service, fake_api, account):
        fake_api.add("GET", "/v1/me", (200, {"id": "sp-user"}))
        fake_api.add(
            "POST",
            "/v1/users/sp-user/playlists",
            (201, {"id": "pl1", "external_urls": {"spotify": "url"}}),
        )
        playlist = Playlist(name="No ids", songs=[Song(title="A", artists="B")])

        with patch(
            "playlist_exporter.application.use_cases.export_playlist.logger"
        ) as mock_logger:
            result = await service.export_playlist(playlist, account, "spotify")

        assert result.failed_tracks == 1
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["failed_tracks"] == 1

    def test_supported_platforms(self, service):
        assert service.get_supported_platforms() == ["spotify", "google", "soundcloud"]

    async def test_closes_owned_transport_on_exit(self):
        async with PlaylistExportService(factory=create_export_service_factory()) as service:
            transport = service.factory.create("soundcloud").api_client.http_client

        assert transport.is_closed

    async def test_leaves_caller_transport_open(self, service, http_client):
        await service.aclose()

        assert not http_client.is_closed
