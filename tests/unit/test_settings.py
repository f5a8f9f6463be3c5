"""Tests for pydantic-settings configuration."""

from playlist_exporter.config import get_config, settings
from playlist_exporter.config.settings import Settings


class TestDefaults:
    def test_export_defaults(self):
        config = Settings(_env_file=None).export

        assert config.default_playlist_name == "MixLink Playlist"
        assert config.playlist_description == "Created with MixLink"
        assert config.spotify_batch_size == 100
        assert config.add_retry_attempts == 3
        assert config.add_retry_base_delay == 1.0
        assert config.youtube_track_delay == 0.5
        assert config.soundcloud_search_limit == 15
        assert config.match_min_score == 15

    def test_api_defaults(self):
        api = Settings(_env_file=None).api

        assert api.spotify_base_url == "https://api.spotify.com/v1"
        assert api.youtube_base_url == "https://www.googleapis.com/youtube/v3"
        assert api.soundcloud_base_url == "https://api.soundcloud.com"
        assert api.request_timeout == 30.0


class TestOverrides:
    def test_nested_env_vars(self, monkeypatch):
        monkeypatch.setenv("EXPORT__ADD_RETRY_ATTEMPTS", "5")
        monkeypatch.setenv("CREDENTIALS__SOUNDCLOUD_CLIENT_ID", "sc-id")

        config = Settings(_env_file=None)

        assert config.export.add_retry_attempts == 5
        assert config.credentials.soundcloud_client_id == "sc-id"

    def test_flat_keys_map_onto_groups(self):
        config = Settings(
            _env_file=None,
            spotify_client_id="flat-id",
            console_log_level="DEBUG",
        )

        assert config.credentials.spotify_client_id == "flat-id"
        assert config.logging.console_level == "DEBUG"


class TestGetConfig:
    def test_known_key(self):
        assert get_config("EXPORT_SPOTIFY_BATCH_SIZE") == settings.export.spotify_batch_size

    def test_unknown_key_returns_default(self):
        assert get_config("NOT_A_KEY", "fallback") == "fallback"
