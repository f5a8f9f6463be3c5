"""Tests for domain entities: songs, playlists, accounts and export results."""

import pytest

from playlist_exporter.domain.entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
    TrackTally,
)


class TestSong:
    def test_search_terms_require_title_and_artists(self):
        assert Song(title="One More Time", artists="Daft Punk").has_search_terms
        assert not Song(title=None, artists="Daft Punk").has_search_terms
        assert not Song(title="One More Time", artists=None).has_search_terms
        assert not Song(title="", artists="Daft Punk").has_search_terms

    def test_rejects_non_string_title(self):
        with pytest.raises(TypeError):
            Song(title=123, artists="Daft Punk")

    def test_describe_handles_missing_fields(self):
        assert Song(title="Get Lucky").describe() == "'Get Lucky' by '?'"


class TestPlaylist:
    def test_display_name_falls_back_to_default(self):
        assert Playlist(name="Road Trip").display_name("Default") == "Road Trip"
        assert Playlist(name=None).display_name("Default") == "Default"
        assert Playlist(name="").display_name("Default") == "Default"

    def test_songs_must_be_song_instances(self):
        with pytest.raises(TypeError):
            Playlist(name="Bad", songs=["not a song"])

    def test_with_songs_returns_new_playlist(self):
        original = Playlist(name="Road Trip", songs=[Song(title="A", artists="B")])
        updated = original.with_songs([])

        assert len(original) == 1
        assert len(updated) == 0
        assert updated.name == "Road Trip"


class TestPlatform:
    def test_exact_name_lookup(self):
        assert Platform.from_name("spotify") is Platform.SPOTIFY
        assert Platform.from_name("google") is Platform.GOOGLE
        assert Platform.from_name("soundcloud") is Platform.SOUNDCLOUD

    @pytest.mark.parametrize("name", ["tiktok", "Spotify", "youtube", ""])
    def test_unknown_names(self, name):
        assert Platform.from_name(name) is None

    def test_display_names(self):
        assert Platform.SOUNDCLOUD.display_name == "SoundCloud"
        assert Platform.GOOGLE.display_name == "Google"


class TestAccount:
    def test_connect_assigns_user_id(self):
        account = ConnectedAccount(user_id="user-1")
        credential = ProviderCredential(platform="spotify", access_token="token")

        account.connect(credential)

        assert credential.user_id == "user-1"
        assert account.get_provider("spotify") is credential
        assert account.get_provider(Platform.SPOTIFY) is credential

    def test_constructor_assigns_user_id(self):
        credential = ProviderCredential(platform="soundcloud", access_token="token")
        owned = ProviderCredential(platform="google", access_token="t", user_id="other")

        ConnectedAccount(
            user_id="user-1",
            providers={Platform.SOUNDCLOUD: credential, Platform.GOOGLE: owned},
        )

        assert credential.user_id == "user-1"
        assert owned.user_id == "other"

    def test_unknown_provider(self):
        account = ConnectedAccount(user_id="user-1")
        assert account.get_provider("google") is None
        assert account.get_provider("tiktok") is None

    def test_update_tokens_keeps_refresh_token_unless_rotated(self):
        credential = ProviderCredential(
            platform=Platform.GOOGLE, access_token="old", refresh_token="refresh"
        )

        credential.update_tokens("new")
        assert credential.access_token == "new"
        assert credential.refresh_token == "refresh"

        credential.update_tokens("newer", "rotated")
        assert credential.refresh_token == "rotated"

    def test_tokens_hidden_from_repr(self):
        credential = ProviderCredential(
            platform=Platform.SPOTIFY, access_token="secret-access", refresh_token="secret-refresh"
        )
        assert "secret" not in repr(credential)


class TestExportResult:
    def test_playlist_id_is_always_a_string(self):
        """Test integer ids (SoundCloud) are exposed as strings."""
        result = ExportResult(
            playlist_id=123,
            playlist_url="https://soundcloud.com/u/sets/x",
            exported_tracks=1,
            failed_tracks=0,
            platform="soundcloud",
        )
        assert result.playlist_id == "123"

    def test_helpers(self):
        result = ExportResult(
            playlist_id="pl1",
            playlist_url="url",
            exported_tracks=3,
            failed_tracks=1,
            platform="spotify",
        )

        assert result.has_failures
        assert not result.is_full_success
        assert not result.is_empty
        assert result.total_tracks_processed == 4
        assert result.success_rate == 75.0

    def test_empty_result(self):
        result = ExportResult(
            playlist_id="pl1",
            playlist_url="url",
            exported_tracks=0,
            failed_tracks=0,
            platform="google",
        )

        assert result.is_empty
        assert not result.is_full_success
        assert result.success_rate == 0.0

    def test_to_dict(self):
        result = ExportResult(
            playlist_id="pl1",
            playlist_url="url",
            exported_tracks=2,
            failed_tracks=0,
            platform="spotify",
        )

        assert result.is_full_success
        assert result.to_dict() == {
            "playlist_id": "pl1",
            "playlist_url": "url",
            "exported_tracks": 2,
            "failed_tracks": 0,
            "platform": "spotify",
        }

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            ExportResult(
                playlist_id="pl1",
                playlist_url="url",
                exported_tracks=-1,
                failed_tracks=0,
                platform="spotify",
            )


class TestTrackTally:
    def test_counts(self):
        tally = TrackTally()
        tally.success()
        tally.failure(3)

        assert tally.exported == 1
        assert tally.failed == 3
        assert tally.processed == 4
