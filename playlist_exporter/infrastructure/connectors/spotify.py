"""Spotify export connector.

Spotify songs carry their catalog id locally, so no search is needed:
- Resolve the caller's Spotify user id via ``GET /me``
- Create a private playlist under ``/users/{user_id}/playlists``
- Add ``spotify:track:<id>`` URIs in batches of up to 100 per call

Songs without a ``spotify_id`` are counted failed without any request. A
batch whose add call exhausts its retries counts all its songs failed.
"""

from typing import Any, ClassVar

from attrs import define, field

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import (
    Platform,
    ProviderCredential,
    Song,
    TrackTally,
)
from playlist_exporter.domain.exceptions import PlaylistExportError
from playlist_exporter.infrastructure.connectors.base_connector import (
    BaseExportStrategy,
    RemotePlaylist,
    retry_add,
)

logger = get_logger(__name__).bind(service="spotify")


def spotify_track_uri(track_id: str) -> str:
    return f"spotify:track:{track_id}"


@define(slots=True)
class SpotifyExportStrategy(BaseExportStrategy):
    """Exports playlists through the Spotify Web API."""

    PLATFORM: ClassVar[Platform] = Platform.SPOTIFY

    batch_size: int = field(factory=lambda: settings.export.spotify_batch_size)

    async def get_user_profile(self, credential: ProviderCredential) -> dict[str, Any]:
        return await self.api_client.request(credential, "GET", "/me")

    async def create_remote_playlist(
        self, credential: ProviderCredential, name: str
    ) -> RemotePlaylist:
        profile = await self.get_user_profile(credential)
        spotify_user_id = profile["id"]

        logger.info("Creating Spotify playlist", name=name, spotify_user_id=spotify_user_id)
        data = await self.api_client.request(
            credential,
            "POST",
            f"/users/{spotify_user_id}/playlists",
            json_body={
                "name": name,
                "description": settings.export.playlist_description,
                "public": False,
            },
        )

        return RemotePlaylist(
            id=data["id"],
            url=data.get("external_urls", {}).get(
                "spotify", f"https://open.spotify.com/playlist/{data['id']}"
            ),
        )

    async def add_tracks(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        songs: list[Song],
    ) -> TrackTally:
        tally = TrackTally()
        batch: list[str] = []

        for song in songs:
            if song.spotify_id is None:
                logger.debug(
                    f"No Spotify id for {song.describe()}, skipping",
                    title=song.title,
                    artists=song.artists,
                )
                tally.failure()
                continue

            batch.append(spotify_track_uri(song.spotify_id))
            if len(batch) >= self.batch_size:
                await self._add_batch(credential, remote, batch, tally)
                batch = []

        if batch:
            await self._add_batch(credential, remote, batch, tally)

        return tally

    async def _add_batch(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        uris: list[str],
        tally: TrackTally,
    ) -> None:
        logger.debug(f"Adding batch of {len(uris)} tracks", playlist_id=remote.id)
        try:
            await retry_add(
                lambda: self.api_client.request(
                    credential,
                    "POST",
                    f"/playlists/{remote.id}/tracks",
                    json_body={"uris": uris},
                ),
                context={"platform": self.platform_name, "batch_size": len(uris)},
            )
        except PlaylistExportError as e:
            logger.error(
                f"Failed to add batch of {len(uris)} tracks",
                playlist_id=remote.id,
                error=str(e),
                first_uri=uris[0],
            )
            tally.failure(len(uris))
            return

        tally.success(len(uris))
