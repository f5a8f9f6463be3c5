"""SoundCloud export connector.

- ``POST /playlists`` creates a private playlist
- SoundCloudTrackMatcher resolves each song by fuzzy search
- Tracks are added by read-modify-write: ``GET /playlists/{id}``, append the
  new track id, ``PUT`` the whole track list back, since the API has no
  atomic append. Songs are therefore processed strictly one at a time.

SoundCloud ids are integers; they become strings only in ExportResult.
"""

from typing import ClassVar

from attrs import define, field

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import Platform, ProviderCredential
from playlist_exporter.domain.matching import NativeTrackId, TrackMatcher
from playlist_exporter.infrastructure.connectors.base_connector import (
    RemotePlaylist,
    SearchBasedExportStrategy,
)
from playlist_exporter.infrastructure.services.track_matcher import (
    SoundCloudTrackMatcher,
)

logger = get_logger(__name__).bind(service="soundcloud")


@define(slots=True)
class SoundCloudExportStrategy(SearchBasedExportStrategy):
    """Exports playlists through the SoundCloud API."""

    PLATFORM: ClassVar[Platform] = Platform.SOUNDCLOUD

    track_matcher: TrackMatcher = field()

    @track_matcher.default
    def _default_track_matcher(self) -> TrackMatcher:
        return SoundCloudTrackMatcher(api_client=self.api_client)

    async def create_remote_playlist(
        self, credential: ProviderCredential, name: str
    ) -> RemotePlaylist:
        logger.info("Creating SoundCloud playlist", name=name)
        data = await self.api_client.request(
            credential,
            "POST",
            "/playlists",
            json_body={
                "playlist": {
                    "title": name,
                    "description": settings.export.playlist_description,
                    "sharing": "private",
                }
            },
        )
        return RemotePlaylist(
            id=data["id"], url=data.get("permalink_url", ""), native_id=data["id"]
        )

    async def resolve_track_id(
        self, credential: ProviderCredential, title: str, artists: str
    ) -> int | None:
        return await self.track_matcher.search(credential, title, artists)

    async def add_track(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        track_id: NativeTrackId,
    ) -> None:
        playlist_path = f"/playlists/{remote.native_id}"
        current = await self.api_client.request(credential, "GET", playlist_path)

        # The PUT body only accepts track ids
        tracks = [
            {"id": track["id"]}
            for track in current.get("tracks") or []
            if isinstance(track, dict) and "id" in track
        ]
        tracks.append({"id": track_id})

        await self.api_client.request(
            credential,
            "PUT",
            playlist_path,
            json_body={
                "playlist": {
                    "title": current.get("title")
                    or settings.export.default_playlist_name,
                    "description": current.get("description")
                    or settings.export.playlist_description,
                    "sharing": current.get("sharing") or "private",
                    "tracks": tracks,
                }
            },
        )
        logger.debug(
            "Track appended",
            playlist_id=remote.id,
            track_id=track_id,
            playlist_length=len(tracks),
        )
