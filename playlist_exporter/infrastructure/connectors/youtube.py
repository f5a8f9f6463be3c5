"""YouTube export connector (Google account).

Uses the YouTube Data API v3:
- ``POST /playlists?part=snippet,status`` creates a private playlist
- ``GET /search`` finds one video per song in the music category
- ``POST /playlistItems?part=snippet`` adds one video per call

A 409 on add means the video is already in the playlist and counts as
exported. Adds are spaced by a short delay to stay under the quota rate
limits; no delay follows the last song.
"""

from typing import Any, ClassVar

from attrs import define, field

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import Platform, ProviderCredential, Song
from playlist_exporter.domain.exceptions import (
    ApiRequestFailedError,
    PlaylistExportError,
)
from playlist_exporter.infrastructure.connectors.base_connector import (
    RemotePlaylist,
    SearchBasedExportStrategy,
    throttle,
)

logger = get_logger(__name__).bind(service="youtube")

MUSIC_CATEGORY_ID = "10"


def youtube_playlist_url(playlist_id: str) -> str:
    return f"https://www.youtube.com/playlist?list={playlist_id}"


@define(slots=True)
class YouTubeExportStrategy(SearchBasedExportStrategy):
    """Exports playlists to YouTube through a connected Google account."""

    PLATFORM: ClassVar[Platform] = Platform.GOOGLE

    track_delay: float = field(factory=lambda: settings.export.youtube_track_delay)

    async def create_remote_playlist(
        self, credential: ProviderCredential, name: str
    ) -> RemotePlaylist:
        logger.info("Creating YouTube playlist", name=name)
        data = await self.api_client.request(
            credential,
            "POST",
            "/playlists",
            params={"part": "snippet,status"},
            json_body={
                "snippet": {
                    "title": name,
                    "description": settings.export.playlist_description,
                },
                "status": {"privacyStatus": "private"},
            },
        )
        return RemotePlaylist(id=data["id"], url=youtube_playlist_url(data["id"]))

    async def resolve_track_id(
        self, credential: ProviderCredential, title: str, artists: str
    ) -> str | None:
        """First video of a title + artists search in the music category."""
        data = await self.api_client.request(
            credential,
            "GET",
            "/search",
            params={
                "part": "id",
                "q": f"{title} {artists}",
                "type": "video",
                "maxResults": 1,
                "videoCategoryId": MUSIC_CATEGORY_ID,
            },
        )

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list) or not items:
            return None

        first: Any = items[0]
        if not isinstance(first, dict):
            return None
        resource = first.get("id")
        video_id = resource.get("videoId") if isinstance(resource, dict) else None
        return video_id if isinstance(video_id, str) else None

    async def add_track(
        self, credential: ProviderCredential, remote: RemotePlaylist, track_id: Any
    ) -> None:
        try:
            await self.api_client.request(
                credential,
                "POST",
                "/playlistItems",
                params={"part": "snippet"},
                json_body={
                    "snippet": {
                        "playlistId": remote.id,
                        "resourceId": {"kind": "youtube#video", "videoId": track_id},
                    }
                },
            )
        except ApiRequestFailedError as e:
            if e.status_code != 409:
                raise
            logger.warning(
                "YouTube conflict (409), video possibly already in playlist",
                video_id=track_id,
                playlist_id=remote.id,
                api_message=e.api_message,
            )

    def on_add_failed(self, error: PlaylistExportError, song: Song) -> None:
        if isinstance(error, ApiRequestFailedError) and error.status_code == 403:
            logger.error(
                f"YouTube API access denied (403): {error.api_message}",
                title=song.title,
                artists=song.artists,
            )

    async def after_track_added(self, index: int, total: int) -> None:
        if index < total - 1:
            await throttle(self.track_delay)
