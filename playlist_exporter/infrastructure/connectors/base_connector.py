"""Base export strategy shared by all platform connectors.

Key Components:
- RemotePlaylist: Identity of the playlist created on the target platform
- BaseExportStrategy: Template for ensure connection -> create playlist ->
  add tracks -> aggregate counts
- SearchBasedExportStrategy: Per-song resolve-then-add loop for platforms
  that cannot address tracks by a locally stored id
- retry_add: Exponential backoff around a single add operation
"""

from abc import ABC, abstractmethod
import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, ClassVar, TypeVar

from attrs import define, field
import backoff

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
    TrackTally,
)
from playlist_exporter.domain.exceptions import NotConnectedError, PlaylistExportError
from playlist_exporter.domain.matching import NativeTrackId
from playlist_exporter.infrastructure.connectors.api_client import PlatformApiClient

logger = get_logger(__name__).bind(service="connectors")

T = TypeVar("T")


@define(frozen=True, slots=True)
class RemotePlaylist:
    """A playlist created on the target platform."""

    id: str = field(converter=str)
    url: str
    # Platform-native id when it is not a string (SoundCloud uses integers)
    native_id: Any = None


async def retry_add(
    operation: Callable[[], Awaitable[T]],
    *,
    max_tries: int | None = None,
    base_delay: float | None = None,
    context: dict[str, Any] | None = None,
) -> T:
    """Run ``operation`` with exponential backoff on export errors.

    With the defaults of 3 tries and a 1 second base delay, waits are 1s then
    2s. The last error is re-raised once all tries are used.
    """
    tries = max_tries if max_tries is not None else settings.export.add_retry_attempts
    factor = base_delay if base_delay is not None else settings.export.add_retry_base_delay
    log_context = context or {}

    def on_backoff(details):
        logger.warning(
            f"Add failed, retrying (attempt {details['tries']}/{tries})",
            retry_delay=f"{details['wait']:.2f}s",
            error=str(details.get("exception", "")),
            **log_context,
        )

    def on_giveup(details):
        exception = details.get("exception")
        logger.error(
            f"All {details['tries']} add attempts failed",
            elapsed_time=f"{details['elapsed']:.2f}s",
            error=str(exception) if exception else "Unknown error",
            error_type=type(exception).__name__ if exception else "Unknown",
            **log_context,
        )

    @backoff.on_exception(
        backoff.expo,
        PlaylistExportError,
        max_tries=tries,
        factor=factor,
        jitter=None,
        on_backoff=on_backoff,
        on_giveup=on_giveup,
        logger=None,
    )
    async def attempt() -> T:
        return await operation()

    return await attempt()


@define(slots=True)
class BaseExportStrategy(ABC):
    """Template for exporting a playlist to one platform.

    Subclasses set PLATFORM and implement create_remote_playlist and
    add_tracks. Only a missing connection, a failed playlist creation or an
    unexpected error abort an export; per-track problems are tallied as
    failed tracks.
    """

    PLATFORM: ClassVar[Platform]

    api_client: PlatformApiClient

    @property
    def platform_name(self) -> str:
        return self.PLATFORM.value

    def get_credential(self, account: ConnectedAccount) -> ProviderCredential:
        """Platform credential of the account, or NotConnectedError."""
        credential = account.get_provider(self.PLATFORM)
        if credential is None:
            raise NotConnectedError(self.PLATFORM.display_name)
        return credential

    def is_user_connected(self, account: ConnectedAccount) -> bool:
        credential = account.get_provider(self.PLATFORM)
        return credential is not None and credential.has_access_token

    async def export_playlist(
        self, playlist: Playlist, account: ConnectedAccount
    ) -> ExportResult:
        credential = self.get_credential(account)
        name = playlist.display_name(settings.export.default_playlist_name)

        logger.info(
            "Exporting playlist",
            platform=self.platform_name,
            playlist_name=name,
            song_count=len(playlist.songs),
        )

        remote = await self.create_remote_playlist(credential, name)
        tally = await self.add_tracks(credential, remote, playlist.songs)

        logger.info(
            "Playlist export finished",
            platform=self.platform_name,
            playlist_id=remote.id,
            exported_tracks=tally.exported,
            failed_tracks=tally.failed,
        )

        return ExportResult(
            playlist_id=remote.id,
            playlist_url=remote.url,
            exported_tracks=tally.exported,
            failed_tracks=tally.failed,
            platform=self.platform_name,
        )

    @abstractmethod
    async def create_remote_playlist(
        self, credential: ProviderCredential, name: str
    ) -> RemotePlaylist:
        """Create the empty remote playlist."""

    @abstractmethod
    async def add_tracks(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        songs: list[Song],
    ) -> TrackTally:
        """Add ``songs`` in order and tally the outcome."""


@define(slots=True)
class SearchBasedExportStrategy(BaseExportStrategy):
    """Export loop for platforms that must search for every song.

    Songs missing a title or artists are counted failed without any request.
    A song whose search yields nothing, or whose add exhausts its retries, is
    counted failed and the loop continues.
    """

    async def add_tracks(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        songs: list[Song],
    ) -> TrackTally:
        tally = TrackTally()
        total = len(songs)

        for index, song in enumerate(songs):
            log_context = {
                "platform": self.platform_name,
                "title": song.title,
                "artists": song.artists,
            }

            if not song.has_search_terms:
                logger.debug("Song lacks title or artists, skipping", **log_context)
                tally.failure()
                continue

            try:
                track_id = await self.resolve_track_id(
                    credential, song.title, song.artists
                )
            except PlaylistExportError as e:
                logger.warning("Track search failed", error=str(e), **log_context)
                tally.failure()
                continue

            if track_id is None:
                logger.warning(f"No track found for {song.describe()}", **log_context)
                tally.failure()
                continue

            try:
                await retry_add(
                    lambda: self.add_track(credential, remote, track_id),
                    context={**log_context, "track_id": str(track_id)},
                )
                tally.success()
            except PlaylistExportError as e:
                logger.error(
                    f"Failed to add track {track_id} for {song.describe()}",
                    error=str(e),
                    **log_context,
                )
                self.on_add_failed(e, song)
                tally.failure()

            await self.after_track_added(index, total)

        return tally

    @abstractmethod
    async def resolve_track_id(
        self, credential: ProviderCredential, title: str, artists: str
    ) -> NativeTrackId | None:
        """Platform id of the best search hit, or None."""

    @abstractmethod
    async def add_track(
        self,
        credential: ProviderCredential,
        remote: RemotePlaylist,
        track_id: NativeTrackId,
    ) -> None:
        """Append one track to the remote playlist."""

    def on_add_failed(self, error: PlaylistExportError, song: Song) -> None:  # noqa: B027
        """Hook for platform-specific diagnostics of an exhausted add."""

    async def after_track_added(self, index: int, total: int) -> None:  # noqa: B027
        """Hook run after each add attempt (successful or not)."""


async def throttle(delay: float) -> None:
    if delay > 0:
        await asyncio.sleep(delay)
