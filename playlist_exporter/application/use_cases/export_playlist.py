"""Playlist export use case.

Top-level entry point called by the web layer. Validation errors (unknown
platform, missing connection) propagate unchanged; anything raised while the
strategy runs is wrapped in ExportFailedError so callers get one error type
per failed export, with the original kept as ``__cause__``.
"""

from typing import Self

from attrs import define

from playlist_exporter.application.services.export_factory import (
    ExportServiceFactory,
)
from playlist_exporter.config import get_logger, resilient_operation
from playlist_exporter.domain.entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
)
from playlist_exporter.domain.exceptions import (
    ExportFailedError,
    NotConnectedError,
    UnsupportedPlatformError,
)
from playlist_exporter.infrastructure.connectors import ExportStrategy

logger = get_logger(__name__).bind(service="export")


@define(slots=True)
class PlaylistExportService:
    """Exports a local playlist to a connected streaming platform."""

    factory: ExportServiceFactory

    async def export_playlist(
        self, playlist: Playlist, account: ConnectedAccount, platform_name: str
    ) -> ExportResult:
        """Export ``playlist`` to ``platform_name`` using the account's credential.

        Args:
            playlist: Playlist with its songs in export order
            account: User account holding platform credentials
            platform_name: Exact platform identifier (``spotify``, ``google``,
                ``soundcloud``)

        Returns:
            Counts of exported and failed tracks plus the remote playlist

        Raises:
            UnsupportedPlatformError: Unknown platform name, raised before any
                credential or network access
            NotConnectedError: The account has no access token for the platform
            ExportFailedError: The export itself failed
        """
        if not self.factory.is_supported(platform_name):
            raise UnsupportedPlatformError(platform_name)

        strategy = self.factory.create(platform_name)

        if not strategy.is_user_connected(account):
            raise NotConnectedError(Platform(platform_name).display_name)

        with logger.contextualize(
            platform=platform_name, user_id=account.user_id, playlist_id=playlist.id
        ):
            try:
                result = await self._run_strategy(strategy, playlist, account)
            except Exception as e:
                raise ExportFailedError(platform_name, e) from e

            if result.has_failures:
                logger.warning("Playlist exported with failed tracks", **result.to_dict())

        return result

    @resilient_operation("playlist_export")
    async def _run_strategy(
        self, strategy: ExportStrategy, playlist: Playlist, account: ConnectedAccount
    ) -> ExportResult:
        return await strategy.export_playlist(playlist, account)

    def get_supported_platforms(self) -> list[str]:
        return self.factory.supported_platforms()

    async def aclose(self) -> None:
        await self.factory.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()
