"""Export strategy protocol.

Every platform connector satisfies this contract so the factory and the
export service can treat them interchangeably.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playlist_exporter.domain.entities import (
        ConnectedAccount,
        ExportResult,
        Playlist,
    )


@runtime_checkable
class ExportStrategy(Protocol):
    """One platform's implementation of playlist export."""

    @property
    def platform_name(self) -> str:
        """Platform identifier, e.g. ``"spotify"``."""
        ...

    def is_user_connected(self, account: "ConnectedAccount") -> bool:
        """True iff the account has a credential with an access token."""
        ...

    async def export_playlist(
        self, playlist: "Playlist", account: "ConnectedAccount"
    ) -> "ExportResult":
        """Create a remote playlist and add every song to it.

        Args:
            playlist: Local playlist with songs in export order
            account: Account holding the platform credential

        Returns:
            Aggregated export counts with the remote playlist id and URL

        Raises:
            NotConnectedError: The account has no credential for the platform
            PlaylistExportError: Playlist creation failed
        """
        ...
