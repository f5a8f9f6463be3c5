"""Protocols for track matching services.

These protocols define contracts for catalog search without depending on
a particular platform client.
"""

from typing import TYPE_CHECKING, Protocol

type NativeTrackId = str | int

if TYPE_CHECKING:
    from playlist_exporter.domain.entities import ProviderCredential


class TrackMatcher(Protocol):
    """Finds a platform-native track id for a title/artist pair."""

    async def search(
        self, credential: "ProviderCredential", title: str, artists: str
    ) -> NativeTrackId | None:
        """Search the platform catalog for the song.

        Args:
            credential: Platform credential used for authenticated search calls
            title: Song title as stored locally
            artists: Comma-joined artist names

        Returns:
            Native track id of the best acceptable match, or None
        """
        ...
