"""Domain repository interfaces.

These interfaces define the contracts for credential persistence without
depending on infrastructure implementations.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from playlist_exporter.domain.entities import Platform, ProviderCredential


class CredentialStore(Protocol):
    """Repository interface for platform credentials.

    Implementations must be immediately consistent within one process: a
    ``get`` following a ``save`` returns the saved tokens.
    """

    async def get(
        self, user_id: str, platform: "Platform"
    ) -> "ProviderCredential | None":
        """Load the credential a user connected for a platform."""
        ...

    async def save(self, credential: "ProviderCredential") -> None:
        """Persist a credential after its tokens changed."""
        ...
