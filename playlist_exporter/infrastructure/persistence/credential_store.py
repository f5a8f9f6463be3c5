"""In-process credential store.

Keyed by ``(user_id, platform)``. Writes are visible to the next read
immediately, which is all the token refresh flow needs; durable backends
implement the same CredentialStore protocol.
"""

from attrs import define, field

from playlist_exporter.config import get_logger
from playlist_exporter.domain.entities import (
    ConnectedAccount,
    Platform,
    ProviderCredential,
)

logger = get_logger(__name__)


@define(slots=True)
class InMemoryCredentialStore:
    """Dictionary-backed CredentialStore."""

    _credentials: dict[tuple[str, Platform], ProviderCredential] = field(
        factory=dict, alias="credentials"
    )

    async def get(
        self, user_id: str, platform: Platform | str
    ) -> ProviderCredential | None:
        key = Platform.from_name(str(platform))
        if key is None:
            return None
        return self._credentials.get((user_id, key))

    async def save(self, credential: ProviderCredential) -> None:
        if credential.user_id is None:
            raise ValueError("Cannot store a credential without a user_id")
        self._credentials[(credential.user_id, credential.platform)] = credential
        logger.debug(
            "Credential saved",
            user_id=credential.user_id,
            platform=credential.platform,
        )

    async def load_account(self, user_id: str) -> ConnectedAccount:
        """Assemble a ConnectedAccount from every credential of ``user_id``."""
        account = ConnectedAccount(user_id=user_id)
        for (owner, _), credential in self._credentials.items():
            if owner == user_id:
                account.connect(credential)
        return account

    def __len__(self) -> int:
        return len(self._credentials)
