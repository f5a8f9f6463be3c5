"""Connected account and OAuth credential entities."""

from attrs import define, field

from .platform import Platform


@define(slots=True)
class ProviderCredential:
    """OAuth credentials for one platform of one user.

    Mutable on purpose: a successful token refresh updates the access token
    (and the refresh token when the platform rotates it) in place, after which
    the credential store persists it.
    """

    platform: Platform = field(converter=Platform)
    access_token: str | None = field(default=None, repr=False)
    refresh_token: str | None = field(default=None, repr=False)
    user_id: str | None = field(default=None)

    @property
    def has_access_token(self) -> bool:
        return self.access_token is not None

    @property
    def has_refresh_token(self) -> bool:
        return self.refresh_token is not None

    def update_tokens(self, access_token: str, refresh_token: str | None = None) -> None:
        """Store refreshed tokens; the refresh token is kept unless rotated."""
        self.access_token = access_token
        if refresh_token is not None:
            self.refresh_token = refresh_token


@define(slots=True)
class ConnectedAccount:
    """A user together with the platform credentials they connected."""

    user_id: str
    providers: dict[Platform, ProviderCredential] = field(factory=dict)

    def __attrs_post_init__(self) -> None:
        for credential in self.providers.values():
            if credential.user_id is None:
                credential.user_id = self.user_id

    def get_provider(self, platform: Platform | str) -> ProviderCredential | None:
        """Return the stored credential for ``platform``, if any."""
        key = Platform.from_name(str(platform))
        if key is None:
            return None
        return self.providers.get(key)

    def connect(self, credential: ProviderCredential) -> None:
        """Attach or replace the credential for its platform."""
        if credential.user_id is None:
            credential.user_id = self.user_id
        self.providers[credential.platform] = credential
