"""Export strategy selection by platform name.

Platform names map onto the closed ``Platform`` enum; anything outside it is
rejected with UnsupportedPlatformError. ``create_export_service_factory``
wires one shared httpx client, one token manager and one API client per
platform into the three strategies.
"""

from typing import Self

import httpx

from playlist_exporter.config import get_logger
from playlist_exporter.domain.entities import Platform
from playlist_exporter.domain.exceptions import UnsupportedPlatformError
from playlist_exporter.domain.repositories import CredentialStore
from playlist_exporter.infrastructure.connectors import (
    STRATEGY_CLASSES,
    ExportStrategy,
    OAuthTokenManager,
    PlatformApiClient,
    PlatformApiConfig,
    create_http_client,
)

logger = get_logger(__name__).bind(service="export")


class ExportServiceFactory:
    """Resolves the export strategy for a platform name.

    ``transport`` is the httpx client the factory owns, if any; aclose() and
    ``async with`` close it. Strategies built on a caller's client leave it open.
    """

    def __init__(
        self,
        strategies: dict[Platform, ExportStrategy],
        transport: httpx.AsyncClient | None = None,
    ) -> None:
        missing = set(Platform) - set(strategies)
        if missing:
            raise ValueError(
                f"Missing export strategies for: {', '.join(sorted(missing))}"
            )
        # Keep enum declaration order regardless of the mapping passed in
        self._strategies = {platform: strategies[platform] for platform in Platform}
        self._transport = transport

    def create(self, platform_name: str) -> ExportStrategy:
        """Return the strategy for ``platform_name``.

        Raises:
            UnsupportedPlatformError: The name is not an exact platform identifier
        """
        platform = Platform.from_name(platform_name)
        if platform is None:
            raise UnsupportedPlatformError(platform_name)
        return self._strategies[platform]

    def is_supported(self, platform_name: str) -> bool:
        return Platform.from_name(platform_name) is not None

    def list_all(self) -> dict[str, ExportStrategy]:
        return {platform.value: strategy for platform, strategy in self._strategies.items()}

    def supported_platforms(self) -> list[str]:
        return [platform.value for platform in self._strategies]

    async def aclose(self) -> None:
        if self._transport is not None and not self._transport.is_closed:
            await self._transport.aclose()
            logger.debug("Export transport closed")

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.aclose()


def create_export_service_factory(
    http_client: httpx.AsyncClient | None = None,
    credential_store: CredentialStore | None = None,
) -> ExportServiceFactory:
    """Create a factory with every platform strategy wired up.

    Args:
        http_client: Shared transport left open for the caller; when omitted a
            new one is created and owned by the returned factory
        credential_store: Where refreshed tokens are persisted

    Returns:
        Configured export service factory
    """
    owned = None
    if http_client is None:
        http_client = owned = create_http_client()
    token_manager = OAuthTokenManager(
        http_client=http_client, credential_store=credential_store
    )

    api_configs = {
        Platform.SPOTIFY: PlatformApiConfig.spotify(),
        Platform.GOOGLE: PlatformApiConfig.youtube(),
        Platform.SOUNDCLOUD: PlatformApiConfig.soundcloud(),
    }

    strategies: dict[Platform, ExportStrategy] = {}
    for platform, strategy_class in STRATEGY_CLASSES.items():
        api_client = PlatformApiClient(
            config=api_configs[platform],
            token_manager=token_manager,
            http_client=http_client,
        )
        strategies[platform] = strategy_class(api_client=api_client)

    logger.debug(
        "Export strategies wired",
        platforms=[platform.value for platform in strategies],
    )
    return ExportServiceFactory(strategies, transport=owned)
