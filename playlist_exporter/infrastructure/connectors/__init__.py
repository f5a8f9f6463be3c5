"""Platform connectors: OAuth, HTTP client and export strategies."""

from playlist_exporter.domain.entities import Platform
from playlist_exporter.infrastructure.connectors.api_client import (
    PlatformApiClient,
    PlatformApiConfig,
    create_http_client,
)
from playlist_exporter.infrastructure.connectors.base_connector import (
    BaseExportStrategy,
    RemotePlaylist,
    SearchBasedExportStrategy,
    retry_add,
)
from playlist_exporter.infrastructure.connectors.oauth import (
    OAuthTokenManager,
    TokenEndpoint,
)
from playlist_exporter.infrastructure.connectors.protocols import ExportStrategy
from playlist_exporter.infrastructure.connectors.soundcloud import (
    SoundCloudExportStrategy,
)
from playlist_exporter.infrastructure.connectors.spotify import SpotifyExportStrategy
from playlist_exporter.infrastructure.connectors.youtube import YouTubeExportStrategy

# One strategy class per platform, in platform declaration order
STRATEGY_CLASSES: dict[Platform, type[BaseExportStrategy]] = {
    Platform.SPOTIFY: SpotifyExportStrategy,
    Platform.GOOGLE: YouTubeExportStrategy,
    Platform.SOUNDCLOUD: SoundCloudExportStrategy,
}

_missing = set(Platform) - set(STRATEGY_CLASSES)
if _missing:
    raise RuntimeError(
        f"No export strategy registered for: {', '.join(sorted(_missing))}"
    )

__all__ = [
    "STRATEGY_CLASSES",
    "BaseExportStrategy",
    "ExportStrategy",
    "OAuthTokenManager",
    "PlatformApiClient",
    "PlatformApiConfig",
    "RemotePlaylist",
    "SearchBasedExportStrategy",
    "SoundCloudExportStrategy",
    "SpotifyExportStrategy",
    "TokenEndpoint",
    "YouTubeExportStrategy",
    "create_http_client",
    "retry_add",
]
