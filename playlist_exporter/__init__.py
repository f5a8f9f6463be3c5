"""Multi-platform playlist export core.

Exports a locally stored playlist to Spotify, YouTube (Google) or SoundCloud:

```python
from playlist_exporter import PlaylistExportService, create_export_service_factory

service = PlaylistExportService(create_export_service_factory(credential_store=store))
result = await service.export_playlist(playlist, account, "spotify")
```
"""

from playlist_exporter.application import (
    ExportServiceFactory,
    PlaylistExportService,
    create_export_service_factory,
)
from playlist_exporter.domain.entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
)

__version__ = "0.1.0"

__all__ = [
    "ConnectedAccount",
    "ExportResult",
    "ExportServiceFactory",
    "Platform",
    "Playlist",
    "PlaylistExportService",
    "ProviderCredential",
    "Song",
    "create_export_service_factory",
]
