"""Application layer - export orchestration over the platform connectors."""

from .services import ExportServiceFactory, create_export_service_factory
from .use_cases import PlaylistExportService

__all__ = [
    "ExportServiceFactory",
    "PlaylistExportService",
    "create_export_service_factory",
]
