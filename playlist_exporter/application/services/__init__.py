"""Application services - export strategy selection."""

from .export_factory import ExportServiceFactory, create_export_service_factory

__all__ = ["ExportServiceFactory", "create_export_service_factory"]
