"""Application use cases - orchestrate business operations."""

from .export_playlist import PlaylistExportService

__all__ = ["PlaylistExportService"]
