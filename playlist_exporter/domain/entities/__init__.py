"""Core domain entities for playlist export."""

# Account-related entities
from .account import ConnectedAccount, ProviderCredential

# Export outcome entities
from .export import ExportResult, TrackTally
from .platform import Platform

# Playlist-related entities
from .playlist import Playlist, Song

__all__ = [
    # Account entities
    "ConnectedAccount",
    "ProviderCredential",
    # Export entities
    "ExportResult",
    "TrackTally",
    # Platforms
    "Platform",
    # Playlist entities
    "Playlist",
    "Song",
]
