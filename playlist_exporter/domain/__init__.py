"""Domain layer - entities, matching rules and contracts with no I/O."""

from . import entities, matching

from .entities import (
    ConnectedAccount,
    ExportResult,
    Platform,
    Playlist,
    ProviderCredential,
    Song,
)
from .matching import (
    MatchCandidate,
    MatchEvidence,
    build_search_queries,
    build_search_terms,
    find_best_match,
    is_remix_or_cover,
)

__all__ = [
    # Modules
    "entities",
    "matching",
    # Key domain types
    "ConnectedAccount",
    "ExportResult",
    "Platform",
    "Playlist",
    "ProviderCredential",
    "Song",
    # Matching
    "MatchCandidate",
    "MatchEvidence",
    "build_search_queries",
    "build_search_terms",
    "find_best_match",
    "is_remix_or_cover",
]
