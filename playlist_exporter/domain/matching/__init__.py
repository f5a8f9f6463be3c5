"""Fuzzy track matching algorithms and types for search-only catalogs."""

from .algorithms import (
    MATCH_SCORE_CONFIG,
    REMIX_KEYWORDS,
    build_search_queries,
    build_search_terms,
    calculate_match_score,
    clean_search_term,
    extract_main_artist,
    extract_parenthetical_title,
    find_best_match,
    is_remix_or_cover,
    score_candidate,
)
from .protocols import NativeTrackId, TrackMatcher
from .types import MatchCandidate, MatchEvidence, SearchTerms

__all__ = [
    "MATCH_SCORE_CONFIG",
    "REMIX_KEYWORDS",
    "MatchCandidate",
    "MatchEvidence",
    "NativeTrackId",
    "SearchTerms",
    "TrackMatcher",
    "build_search_queries",
    "build_search_terms",
    "calculate_match_score",
    "clean_search_term",
    "extract_main_artist",
    "extract_parenthetical_title",
    "find_best_match",
    "is_remix_or_cover",
    "score_candidate",
]
