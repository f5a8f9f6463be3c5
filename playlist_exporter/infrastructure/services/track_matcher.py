"""SoundCloud track matcher.

SoundCloud has no shared catalog ids with the other platforms, so songs are
found by trying a fixed list of search queries in order and scoring each
result batch with the fuzzy matching rules in ``domain.matching``.

A query that errors or returns nothing moves on to the next query; the first
batch that yields a candidate at or above the minimum score wins.
"""

from typing import TYPE_CHECKING, Any

from attrs import define, field

from playlist_exporter.config import get_logger, settings
from playlist_exporter.domain.entities import ProviderCredential
from playlist_exporter.domain.exceptions import PlaylistExportError
from playlist_exporter.domain.matching import (
    MatchCandidate,
    MatchEvidence,
    build_search_queries,
    build_search_terms,
    find_best_match,
)

if TYPE_CHECKING:
    from playlist_exporter.infrastructure.connectors.api_client import (
        PlatformApiClient,
    )

logger = get_logger(__name__).bind(service="soundcloud")


def parse_track_candidates(data: Any) -> list[MatchCandidate]:
    """Convert a ``GET /tracks`` response into match candidates.

    Accepts a bare list or a paginated ``{"collection": [...]}`` page. Entries
    without an integer id are skipped.
    """
    if isinstance(data, dict):
        data = data.get("collection", [])
    if not isinstance(data, list):
        return []

    candidates = []
    for track in data:
        if not isinstance(track, dict):
            continue
        track_id = track.get("id")
        # bool is an int subclass; SoundCloud ids never are
        if not isinstance(track_id, int) or isinstance(track_id, bool):
            continue
        user = track.get("user")
        username = user.get("username") if isinstance(user, dict) else None
        candidates.append(
            MatchCandidate(
                track_id=track_id,
                title=str(track.get("title") or ""),
                username=str(username or ""),
                raw=track,
            )
        )
    return candidates


@define(slots=True)
class SoundCloudTrackMatcher:
    """Multi-query fuzzy search over the SoundCloud catalog."""

    api_client: "PlatformApiClient"
    search_limit: int = field(factory=lambda: settings.export.soundcloud_search_limit)
    min_score: int = field(factory=lambda: settings.export.match_min_score)

    async def search(
        self, credential: ProviderCredential, title: str, artists: str
    ) -> int | None:
        """Return the SoundCloud track id of the best match, or None."""
        evidence = await self.find_match(credential, title, artists)
        return evidence.candidate.track_id if evidence else None

    async def find_match(
        self, credential: ProviderCredential, title: str, artists: str
    ) -> MatchEvidence | None:
        terms = build_search_terms(title, artists)
        queries = build_search_queries(terms)

        for query in queries:
            try:
                data = await self.api_client.request(
                    credential,
                    "GET",
                    "/tracks",
                    params={
                        "q": query,
                        "limit": self.search_limit,
                        "filter": "public",
                        "order": "hotness",
                    },
                )
            except PlaylistExportError as e:
                logger.debug("Search query failed", query=query, error=str(e))
                continue

            candidates = parse_track_candidates(data)
            if not candidates:
                continue

            best = find_best_match(candidates, terms, self.min_score)
            if best is not None:
                logger.info(
                    f"Matched '{title}' by '{artists}'",
                    query=query,
                    **best.as_dict(),
                )
                return best

        logger.debug(
            f"No match for '{title}' by '{artists}'", queries_tried=len(queries)
        )
        return None
