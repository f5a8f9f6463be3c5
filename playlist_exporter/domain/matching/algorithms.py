"""Pure algorithms for fuzzy track matching against a search-only catalog.

These functions contain no I/O and implement the business rules for turning a
song's title/artists into search queries and for picking the most likely
catalog track out of a batch of search results.
"""

from collections.abc import Iterable
import re

from .types import MatchCandidate, MatchEvidence, SearchTerms

# Match scoring configuration
MATCH_SCORE_CONFIG = {
    "exact_title": 100,
    "exact_artist": 50,
    "title_contains": 40,
    "artist_contains": 30,
    "both_contain": 20,
    "title_prefix": 15,
    "artist_prefix": 10,
    # Prefix checks only apply to search terms at least this long
    "prefix_length": 4,
    "remix_divisor": 3,
    "min_score": 15,
}

# Derivative-work markers matched anywhere in a candidate title
REMIX_KEYWORDS = (
    "mashup",
    "cover",
    "vs",
    "version",
    "rework",
    "flip",
    "dub",
    "instrumental",
    "karaoke",
    "acoustic",
    "live",
    "extended",
    "radio edit",
    "club mix",
)

_PARENTHETICAL = re.compile(r"\s*\([^)]*\)")
_FEATURING = re.compile(r"\b(?:featuring|feat\.?|ft\.?)(?=\s|$)", re.IGNORECASE)
_LEADING_PARENTHETICAL = re.compile(r"^([^(]+)\s*\(([^)]+)\)")
_REMIX_IN_PARENS = re.compile(r"\([^)]*(?:remix|edit|mix|vip|bootleg)[^)]*\)", re.IGNORECASE)
_REMIX_IN_BRACKETS = re.compile(r"\[[^\]]*(?:remix|edit|mix|vip|bootleg)[^\]]*\]", re.IGNORECASE)
_TRAILING_REMIX = re.compile(r"\bremix\s*$", re.IGNORECASE)


def clean_search_term(term: str) -> str:
    """Strip parenthetical content and featuring markers from a title or artist."""
    term = _PARENTHETICAL.sub("", term)
    term = _FEATURING.sub(" ", term)
    return " ".join(term.split())


def extract_parenthetical_title(title: str) -> str:
    """Return the first parenthetical group of ``title``, or ``title`` itself.

    Titles like "PATT (Party All The Time)" are often uploaded under the
    parenthetical name only.
    """
    match = _LEADING_PARENTHETICAL.match(title)
    if match:
        return match.group(2).strip()
    return title


def extract_main_artist(artists: str) -> str:
    """First artist of a comma-joined artist list."""
    return artists.split(",")[0].strip()


def build_search_terms(title: str, artists: str) -> SearchTerms:
    """Derive every normalized form used by query building and scoring."""
    clean_artists = clean_search_term(artists)
    return SearchTerms(
        title=title,
        artists=artists,
        clean_title=clean_search_term(title),
        clean_artists=clean_artists,
        parenthetical_title=extract_parenthetical_title(title),
        main_artist=extract_main_artist(clean_artists),
    )


def build_search_queries(terms: SearchTerms) -> list[str]:
    """Ordered, de-duplicated search queries from most to least specific."""
    queries = [
        f"{terms.clean_title} {terms.clean_artists}",
        f"{terms.parenthetical_title} {terms.clean_artists}",
        terms.clean_title,
        terms.parenthetical_title,
        f"{terms.clean_artists} {terms.clean_title}",
        f"{terms.clean_title} {terms.main_artist}",
        f"{terms.parenthetical_title} {terms.main_artist}",
    ]

    unique: list[str] = []
    for query in queries:
        query = query.strip()
        if query and query not in unique:
            unique.append(query)
    return unique


def is_remix_or_cover(track_title: str) -> bool:
    """Detect derivative works (remixes, covers, live versions) by title."""
    title = track_title.lower()

    if any(keyword in title for keyword in REMIX_KEYWORDS):
        return True

    # "edit"/"mix"/"vip" are only markers inside brackets, e.g. "(Club Edit)"
    if _REMIX_IN_PARENS.search(title) or _REMIX_IN_BRACKETS.search(title):
        return True

    return bool(_TRAILING_REMIX.search(title))


def calculate_match_score(
    track_title: str,
    track_user: str,
    search_title: str,
    search_artists: str,
) -> int:
    """Score one candidate against one title/artist pair.

    All inputs are expected lower-cased.
    """
    cfg = MATCH_SCORE_CONFIG
    score = 0

    # 1. Exact matches
    if track_title == search_title:
        score += cfg["exact_title"]
    if track_user == search_artists:
        score += cfg["exact_artist"]

    # 2. Containment
    title_contains = search_title in track_title
    artist_contains = search_artists in track_user
    if title_contains:
        score += cfg["title_contains"]
    if artist_contains:
        score += cfg["artist_contains"]
    if title_contains and artist_contains:
        score += cfg["both_contain"]

    # 3. Prefix containment
    prefix = cfg["prefix_length"]
    if len(search_title) >= prefix and search_title[:prefix] in track_title:
        score += cfg["title_prefix"]
    if len(search_artists) >= prefix and search_artists[:prefix] in track_user:
        score += cfg["artist_prefix"]

    return score


def score_candidate(candidate: MatchCandidate, terms: SearchTerms) -> MatchEvidence:
    """Score a candidate against both title forms and apply the remix penalty."""
    track_title = candidate.title.lower()
    track_user = candidate.username.lower()
    title = terms.clean_title.lower()
    artists = terms.clean_artists.lower()
    parenthetical = terms.parenthetical_title.lower()

    raw_score = calculate_match_score(track_title, track_user, title, artists)
    if parenthetical and parenthetical != title:
        raw_score = max(
            raw_score,
            calculate_match_score(track_title, track_user, parenthetical, artists),
        )

    is_remix = is_remix_or_cover(track_title)
    score = raw_score // MATCH_SCORE_CONFIG["remix_divisor"] if is_remix else raw_score

    return MatchEvidence(
        candidate=candidate, raw_score=raw_score, score=score, is_remix=is_remix
    )


def find_best_match(
    candidates: Iterable[MatchCandidate],
    terms: SearchTerms,
    min_score: int | None = None,
) -> MatchEvidence | None:
    """Pick the highest-scoring candidate of one search batch.

    Candidates are evaluated in order with a strict ``>`` comparison, so the
    first of several equally scored candidates wins. Returns None when the
    best score is below ``min_score``.
    """
    threshold = MATCH_SCORE_CONFIG["min_score"] if min_score is None else min_score

    best: MatchEvidence | None = None
    best_score = 0
    for candidate in candidates:
        evidence = score_candidate(candidate, terms)
        if evidence.score > best_score:
            best_score = evidence.score
            best = evidence

    if best is not None and best_score >= threshold:
        return best
    return None
