"""Pure domain types for fuzzy track matching.

These types represent search inputs, catalog candidates and scoring evidence.
"""

from typing import Any

from attrs import define, field


@define(frozen=True, slots=True)
class SearchTerms:
    """Normalized title/artist forms derived from one song.

    Attributes:
        title: Title as stored on the song
        artists: Comma-joined artists as stored on the song
        clean_title: Title without parenthetical content or featuring markers
        clean_artists: Artists without parenthetical content or featuring markers
        parenthetical_title: Content of the first parenthetical group of the
            title ("PATT (Party All The Time)" -> "Party All The Time"), or the
            raw title when it has none
        main_artist: First comma-separated segment of ``clean_artists``
    """

    title: str
    artists: str
    clean_title: str
    clean_artists: str
    parenthetical_title: str
    main_artist: str


@define(frozen=True, slots=True)
class MatchCandidate:
    """A track returned by a catalog search, reduced to what scoring needs."""

    track_id: int
    title: str
    username: str
    raw: dict[str, Any] = field(factory=dict, repr=False, eq=False)


@define(frozen=True, slots=True)
class MatchEvidence:
    """How a candidate's score was obtained.

    ``raw_score`` is the best of the primary and parenthetical title scores;
    ``score`` is after the remix/cover penalty.
    """

    candidate: MatchCandidate
    raw_score: int
    score: int
    is_remix: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "track_id": self.candidate.track_id,
            "title": self.candidate.title,
            "username": self.candidate.username,
            "raw_score": self.raw_score,
            "score": self.score,
            "is_remix": self.is_remix,
        }
