"""Playlist-related domain entities.

Read-only inputs of an export: the ordered song list and its metadata.
"""

from typing import Any

import attrs
from attrs import define, field, validators


@define(frozen=True, slots=True)
class Song:
    """A song as stored in a local playlist.

    ``artists`` is the comma-joined display form ("Daft Punk, Pharrell Williams").
    ``spotify_id`` is set when the song was added from the Spotify catalog and is
    used directly by the Spotify exporter instead of searching.
    """

    title: str | None = field(
        default=None, validator=validators.optional(validators.instance_of(str))
    )
    artists: str | None = field(
        default=None, validator=validators.optional(validators.instance_of(str))
    )
    spotify_id: str | None = field(default=None)

    # Internal database ID if available
    id: int | None = field(default=None)

    @property
    def has_search_terms(self) -> bool:
        """Both title and artists are non-empty, so the song can be searched for."""
        return bool(self.title) and bool(self.artists)

    def describe(self) -> str:
        """Short human-readable form for log lines."""
        return f"'{self.title or '?'}' by '{self.artists or '?'}'"


@define(frozen=True, slots=True)
class Playlist:
    """A locally built playlist to be reproduced on an external platform.

    Exporters treat playlists as immutable input; persisting the remote
    playlist id/url after an export is the caller's responsibility.
    """

    name: str | None = field(default=None)
    songs: list[Song] = field(
        factory=list,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(Song),
        ),
    )
    id: str | None = field(default=None)
    metadata: dict[str, Any] = field(factory=dict)

    def __len__(self) -> int:
        return len(self.songs)

    def display_name(self, default: str) -> str:
        """Remote playlist title, falling back to ``default`` when unnamed."""
        return self.name or default

    def with_songs(self, songs: list[Song]) -> "Playlist":
        """Create a new playlist with the given songs."""
        return attrs.evolve(self, songs=list(songs))
