"""Export platform identifiers."""

from enum import StrEnum


class Platform(StrEnum):
    """Platforms a playlist can be exported to.

    Values are the identifiers used by credential storage and the HTTP API.
    Google credentials are used for YouTube exports.
    """

    SPOTIFY = "spotify"
    GOOGLE = "google"
    SOUNDCLOUD = "soundcloud"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "Platform | None":
        """Exact-match lookup; returns None for unknown names."""
        try:
            return cls(name)
        except ValueError:
            return None


_DISPLAY_NAMES = {
    Platform.SPOTIFY: "Spotify",
    Platform.GOOGLE: "Google",
    Platform.SOUNDCLOUD: "SoundCloud",
}
