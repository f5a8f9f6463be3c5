"""Export outcome value objects."""

from typing import Any

from attrs import define, field, validators


@define(frozen=True, slots=True)
class ExportResult:
    """Outcome of exporting one playlist to one platform.

    Remote ids are opaque strings on every platform, including SoundCloud whose
    native ids are integers. ``exported_tracks + failed_tracks`` equals the
    number of songs in the exported playlist.
    """

    playlist_id: str = field(converter=str)
    playlist_url: str
    exported_tracks: int = field(validator=validators.ge(0))
    failed_tracks: int = field(validator=validators.ge(0))
    platform: str

    @property
    def has_failures(self) -> bool:
        return self.failed_tracks > 0

    @property
    def is_full_success(self) -> bool:
        return self.failed_tracks == 0 and self.exported_tracks > 0

    @property
    def is_empty(self) -> bool:
        return self.exported_tracks == 0 and self.failed_tracks == 0

    @property
    def total_tracks_processed(self) -> int:
        return self.exported_tracks + self.failed_tracks

    @property
    def success_rate(self) -> float:
        """Percentage of processed tracks that were exported (0.0 when empty)."""
        total = self.total_tracks_processed
        if total == 0:
            return 0.0
        return self.exported_tracks / total * 100.0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape used by the HTTP layer."""
        return {
            "playlist_id": self.playlist_id,
            "playlist_url": self.playlist_url,
            "exported_tracks": self.exported_tracks,
            "failed_tracks": self.failed_tracks,
            "platform": self.platform,
        }


@define(slots=True)
class TrackTally:
    """Running exported/failed counters for one export."""

    exported: int = 0
    failed: int = 0

    def success(self, count: int = 1) -> None:
        self.exported += count

    def failure(self, count: int = 1) -> None:
        self.failed += count

    @property
    def processed(self) -> int:
        return self.exported + self.failed
