"""Infrastructure services backed by platform APIs."""

from .track_matcher import SoundCloudTrackMatcher, parse_track_candidates

__all__ = ["SoundCloudTrackMatcher", "parse_track_candidates"]
