"""Pydantic models for tracker API response data."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict

from .constants import PLAYLIST_SEGMENT_TYPE


class StatValueDTO(BaseModel):
    """A single tracker stat; only the raw value is used."""

    value: int


class PlaylistStatsDTO(BaseModel):
    """Stats block of a playlist segment."""

    tier: StatValueDTO
    rating: StatValueDTO


class SegmentMetadataDTO(BaseModel):
    """Metadata block of a segment."""

    name: str


class PlaylistSegmentDTO(BaseModel):
    """A segment of ``type == "playlist"``."""

    type: str
    metadata: SegmentMetadataDTO
    stats: PlaylistStatsDTO


class ProfileDataDTO(BaseModel):
    """The ``data`` object of a profile response.

    Segments stay loosely typed here; only playlist segments are validated
    strictly, other segment types (overview, season stats) are ignored.
    """

    segments: List[Dict[str, Any]]


class ProfileResponseDTO(BaseModel):
    """Top level profile response document."""

    data: ProfileDataDTO

    model_config = ConfigDict(extra="ignore")

    @property
    def playlist_segments(self) -> List[Dict[str, Any]]:
        """Raw segments flagged as playlists."""
        return [
            segment
            for segment in self.data.segments
            if segment.get("type") == PLAYLIST_SEGMENT_TYPE
        ]
