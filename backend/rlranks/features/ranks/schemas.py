"""Pydantic schemas for rank reports."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from rlranks.core.enums import Platform, Playlist


class RankResponse(BaseModel):
    """A single playlist rank."""

    playlist: Playlist = Field(..., description="Canonical playlist")
    display_name: str = Field(..., description="Playlist display name")
    tier: int = Field(..., ge=0, description="Zero-based tier")
    mmr: int = Field(..., description="Matchmaking rating")


class RankReportResponse(BaseModel):
    """Rank set of a player plus the classifier outputs for a whitelist."""

    account_id: str = Field(..., description="Platform account identifier")
    platform: Platform = Field(..., description="Account platform")
    resolved_at: datetime = Field(..., description="When the ranks were resolved")
    from_cache: bool = Field(
        False, description="Whether the ranks came from the historical store"
    )
    whitelist: List[Playlist] = Field(
        default_factory=list, description="Playlists considered; empty means all"
    )
    ranks: List[RankResponse] = Field(
        default_factory=list, description="Whitelisted ranks in playlist priority order"
    )
    unranked: bool = Field(..., description="No rank in any whitelisted playlist")
    best: Optional[RankResponse] = Field(
        None, description="Best whitelisted rank, None when unranked"
    )
    longest_playlist_label: int = Field(
        0, description="Longest playlist display name among present playlists"
    )
