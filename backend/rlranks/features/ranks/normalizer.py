"""Normalization of tracker payloads into rank sets.

Translates tracker playlist names to canonical playlists, rebases 1-based
tiers to 0-based ones and stamps the result with the player identity and the
resolution time. Any malformed field fails the whole payload.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import ValidationError

from rlranks.core.enums import Playlist
from rlranks.core.exceptions import NormalizationError
from rlranks.core.tracker_api.constants import PLAYLIST_NAMES
from rlranks.core.tracker_api.models import PlaylistSegmentDTO, ProfileResponseDTO

from .models import PlayerIdentity, Rank, RankSet, utcnow


def parse_tracker_payload(payload: Any) -> ProfileResponseDTO:
    """Validate the outer structure of a tracker profile document.

    :param payload: Decoded JSON body
    :returns: Profile document with raw segments
    :raises NormalizationError: If ``data.segments`` is missing or not a list of objects
    """
    try:
        return ProfileResponseDTO.model_validate(payload)
    except ValidationError as e:
        raise NormalizationError(
            f"invalid profile document ({e.error_count()} errors)", field="data"
        ) from e


def translate_playlist(name: str) -> Playlist:
    """Map a tracker playlist name to a playlist.

    :raises NormalizationError: If the name is not in the translation table
    """
    try:
        return PLAYLIST_NAMES[name]
    except KeyError:
        raise NormalizationError(f"unknown playlist {name!r}", field="metadata.name")


def rebase_tier(raw_tier: int) -> Optional[int]:
    """Convert a 1-based tracker tier to a 0-based tier.

    :returns: ``raw_tier - 1``, or None when the playlist is unplaced (raw 0)
    :raises NormalizationError: If the raw tier is negative
    """
    if raw_tier < 0:
        raise NormalizationError(f"negative tier {raw_tier}", field="stats.tier.value")
    if raw_tier == 0:
        return None
    return raw_tier - 1


def normalize_tracker_profile(
    profile: ProfileResponseDTO,
    identity: PlayerIdentity,
    resolved_at: Optional[datetime] = None,
) -> RankSet:
    """Build a rank set from the playlist segments of a profile document."""
    ranks: Dict[Playlist, Rank] = {}
    seen = set()

    for index, raw_segment in enumerate(profile.playlist_segments):
        try:
            segment = PlaylistSegmentDTO.model_validate(raw_segment)
        except ValidationError as e:
            raise NormalizationError(
                f"malformed playlist segment ({e.error_count()} errors)",
                field=f"segments[{index}]",
            ) from e

        # Unplaced segments are skipped before their name is looked up
        tier = rebase_tier(segment.stats.tier.value)
        if tier is None:
            continue

        playlist = translate_playlist(segment.metadata.name)
        if playlist in seen:
            raise NormalizationError(
                f"duplicate playlist {segment.metadata.name!r}",
                field=f"segments[{index}]",
            )
        seen.add(playlist)
        ranks[playlist] = Rank(
            playlist=playlist, tier=tier, mmr=segment.stats.rating.value
        )

    return RankSet(identity=identity, ranks=ranks, resolved_at=resolved_at or utcnow())


def normalize_tracker_payload(
    payload: Any,
    identity: PlayerIdentity,
    resolved_at: Optional[datetime] = None,
) -> RankSet:
    """Parse and normalize a raw tracker payload in one step.

    :raises NormalizationError: If any part of the payload is malformed
    """
    return normalize_tracker_profile(
        parse_tracker_payload(payload), identity, resolved_at
    )
