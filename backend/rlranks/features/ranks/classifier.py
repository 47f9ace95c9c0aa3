"""Derived queries over a rank set and a playlist whitelist.

An empty whitelist means every playlist counts.
"""

from typing import Iterable, List, Optional

from rlranks.core.enums import Playlist
from rlranks.core.exceptions import NoRanksError

from .models import Rank, RankSet


def filter_ranks(
    rank_set: RankSet, whitelist: Optional[Iterable[Playlist]] = None
) -> List[Rank]:
    """Ranks whose playlist is whitelisted, in playlist priority order."""
    allowed = set(whitelist or ())
    return [
        rank
        for playlist, rank in sorted(rank_set.ranks.items(), key=lambda item: item[0].priority)
        if not allowed or playlist in allowed
    ]


def unranked(rank_set: RankSet, whitelist: Optional[Iterable[Playlist]] = None) -> bool:
    """True if the player has no rank in any whitelisted playlist."""
    return not filter_ranks(rank_set, whitelist)


def best(rank_set: RankSet, whitelist: Optional[Iterable[Playlist]] = None) -> Rank:
    """
    Best whitelisted rank of a player.

    Highest tier wins, then higher mmr, then the fixed playlist priority
    (duel > doubles > standard > hoops > rumble > dropshot > snow_day > tournament).

    :raises NoRanksError: If no whitelisted playlist is ranked; check ``unranked`` first
    """
    whitelist = list(whitelist or ())
    candidates = filter_ranks(rank_set, whitelist)
    if not candidates:
        raise NoRanksError(whitelist)
    return min(
        candidates, key=lambda rank: (-rank.tier, -rank.mmr, rank.playlist.priority)
    )


def longest_playlist_label(rank_set: RankSet) -> int:
    """Length of the longest playlist display name present in the rank set."""
    return max((len(playlist.display_name) for playlist in rank_set.ranks), default=0)
