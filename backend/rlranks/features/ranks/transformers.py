"""Transformers from rank domain values to API schemas."""

from typing import Iterable, Optional

from rlranks.core.enums import Playlist

from . import classifier
from .models import Rank, RankSet
from .schemas import RankReportResponse, RankResponse


def rank_to_response(rank: Rank) -> RankResponse:
    """Transform a Rank to its response schema."""
    return RankResponse(
        playlist=rank.playlist,
        display_name=rank.playlist.display_name,
        tier=rank.tier,
        mmr=rank.mmr,
    )


def rank_set_to_report(
    rank_set: RankSet,
    whitelist: Optional[Iterable[Playlist]] = None,
    from_cache: bool = False,
) -> RankReportResponse:
    """Classify a rank set against a whitelist and build the report.

    :param rank_set: Resolved or cached rank set
    :param whitelist: Playlists that count; empty or None means all
    :param from_cache: Whether the rank set came from the store
    :returns: Report with ranks, unranked flag and best rank
    """
    whitelist = list(whitelist or ())
    is_unranked = classifier.unranked(rank_set, whitelist)
    best_rank = None if is_unranked else classifier.best(rank_set, whitelist)

    return RankReportResponse(
        account_id=rank_set.identity.account_id,
        platform=rank_set.identity.platform,
        resolved_at=rank_set.resolved_at,
        from_cache=from_cache,
        whitelist=whitelist,
        ranks=[rank_to_response(r) for r in classifier.filter_ranks(rank_set, whitelist)],
        unranked=is_unranked,
        best=rank_to_response(best_rank) if best_rank else None,
        longest_playlist_label=classifier.longest_playlist_label(rank_set),
    )
