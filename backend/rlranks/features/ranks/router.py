"""Rank API endpoints."""

from typing import List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Query

from rlranks.core.enums import Platform, Playlist
from rlranks.core.exceptions import RanksExhaustedError, StoreError

from .dependencies import RankServiceDep
from .models import PlayerIdentity
from .schemas import RankReportResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/ranks", tags=["ranks"])


def _parse_identity(platform: str, account_id: str) -> PlayerIdentity:
    try:
        return PlayerIdentity(account_id=account_id, platform=Platform.parse(platform))
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unknown platform: {platform}")


def _parse_playlists(playlists: Optional[List[str]]) -> Optional[List[Playlist]]:
    if not playlists:
        return None
    try:
        return [Playlist.parse(name) for name in playlists]
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Unknown playlist: {e}")


@router.get("/{platform}/{account_id}", response_model=RankReportResponse)
async def get_player_ranks(
    platform: str,
    account_id: str,
    rank_service: RankServiceDep,
    playlists: Optional[List[str]] = Query(
        None, description="Playlist whitelist; omit to use the configured default"
    ),
):
    """
    Resolve and classify the ranks of a player.

    Tries the live tracker first and falls back to the last stored ranks.

    Returns:
        Rank report. 503 when no provider could produce ranks.
    """
    identity = _parse_identity(platform, account_id)
    whitelist = _parse_playlists(playlists)

    try:
        return await rank_service.get_ranks(identity, whitelist)
    except RanksExhaustedError as e:
        raise HTTPException(
            status_code=503,
            detail={
                "message": f"Could not fetch ranks for {account_id}",
                "attempts": [
                    {"provider": provider, "reason": reason}
                    for provider, reason in e.attempts
                ],
            },
        )


@router.get("/{platform}/{account_id}/cached", response_model=RankReportResponse)
async def get_cached_player_ranks(
    platform: str,
    account_id: str,
    rank_service: RankServiceDep,
    playlists: Optional[List[str]] = Query(None),
):
    """Return the last stored ranks of a player without contacting the tracker."""
    identity = _parse_identity(platform, account_id)
    whitelist = _parse_playlists(playlists)

    try:
        report = await rank_service.get_cached(identity, whitelist)
    except StoreError as e:
        logger.error("Failed to read cached ranks", identity=str(identity), error=str(e))
        raise HTTPException(status_code=500, detail="Internal error reading stored ranks")

    if report is None:
        raise HTTPException(status_code=404, detail=f"No stored ranks for {account_id}")
    return report
