"""Rank service: thin orchestration over the resolver, the store and the classifier."""

from typing import Iterable, Optional

import structlog

from rlranks.core.enums import Playlist

from .models import PlayerIdentity
from .repository import RankStoreInterface
from .resolver import RankResolver
from .schemas import RankReportResponse
from .transformers import rank_set_to_report

logger = structlog.get_logger(__name__)


class RankService:
    """Service answering "current best-known ranks of player X"."""

    def __init__(
        self,
        resolver: RankResolver,
        store: RankStoreInterface,
        default_whitelist: Optional[Iterable[Playlist]] = None,
    ):
        """Initialize the service.

        :param resolver: Resolver with providers in priority order
        :param store: Store used for cache-only lookups
        :param default_whitelist: Playlists used when a call passes none
        """
        self.resolver = resolver
        self.store = store
        self.default_whitelist = list(default_whitelist or ())

    def _whitelist(self, whitelist: Optional[Iterable[Playlist]]) -> list[Playlist]:
        if whitelist is None:
            return self.default_whitelist
        return list(whitelist)

    async def get_ranks(
        self,
        identity: PlayerIdentity,
        whitelist: Optional[Iterable[Playlist]] = None,
    ) -> RankReportResponse:
        """Resolve a player's ranks and classify them.

        :param identity: Player identity
        :param whitelist: Playlists that count (service default if None)
        :returns: Rank report
        :raises RanksExhaustedError: If no provider could produce ranks
        """
        rank_set, trace = await self.resolver.resolve_with_trace(identity)
        from_cache = not self.resolver.providers[trace.provider_index].persist_results
        return rank_set_to_report(rank_set, self._whitelist(whitelist), from_cache)

    async def get_cached(
        self,
        identity: PlayerIdentity,
        whitelist: Optional[Iterable[Playlist]] = None,
    ) -> Optional[RankReportResponse]:
        """Classify the stored rank set of a player without resolving.

        :returns: Rank report, or None if nothing is stored
        :raises StoreError: If the store fails
        """
        rank_set = await self.store.get(identity)
        if rank_set is None:
            logger.debug("No cached ranks", identity=str(identity))
            return None
        return rank_set_to_report(rank_set, self._whitelist(whitelist), from_cache=True)
