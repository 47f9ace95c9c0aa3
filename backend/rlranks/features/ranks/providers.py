"""Rank providers: upstream sources tried by the resolver in priority order.

A provider turns a player identity into a ``ProviderResult``. Expected
failures (network errors, non-2xx responses, malformed bodies, nothing
stored) are reported as ``UNAVAILABLE`` results, never raised.
"""

from abc import ABC, abstractmethod

import structlog

from rlranks.core.exceptions import NormalizationError, StoreError
from rlranks.core.tracker_api.client import TrackerAPIClient
from rlranks.core.tracker_api.errors import TrackerAPIError

from .models import PlayerIdentity, ProviderResult
from .normalizer import normalize_tracker_profile, parse_tracker_payload
from .repository import RankStoreInterface

logger = structlog.get_logger(__name__)


class RankProvider(ABC):
    """Capability: given a player identity, return a rank set or fail."""

    name: str = "provider"
    # Whether a successful result from this provider is written to the store
    persist_results: bool = True

    @abstractmethod
    async def fetch(self, identity: PlayerIdentity) -> ProviderResult:
        """Fetch and normalize the ranks of a player.

        :param identity: Player identity
        :returns: Found, not-found or unavailable result
        """
        raise NotImplementedError()

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(name='{self.name}')>"


class TrackerRankProvider(RankProvider):
    """Live third-party tracker API."""

    name = "tracker"

    def __init__(self, client: TrackerAPIClient):
        """
        Initialize provider with a tracker client.

        :param client: Low-level tracker API client
        """
        self._client = client

    async def fetch(self, identity: PlayerIdentity) -> ProviderResult:
        try:
            payload = await self._client.get_profile(
                identity.platform, identity.account_id
            )
        except TrackerAPIError as e:
            return ProviderResult.unavailable(str(e))

        try:
            profile = parse_tracker_payload(payload)
            if not profile.playlist_segments:
                logger.info(
                    "Tracker returned no playlists",
                    account_id=identity.account_id,
                    platform=identity.platform.value,
                )
                return ProviderResult.not_found(identity)
            rank_set = normalize_tracker_profile(profile, identity)
        except NormalizationError as e:
            return ProviderResult.unavailable(str(e))

        logger.debug(
            "Tracker ranks normalized",
            account_id=identity.account_id,
            platform=identity.platform.value,
            playlists=[p.value for p in rank_set.ranks],
        )
        return ProviderResult.found(rank_set)


class StoreRankProvider(RankProvider):
    """Historical store: the last rank set resolved for the player."""

    name = "store"
    persist_results = False

    def __init__(self, store: RankStoreInterface):
        self._store = store

    async def fetch(self, identity: PlayerIdentity) -> ProviderResult:
        try:
            rank_set = await self._store.get(identity)
        except StoreError as e:
            return ProviderResult.unavailable(str(e))

        if rank_set is None:
            return ProviderResult.unavailable("no stored ranks")
        return ProviderResult.found(rank_set)
