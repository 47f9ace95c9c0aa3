"""Dependencies for the ranks feature.

Wires providers in priority order and injects the resolver, store and
service following the dependency inversion principle.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request

from rlranks.core.config import Settings, get_global_settings
from rlranks.core.tracker_api.client import TrackerAPIClient

from .providers import StoreRankProvider, TrackerRankProvider
from .repository import RankStoreInterface
from .resolver import RankResolver
from .service import RankService


def build_rank_resolver(
    tracker_client: TrackerAPIClient,
    store: RankStoreInterface,
    settings: Optional[Settings] = None,
) -> RankResolver:
    """Create a resolver with the fixed provider order.

    Live tracker first, historical store last.

    :param tracker_client: Tracker API client
    :param store: Rank store (also the last-resort provider)
    :param settings: Settings (global settings if None)
    :returns: Configured resolver
    """
    settings = settings or get_global_settings()
    providers = [TrackerRankProvider(tracker_client), StoreRankProvider(store)]
    return RankResolver(providers, store, timeout=settings.provider_timeout_seconds)


def build_rank_service(
    tracker_client: TrackerAPIClient,
    store: RankStoreInterface,
    settings: Optional[Settings] = None,
) -> RankService:
    """Create a rank service with a default-ordered resolver."""
    settings = settings or get_global_settings()
    return RankService(
        build_rank_resolver(tracker_client, store, settings),
        store,
        default_whitelist=settings.default_playlist_list,
    )


async def get_rank_service(request: Request) -> RankService:
    """Get the rank service created at application startup.

    :param request: Incoming request
    :returns: Rank service
    """
    return request.app.state.rank_service


# Type aliases for cleaner dependency injection
RankServiceDep = Annotated[RankService, Depends(get_rank_service)]

__all__ = [
    "build_rank_resolver",
    "build_rank_service",
    "get_rank_service",
    "RankServiceDep",
]
