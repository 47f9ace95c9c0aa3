"""Rank resolution feature.

Providers, normalizer, resolver, classifier and store for player ranks.
"""

from .classifier import best, filter_ranks, longest_playlist_label, unranked
from .models import (
    PlayerIdentity,
    ProviderOutcome,
    ProviderResult,
    Rank,
    RankSet,
)
from .providers import RankProvider, StoreRankProvider, TrackerRankProvider
from .repository import InMemoryRankStore, RankStoreInterface, SQLAlchemyRankStore
from .resolver import RankResolver, ResolutionTrace, ResolverState
from .service import RankService

__all__ = [
    "best",
    "filter_ranks",
    "longest_playlist_label",
    "unranked",
    "PlayerIdentity",
    "ProviderOutcome",
    "ProviderResult",
    "Rank",
    "RankSet",
    "RankProvider",
    "StoreRankProvider",
    "TrackerRankProvider",
    "InMemoryRankStore",
    "RankStoreInterface",
    "SQLAlchemyRankStore",
    "RankResolver",
    "ResolutionTrace",
    "ResolverState",
    "RankService",
]
