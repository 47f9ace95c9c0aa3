"""Ordered-fallback rank resolution.

The resolver walks its providers strictly in priority order:

    NOT_STARTED -> TRYING_PROVIDER(0) -> ... -> SUCCEEDED | EXHAUSTED

The first found or not-found result wins and is written to the store. An
unavailable provider is logged and skipped. When every provider is
unavailable resolution ends in ``RanksExhaustedError`` and the store is left
untouched.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

import structlog
from structlog import contextvars as structlog_contextvars

from rlranks.core.config import get_global_settings
from rlranks.core.exceptions import RanksExhaustedError, StoreError

from .models import PlayerIdentity, ProviderOutcome, ProviderResult, RankSet
from .providers import RankProvider
from .repository import RankStoreInterface

logger = structlog.get_logger(__name__)


class ResolverState(str, Enum):
    """States of a single resolution."""

    NOT_STARTED = "not_started"
    TRYING_PROVIDER = "trying_provider"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


@dataclass
class ResolutionTrace:
    """Record of the states a resolution went through."""

    identity: PlayerIdentity
    state: ResolverState = ResolverState.NOT_STARTED
    provider_index: Optional[int] = None
    provider: Optional[str] = None
    outcome: Optional[ProviderOutcome] = None
    transitions: List[Tuple[ResolverState, Optional[str]]] = field(
        default_factory=lambda: [(ResolverState.NOT_STARTED, None)]
    )
    attempts: List[Tuple[str, str]] = field(default_factory=list)

    def transition(
        self,
        state: ResolverState,
        provider_index: Optional[int] = None,
        provider: Optional[str] = None,
    ) -> None:
        self.state = state
        self.provider_index = provider_index
        self.provider = provider
        self.transitions.append((state, provider))

    @property
    def tried(self) -> List[str]:
        """Names of providers attempted, in order."""
        return [
            name
            for state, name in self.transitions
            if state == ResolverState.TRYING_PROVIDER and name is not None
        ]


class RankResolver:
    """Resolves rank sets through an ordered list of providers."""

    def __init__(
        self,
        providers: Sequence[RankProvider],
        store: RankStoreInterface,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the resolver.

        Args:
            providers: Providers in priority order (most authoritative first)
            store: Store successful results are written to
            timeout: Deadline in seconds for each provider attempt (uses config if None)
        """
        if not providers:
            raise ValueError("RankResolver needs at least one provider")
        self.providers = list(providers)
        self.store = store
        self.timeout = timeout or get_global_settings().provider_timeout_seconds

    async def resolve(self, identity: PlayerIdentity) -> RankSet:
        """
        Resolve the current best-known ranks of a player.

        Args:
            identity: Player identity

        Returns:
            Rank set from the first provider that did not fail

        Raises:
            RanksExhaustedError: If every provider was unavailable
        """
        rank_set, _ = await self.resolve_with_trace(identity)
        return rank_set

    async def resolve_with_trace(
        self, identity: PlayerIdentity
    ) -> Tuple[RankSet, ResolutionTrace]:
        """Resolve like ``resolve`` and also return the resolution trace.

        The identity is bound to the structlog context for the whole
        resolution, so provider and store log events carry it too.
        """
        structlog_contextvars.bind_contextvars(
            account_id=identity.account_id, platform=identity.platform.value
        )
        try:
            return await self._run(identity)
        finally:
            structlog_contextvars.unbind_contextvars("account_id", "platform")

    async def _run(self, identity: PlayerIdentity) -> Tuple[RankSet, ResolutionTrace]:
        trace = ResolutionTrace(identity=identity)

        for index, provider in enumerate(self.providers):
            trace.transition(ResolverState.TRYING_PROVIDER, index, provider.name)
            result = await self._attempt(provider, identity)

            if not result.is_success:
                reason = result.reason or "unavailable"
                trace.attempts.append((provider.name, reason))
                logger.warning(
                    "Rank provider failed", provider=provider.name, reason=reason
                )
                continue

            assert result.rank_set is not None
            trace.outcome = result.outcome
            trace.transition(ResolverState.SUCCEEDED, index, provider.name)
            if provider.persist_results:
                await self._persist(result.rank_set)
            logger.info(
                "Ranks resolved",
                provider=provider.name,
                outcome=result.outcome.value,
                playlists=len(result.rank_set.ranks),
            )
            return result.rank_set, trace

        trace.transition(ResolverState.EXHAUSTED)
        logger.warning("All rank providers failed", attempts=len(trace.attempts))
        raise RanksExhaustedError(
            identity.account_id, identity.platform.value, list(trace.attempts)
        )

    async def _attempt(
        self, provider: RankProvider, identity: PlayerIdentity
    ) -> ProviderResult:
        """Run one provider call bounded by the resolver timeout."""
        try:
            return await asyncio.wait_for(provider.fetch(identity), self.timeout)
        except asyncio.TimeoutError:
            return ProviderResult.unavailable(f"timed out after {self.timeout}s")

    async def _persist(self, rank_set: RankSet) -> None:
        """Write a resolved rank set; a store failure does not fail the resolution."""
        try:
            await self.store.put(rank_set)
        except StoreError as e:
            logger.error("Failed to store resolved ranks", error=str(e))
