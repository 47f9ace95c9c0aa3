"""Repository pattern implementation for persisted rank sets (the Store).

The store is both a durable cache keyed by player identity and the
last-resort provider of the resolver. Writes are last-write-wins upserts.
"""

import asyncio
import weakref
from abc import ABC, abstractmethod
from typing import Dict, Hashable, Optional, Tuple

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rlranks.core.exceptions import StoreError

from .models import PlayerIdentity, RankSet
from .orm_models import PlayerRankSetORM

logger = structlog.get_logger(__name__)

DEFAULT_SCOPE = "global"


class RankStoreInterface(ABC):
    """Interface for the rank store.

    Defines contract for data access operations.
    Enables mocking and swapping the persistence backend.
    """

    server_scope: str = DEFAULT_SCOPE

    @abstractmethod
    async def get(self, identity: PlayerIdentity) -> Optional[RankSet]:
        """Get the last stored rank set of a player.

        :param identity: Player identity
        :returns: Stored rank set, however old, or None if nothing was stored
        :raises StoreError: If the backend fails
        """
        pass

    @abstractmethod
    async def put(self, rank_set: RankSet) -> None:
        """Store a rank set, replacing any previous one for the same identity.

        :param rank_set: Rank set to store
        :raises StoreError: If the backend fails
        """
        pass


class KeyedLocks:
    """Per-key asyncio locks; a lock lives only while someone holds a reference."""

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock


class InMemoryRankStore(RankStoreInterface):
    """Dict-backed store, used in tests and when no database is configured."""

    def __init__(self, server_scope: str = DEFAULT_SCOPE):
        self.server_scope = server_scope
        self._rank_sets: Dict[Tuple[PlayerIdentity, str], RankSet] = {}

    async def get(self, identity: PlayerIdentity) -> Optional[RankSet]:
        return self._rank_sets.get((identity, self.server_scope))

    async def put(self, rank_set: RankSet) -> None:
        self._rank_sets[(rank_set.identity, self.server_scope)] = rank_set
        logger.debug("Rank set stored in memory", identity=str(rank_set.identity))

    def __len__(self) -> int:
        return len(self._rank_sets)


class SQLAlchemyRankStore(RankStoreInterface):
    """Rank store backed by the ``player_rank_sets`` table.

    Each operation opens its own session so independent resolutions never
    share one; writes to the same key are serialized in-process.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        server_scope: str = DEFAULT_SCOPE,
    ):
        """Initialize store with a session factory.

        :param session_factory: Async session factory
        :param server_scope: Scope component of every key this store touches
        """
        self._session_factory = session_factory
        self.server_scope = server_scope
        self._locks = KeyedLocks()

    def _key(self, identity: PlayerIdentity) -> Tuple[str, str, str]:
        return (identity.account_id, identity.platform.value, self.server_scope)

    async def get(self, identity: PlayerIdentity) -> Optional[RankSet]:
        try:
            async with self._session_factory() as session:
                row = await session.get(PlayerRankSetORM, self._key(identity))
                if row is None:
                    return None
                return row.to_domain()
        except SQLAlchemyError as e:
            raise StoreError(
                str(e),
                operation="get",
                context={"identity": str(identity)},
                original_error=e,
            ) from e
        except ValueError as e:
            raise StoreError(
                f"corrupt rank record: {e}",
                operation="get",
                context={"identity": str(identity)},
                original_error=e,
            ) from e

    async def put(self, rank_set: RankSet) -> None:
        key = self._key(rank_set.identity)
        async with self._locks.lock_for(key):
            try:
                async with self._session_factory() as session:
                    await session.merge(
                        PlayerRankSetORM.from_domain(rank_set, self.server_scope)
                    )
                    await session.commit()
            except SQLAlchemyError as e:
                raise StoreError(
                    str(e),
                    operation="put",
                    context={"identity": str(rank_set.identity)},
                    original_error=e,
                ) from e

        logger.debug(
            "Rank set stored",
            identity=str(rank_set.identity),
            server_scope=self.server_scope,
            playlists=len(rank_set.ranks),
        )
