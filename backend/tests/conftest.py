"""Shared fixtures for the rank resolution test suite."""

from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx
import pytest
import pytest_asyncio

from rlranks.core.database import DatabaseManager
from rlranks.core.enums import Platform
from rlranks.core.tracker_api.client import TrackerAPIClient
from rlranks.features.ranks.models import PlayerIdentity
from rlranks.features.ranks.repository import InMemoryRankStore, SQLAlchemyRankStore

TRACKER_BASE_URL = "https://tracker.test/api/v2/rocket-league/standard/profile"


def playlist_segment(name: str, tier: int, rating: int) -> Dict[str, Any]:
    """Build a tracker playlist segment."""
    return {
        "type": "playlist",
        "metadata": {"name": name},
        "stats": {"tier": {"value": tier}, "rating": {"value": rating}},
    }


def profile_payload(segments: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Build a tracker profile document around some segments."""
    return {"data": {"platformInfo": {"platformSlug": "steam"}, "segments": segments}}


def tracker_client_for(handler) -> TrackerAPIClient:
    """Tracker client whose requests are answered by ``handler``."""
    return TrackerAPIClient(
        base_url=TRACKER_BASE_URL,
        timeout=5.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def identity() -> PlayerIdentity:
    """Steam player used across tests."""
    return PlayerIdentity(account_id="76561198000000000", platform=Platform.STEAM)


@pytest.fixture
def resolved_at() -> datetime:
    """Fixed resolution timestamp."""
    return datetime(2024, 5, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture
def memory_store() -> InMemoryRankStore:
    """Empty in-memory rank store."""
    return InMemoryRankStore()


@pytest_asyncio.fixture
async def db_manager(tmp_path):
    """Database manager on a throwaway SQLite file with tables created."""
    # Registers PlayerRankSetORM on Base.metadata
    from rlranks.features.ranks import orm_models  # noqa: F401

    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'ranks.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def sql_store(db_manager) -> SQLAlchemyRankStore:
    """SQLAlchemy rank store on the throwaway database."""
    return SQLAlchemyRankStore(db_manager.async_session_factory)
