"""Main FastAPI application for the rank resolution service."""

from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI

from rlranks.core import get_global_settings, get_logger, setup_logging
from rlranks.core.database import get_db_manager
from rlranks.core.tracker_api.client import TrackerAPIClient
from rlranks.features.ranks.dependencies import build_rank_service
from rlranks.features.ranks.repository import SQLAlchemyRankStore
from rlranks.features.ranks.router import router as ranks_router

settings = get_global_settings()
setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up rank resolution service")
    db = get_db_manager()
    await db.create_tables()
    tracker_client = TrackerAPIClient()
    await tracker_client.start_session()

    store = SQLAlchemyRankStore(db.async_session_factory, settings.store_scope)
    app.state.rank_service = build_rank_service(tracker_client, store, settings)
    yield
    logger.info("Shutting down rank resolution service")
    await tracker_client.close()
    await db.close()


tags_metadata = [
    {
        "name": "ranks",
        "description": "Resolve and classify player ranks with provider fallback.",
    },
    {
        "name": "health",
        "description": "Health check endpoint.",
    },
]

app = FastAPI(
    title="Rocket League Rank Resolver",
    description="Resolves player ranks from the live tracker with a stored fallback.",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

app.include_router(ranks_router, prefix="/api/v1", tags=["ranks"])


@app.get("/health", tags=["health"])
async def health_check() -> Dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "version": "0.1.0"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rlranks.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
