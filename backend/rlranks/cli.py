"""Command line entry point: resolve ranks from a shell."""

import asyncio
from typing import List, Optional

import typer

from rlranks.core.config import get_global_settings
from rlranks.core.database import DatabaseManager
from rlranks.core.enums import Platform, Playlist
from rlranks.core.exceptions import RanksExhaustedError
from rlranks.core.logging import setup_logging
from rlranks.core.tracker_api.client import TrackerAPIClient
from rlranks.features.ranks.dependencies import build_rank_service
from rlranks.features.ranks.models import PlayerIdentity
from rlranks.features.ranks.repository import SQLAlchemyRankStore
from rlranks.features.ranks.schemas import RankReportResponse

app = typer.Typer(help="Rocket League rank resolution.")


def _parse_identity(platform: str, account_id: str) -> PlayerIdentity:
    try:
        return PlayerIdentity(account_id=account_id, platform=Platform.parse(platform))
    except ValueError:
        typer.echo(f"Unknown platform: {platform}", err=True)
        raise typer.Exit(code=2)


def _parse_playlists(playlists: Optional[List[str]]) -> Optional[List[Playlist]]:
    if not playlists:
        return None
    parsed = []
    for name in playlists:
        try:
            parsed.append(Playlist.parse(name))
        except ValueError:
            typer.echo(f"Unknown playlist: {name}", err=True)
            raise typer.Exit(code=2)
    return parsed


async def _resolve(
    identity: PlayerIdentity,
    whitelist: Optional[List[Playlist]],
    database_url: Optional[str],
    cached_only: bool,
) -> Optional[RankReportResponse]:
    settings = get_global_settings()
    db = DatabaseManager(database_url)
    try:
        await db.create_tables()
        store = SQLAlchemyRankStore(db.async_session_factory, settings.store_scope)
        async with TrackerAPIClient() as client:
            service = build_rank_service(client, store, settings)
            if cached_only:
                return await service.get_cached(identity, whitelist)
            return await service.get_ranks(identity, whitelist)
    finally:
        await db.close()


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    setup_logging(log_level or get_global_settings().log_level)


@app.command()
def resolve(
    platform: str = typer.Argument(..., help="steam, xbox, playstation (ps) or epic"),
    account_id: str = typer.Argument(..., help="Platform account identifier"),
    playlist: Optional[List[str]] = typer.Option(
        None, "--playlist", "-p", help="Whitelisted playlist; repeat for more."
    ),
    database_url: Optional[str] = typer.Option(None, "--database-url"),
) -> None:
    """Resolve a player's ranks and print the report as JSON."""
    identity = _parse_identity(platform, account_id)
    whitelist = _parse_playlists(playlist)
    try:
        report = asyncio.run(_resolve(identity, whitelist, database_url, cached_only=False))
    except RanksExhaustedError as e:
        typer.echo(str(e), err=True)
        for provider, reason in e.attempts:
            typer.echo(f"  {provider}: {reason}", err=True)
        raise typer.Exit(code=1)
    typer.echo(report.model_dump_json(indent=2))


@app.command()
def cached(
    platform: str = typer.Argument(...),
    account_id: str = typer.Argument(...),
    playlist: Optional[List[str]] = typer.Option(None, "--playlist", "-p"),
    database_url: Optional[str] = typer.Option(None, "--database-url"),
) -> None:
    """Print the last stored ranks of a player without contacting the tracker."""
    identity = _parse_identity(platform, account_id)
    whitelist = _parse_playlists(playlist)
    report = asyncio.run(_resolve(identity, whitelist, database_url, cached_only=True))
    if report is None:
        typer.echo(f"No stored ranks for {identity}", err=True)
        raise typer.Exit(code=1)
    typer.echo(report.model_dump_json(indent=2))


def main() -> None:
    app()
