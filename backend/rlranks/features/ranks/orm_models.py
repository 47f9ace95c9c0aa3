"""SQLAlchemy 2.0 ORM model for persisted rank sets."""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime as SQLDateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from rlranks.core.models import Base

from .models import PlayerIdentity, RankSet


class PlayerRankSetORM(Base):
    """Last resolved rank set of a player within a server scope."""

    __tablename__ = "player_rank_sets"

    # Composite primary key: one row per player per scope
    account_id: Mapped[str] = mapped_column(
        String(128), primary_key=True, comment="Platform account identifier"
    )
    platform: Mapped[str] = mapped_column(
        String(16), primary_key=True, comment="Platform (steam, xbox, playstation, epic)"
    )
    server_scope: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Scope the ranks were stored for (e.g. a chat server id)",
    )

    ranks: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Ranks as {playlist: {tier, mmr}} with zero-based tiers",
    )

    resolved_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        comment="When the provider produced this rank set (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        comment="When this row was last written",
    )

    def __repr__(self) -> str:
        return (
            f"<PlayerRankSetORM(account_id='{self.account_id}', platform='{self.platform}', "
            f"server_scope='{self.server_scope}', playlists={len(self.ranks or {})})>"
        )

    @classmethod
    def from_domain(cls, rank_set: RankSet, server_scope: str) -> "PlayerRankSetORM":
        """Build a row from a rank set."""
        return cls(
            account_id=rank_set.identity.account_id,
            platform=rank_set.identity.platform.value,
            server_scope=server_scope,
            ranks=rank_set.to_record(),
            resolved_at=rank_set.resolved_at.astimezone(timezone.utc),
        )

    def to_domain(self) -> RankSet:
        """Rebuild the stored rank set."""
        resolved_at = self.resolved_at
        # SQLite drops tzinfo; values are always written in UTC
        if resolved_at.tzinfo is None:
            resolved_at = resolved_at.replace(tzinfo=timezone.utc)
        return RankSet.from_record(
            PlayerIdentity(account_id=self.account_id, platform=self.platform),
            self.ranks or {},
            resolved_at,
        )
