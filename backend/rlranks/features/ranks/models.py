"""Domain models for rank resolution.

``PlayerIdentity``, ``Rank`` and ``RankSet`` are immutable values. A rank set
is created once by a provider and never mutated afterwards; the store hands
back copies.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from rlranks.core.enums import Platform, Playlist


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class PlayerIdentity:
    """A player account on one platform."""

    account_id: str
    platform: Platform

    def __post_init__(self) -> None:
        if not isinstance(self.account_id, str) or not self.account_id.strip():
            raise ValueError("account_id must be a non-empty string")
        if not isinstance(self.platform, Platform):
            object.__setattr__(self, "platform", Platform.parse(self.platform))

    def __str__(self) -> str:
        return f"{self.platform.value}:{self.account_id}"


@dataclass(frozen=True)
class Rank:
    """Zero-based tier and mmr of a player in one playlist."""

    playlist: Playlist
    tier: int
    mmr: int

    def __post_init__(self) -> None:
        if self.tier < 0:
            raise ValueError(f"tier must be >= 0, got {self.tier}")

    def to_record(self) -> Dict[str, int]:
        return {"tier": self.tier, "mmr": self.mmr}


@dataclass(frozen=True)
class RankSet:
    """Ranks of one player keyed by playlist, stamped with resolution time.

    A playlist missing from ``ranks`` means the player has no ranked result
    there (unplaced playlists are missing too).
    """

    identity: PlayerIdentity
    ranks: Mapping[Playlist, Rank] = field(default_factory=dict)
    resolved_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        for playlist, rank in self.ranks.items():
            if rank.playlist != playlist:
                raise ValueError(
                    f"rank for {rank.playlist.value} stored under {playlist.value}"
                )
        ordered = dict(sorted(self.ranks.items(), key=lambda item: item[0].priority))
        object.__setattr__(self, "ranks", MappingProxyType(ordered))

    @classmethod
    def empty(
        cls, identity: PlayerIdentity, resolved_at: Optional[datetime] = None
    ) -> "RankSet":
        """Rank set of a player with no ranked playlists."""
        return cls(identity=identity, ranks={}, resolved_at=resolved_at or utcnow())

    @property
    def is_empty(self) -> bool:
        return not self.ranks

    def to_record(self) -> Dict[str, Dict[str, int]]:
        """Serialize ranks as ``{playlist: {"tier": .., "mmr": ..}}``."""
        return {playlist.value: rank.to_record() for playlist, rank in self.ranks.items()}

    @classmethod
    def from_record(
        cls,
        identity: PlayerIdentity,
        record: Mapping[str, Mapping[str, Any]],
        resolved_at: datetime,
    ) -> "RankSet":
        """Rebuild a rank set from its serialized form.

        Tiers in a record are already zero-based and are taken as is.

        :raises ValueError: If the record does not have the serialized shape
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"rank record must be a mapping, got {type(record).__name__}")
        ranks = {}
        for name, values in record.items():
            playlist = Playlist(name)
            try:
                tier, mmr = int(values["tier"]), int(values["mmr"])
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"malformed rank for {name!r}: {values!r}") from e
            ranks[playlist] = Rank(playlist=playlist, tier=tier, mmr=mmr)
        return cls(identity=identity, ranks=ranks, resolved_at=resolved_at)


class ProviderOutcome(str, Enum):
    """Classification of a single provider attempt."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of ``RankProvider.fetch``.

    ``NOT_FOUND`` carries an empty rank set: the provider verified the player
    has no playlists at all.
    """

    outcome: ProviderOutcome
    rank_set: Optional[RankSet] = None
    reason: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.outcome != ProviderOutcome.UNAVAILABLE

    @classmethod
    def found(cls, rank_set: RankSet) -> "ProviderResult":
        return cls(outcome=ProviderOutcome.FOUND, rank_set=rank_set)

    @classmethod
    def not_found(
        cls, identity: PlayerIdentity, resolved_at: Optional[datetime] = None
    ) -> "ProviderResult":
        return cls(
            outcome=ProviderOutcome.NOT_FOUND,
            rank_set=RankSet.empty(identity, resolved_at),
        )

    @classmethod
    def unavailable(cls, reason: str) -> "ProviderResult":
        return cls(outcome=ProviderOutcome.UNAVAILABLE, reason=reason)
