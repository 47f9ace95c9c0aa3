"""Tests for rank domain models."""

import dataclasses

import pytest

from rlranks.core.enums import Platform, Playlist
from rlranks.features.ranks.models import (
    PlayerIdentity,
    ProviderOutcome,
    ProviderResult,
    Rank,
    RankSet,
)


class TestPlayerIdentity:
    """Test cases for PlayerIdentity."""

    def test_immutable(self, identity):
        with pytest.raises(dataclasses.FrozenInstanceError):
            identity.account_id = "someone-else"

    def test_platform_coerced_from_string(self):
        identity = PlayerIdentity(account_id="abc", platform="ps4")
        assert identity.platform == Platform.PLAYSTATION

    def test_hashable_key(self):
        a = PlayerIdentity("abc", Platform.EPIC)
        b = PlayerIdentity("abc", Platform.EPIC)
        assert {a: 1}[b] == 1
        assert str(a) == "epic:abc"

    @pytest.mark.parametrize("account_id", ["", "   "])
    def test_empty_account_id_rejected(self, account_id):
        with pytest.raises(ValueError):
            PlayerIdentity(account_id=account_id, platform=Platform.STEAM)


class TestRankSet:
    """Test cases for Rank and RankSet."""

    def test_negative_tier_rejected(self):
        with pytest.raises(ValueError):
            Rank(Playlist.DUEL, -1, 100)

    def test_key_must_match_playlist(self, identity):
        with pytest.raises(ValueError):
            RankSet(identity=identity, ranks={Playlist.DUEL: Rank(Playlist.DOUBLES, 3, 10)})

    def test_ranks_read_only(self, identity):
        rank_set = RankSet(identity=identity, ranks={Playlist.DUEL: Rank(Playlist.DUEL, 3, 10)})
        with pytest.raises(TypeError):
            rank_set.ranks[Playlist.HOOPS] = Rank(Playlist.HOOPS, 1, 1)

    def test_source_dict_changes_do_not_leak(self, identity):
        source = {Playlist.DUEL: Rank(Playlist.DUEL, 3, 10)}
        rank_set = RankSet(identity=identity, ranks=source)
        source[Playlist.HOOPS] = Rank(Playlist.HOOPS, 1, 1)
        assert list(rank_set.ranks) == [Playlist.DUEL]

    def test_record_round_trip(self, identity, resolved_at):
        rank_set = RankSet(
            identity=identity,
            ranks={
                Playlist.TOURNAMENT: Rank(Playlist.TOURNAMENT, 9, 1300),
                Playlist.DUEL: Rank(Playlist.DUEL, 0, 150),
            },
            resolved_at=resolved_at,
        )
        record = rank_set.to_record()

        assert record == {
            "duel": {"tier": 0, "mmr": 150},
            "tournament": {"tier": 9, "mmr": 1300},
        }
        assert RankSet.from_record(identity, record, resolved_at) == rank_set

    @pytest.mark.parametrize(
        "record",
        [{"duel": None}, {"duel": {"mmr": 1}}, {"duel": {"tier": [], "mmr": 1}}, ["duel"], 3],
    )
    def test_malformed_record_raises_value_error(self, identity, resolved_at, record):
        with pytest.raises(ValueError):
            RankSet.from_record(identity, record, resolved_at)


class TestProviderResult:
    """Test cases for ProviderResult constructors."""

    def test_not_found_is_success_with_empty_ranks(self, identity):
        result = ProviderResult.not_found(identity)
        assert result.outcome == ProviderOutcome.NOT_FOUND
        assert result.is_success
        assert result.rank_set.is_empty
        assert result.rank_set.identity == identity

    def test_unavailable(self):
        result = ProviderResult.unavailable("boom")
        assert not result.is_success
        assert result.rank_set is None
        assert result.reason == "boom"
