"""Tests for the rank classifier."""

from itertools import combinations

import pytest

from rlranks.core.enums import Playlist
from rlranks.core.exceptions import NoRanksError
from rlranks.features.ranks.classifier import (
    best,
    filter_ranks,
    longest_playlist_label,
    unranked,
)
from rlranks.features.ranks.models import Rank, RankSet


def make_rank_set(identity, *ranks: Rank) -> RankSet:
    return RankSet(identity=identity, ranks={rank.playlist: rank for rank in ranks})


@pytest.fixture
def mixed_rank_set(identity) -> RankSet:
    return make_rank_set(
        identity,
        Rank(Playlist.DUEL, 11, 850),
        Rank(Playlist.DOUBLES, 14, 1100),
        Rank(Playlist.HOOPS, 14, 1200),
        Rank(Playlist.SNOW_DAY, 3, 400),
    )


class TestUnranked:
    """Test cases for unranked."""

    def test_empty_rank_set(self, identity):
        assert unranked(RankSet.empty(identity), [Playlist.DUEL])
        assert unranked(RankSet.empty(identity), [])

    def test_whitelist_intersection(self, mixed_rank_set):
        assert not unranked(mixed_rank_set, [Playlist.DUEL])
        assert unranked(mixed_rank_set, [Playlist.STANDARD, Playlist.RUMBLE])

    def test_empty_whitelist_means_all(self, mixed_rank_set):
        assert not unranked(mixed_rank_set, [])
        assert not unranked(mixed_rank_set, None)


class TestBest:
    """Test cases for best."""

    def test_highest_tier_wins(self, mixed_rank_set):
        result = best(mixed_rank_set, [Playlist.DUEL, Playlist.SNOW_DAY])
        assert result.playlist == Playlist.DUEL

    def test_mmr_breaks_tier_tie(self, mixed_rank_set):
        result = best(mixed_rank_set, [])
        assert result == Rank(Playlist.HOOPS, 14, 1200)

    def test_priority_breaks_full_tie(self, identity):
        """Test duel beats doubles at equal tier and mmr."""
        rank_set = make_rank_set(
            identity,
            Rank(Playlist.DUEL, 5, 1000),
            Rank(Playlist.DOUBLES, 5, 1000),
        )
        result = best(rank_set, [Playlist.DUEL, Playlist.DOUBLES])
        assert result.playlist == Playlist.DUEL

    def test_priority_order_independent_of_insertion(self, identity):
        rank_set = make_rank_set(
            identity,
            Rank(Playlist.TOURNAMENT, 7, 900),
            Rank(Playlist.RUMBLE, 7, 900),
            Rank(Playlist.STANDARD, 7, 900),
        )
        assert best(rank_set).playlist == Playlist.STANDARD

    def test_no_ranks_raises(self, mixed_rank_set):
        with pytest.raises(NoRanksError):
            best(mixed_rank_set, [Playlist.TOURNAMENT])

    def test_unranked_iff_best_raises(self, mixed_rank_set, identity):
        """Test unranked and best agree for every whitelist."""
        rank_sets = [mixed_rank_set, RankSet.empty(identity)]
        playlists = list(Playlist)
        whitelists = [list(c) for size in range(0, 3) for c in combinations(playlists, size)]

        for rank_set in rank_sets:
            for whitelist in whitelists:
                try:
                    best(rank_set, whitelist)
                    raised = False
                except NoRanksError:
                    raised = True
                assert raised == unranked(rank_set, whitelist), whitelist


class TestFilterRanks:
    """Test cases for filter_ranks."""

    def test_priority_order(self, mixed_rank_set):
        playlists = [rank.playlist for rank in filter_ranks(mixed_rank_set)]
        assert playlists == [
            Playlist.DUEL,
            Playlist.DOUBLES,
            Playlist.HOOPS,
            Playlist.SNOW_DAY,
        ]

    def test_whitelist(self, mixed_rank_set):
        result = filter_ranks(mixed_rank_set, {Playlist.SNOW_DAY, Playlist.STANDARD})
        assert result == [Rank(Playlist.SNOW_DAY, 3, 400)]


def test_longest_playlist_label(mixed_rank_set, identity):
    assert longest_playlist_label(mixed_rank_set) == len("Snow Day")
    assert longest_playlist_label(RankSet.empty(identity)) == 0
