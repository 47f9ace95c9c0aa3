"""Tests for tracker payload normalization."""

import pytest

from conftest import playlist_segment, profile_payload
from rlranks.core.enums import Playlist
from rlranks.core.exceptions import NormalizationError
from rlranks.features.ranks.models import Rank, RankSet
from rlranks.features.ranks.normalizer import (
    normalize_tracker_payload,
    rebase_tier,
    translate_playlist,
)


class TestRebaseTier:
    """Test cases for tier rebasing."""

    @pytest.mark.parametrize("raw", [1, 2, 12, 22])
    def test_positive_tiers_decremented(self, raw):
        """Test 1-based tiers become 0-based."""
        assert rebase_tier(raw) == raw - 1

    def test_zero_means_unplaced(self):
        """Test raw tier 0 yields no tier."""
        assert rebase_tier(0) is None

    def test_negative_rejected(self):
        """Test negative raw tiers fail normalization."""
        with pytest.raises(NormalizationError):
            rebase_tier(-1)


class TestTranslatePlaylist:
    """Test cases for playlist translation."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Ranked Duel 1v1", Playlist.DUEL),
            ("Ranked Doubles 2v2", Playlist.DOUBLES),
            ("Ranked Standard 3v3", Playlist.STANDARD),
            ("Hoops", Playlist.HOOPS),
            ("Rumble", Playlist.RUMBLE),
            ("Dropshot", Playlist.DROPSHOT),
            ("Snowday", Playlist.SNOW_DAY),
            ("Tournament Matches", Playlist.TOURNAMENT),
        ],
    )
    def test_known_names(self, name, expected):
        """Test every tracker playlist name maps to a playlist."""
        assert translate_playlist(name) == expected

    def test_unknown_name(self):
        """Test unmapped names fail."""
        with pytest.raises(NormalizationError, match="unknown playlist"):
            translate_playlist("Ranked Chaos 4v4")


class TestNormalizeTrackerPayload:
    """Test cases for full payload normalization."""

    def test_single_duel_segment(self, identity, resolved_at):
        """Test the canonical end-to-end example."""
        payload = profile_payload([playlist_segment("Ranked Duel 1v1", 12, 850)])

        rank_set = normalize_tracker_payload(payload, identity, resolved_at)

        assert rank_set.identity == identity
        assert rank_set.resolved_at == resolved_at
        assert dict(rank_set.ranks) == {
            Playlist.DUEL: Rank(playlist=Playlist.DUEL, tier=11, mmr=850)
        }

    def test_unplaced_playlist_omitted(self, identity):
        """Test raw tier 0 playlists are absent, not tier 0."""
        payload = profile_payload(
            [
                playlist_segment("Ranked Duel 1v1", 0, 600),
                playlist_segment("Ranked Doubles 2v2", 1, 700),
            ]
        )

        rank_set = normalize_tracker_payload(payload, identity)

        assert Playlist.DUEL not in rank_set.ranks
        assert rank_set.ranks[Playlist.DOUBLES].tier == 0

    def test_non_playlist_segments_ignored(self, identity):
        """Test overview segments do not affect the rank set."""
        payload = profile_payload(
            [
                {"type": "overview", "metadata": {"name": "Lifetime"}, "stats": {}},
                playlist_segment("Hoops", 5, 910),
            ]
        )

        rank_set = normalize_tracker_payload(payload, identity)

        assert list(rank_set.ranks) == [Playlist.HOOPS]

    def test_unknown_playlist_fails_whole_response(self, identity):
        """Test one unknown name discards the whole payload."""
        payload = profile_payload(
            [
                playlist_segment("Ranked Duel 1v1", 12, 850),
                playlist_segment("Heatseeker", 3, 500),
            ]
        )

        with pytest.raises(NormalizationError):
            normalize_tracker_payload(payload, identity)

    def test_unknown_unplaced_playlist_skipped(self, identity):
        """Test unplaced segments are dropped before their name is translated."""
        payload = profile_payload(
            [
                playlist_segment("Un-Ranked", 0, 620),
                playlist_segment("Ranked Duel 1v1", 12, 850),
            ]
        )

        rank_set = normalize_tracker_payload(payload, identity)

        assert dict(rank_set.ranks) == {Playlist.DUEL: Rank(Playlist.DUEL, 11, 850)}

    def test_unplaced_duplicate_ignored(self, identity):
        """Test an unplaced copy of a placed playlist does not count as a duplicate."""
        payload = profile_payload(
            [
                playlist_segment("Rumble", 0, 500),
                playlist_segment("Rumble", 5, 800),
            ]
        )

        rank_set = normalize_tracker_payload(payload, identity)

        assert rank_set.ranks[Playlist.RUMBLE].tier == 4

    @pytest.mark.parametrize(
        "segment",
        [
            {"type": "playlist", "metadata": {"name": "Hoops"}},
            {"type": "playlist", "stats": {"tier": {"value": 3}, "rating": {"value": 1}}},
            {
                "type": "playlist",
                "metadata": {"name": "Hoops"},
                "stats": {"tier": {"value": None}, "rating": {"value": 1}},
            },
            {
                "type": "playlist",
                "metadata": {"name": "Hoops"},
                "stats": {"tier": {"value": 3}},
            },
        ],
    )
    def test_malformed_segment_fails(self, identity, segment):
        """Test missing or invalid fields fail normalization."""
        payload = profile_payload([playlist_segment("Ranked Duel 1v1", 12, 850), segment])

        with pytest.raises(NormalizationError):
            normalize_tracker_payload(payload, identity)

    @pytest.mark.parametrize(
        "payload",
        [None, [], {}, {"data": {}}, {"data": {"segments": "nope"}}, {"data": {"segments": [1]}}],
    )
    def test_malformed_document_fails(self, identity, payload):
        """Test documents without a segments list fail normalization."""
        with pytest.raises(NormalizationError):
            normalize_tracker_payload(payload, identity)

    def test_duplicate_playlist_fails(self, identity):
        """Test one rank per playlist."""
        payload = profile_payload(
            [
                playlist_segment("Rumble", 4, 700),
                playlist_segment("Rumble", 5, 800),
            ]
        )

        with pytest.raises(NormalizationError, match="duplicate"):
            normalize_tracker_payload(payload, identity)

    def test_store_round_trip_does_not_rebase(self, identity, resolved_at):
        """Test re-reading a normalized rank set keeps its tiers."""
        payload = profile_payload(
            [
                playlist_segment("Ranked Duel 1v1", 12, 850),
                playlist_segment("Ranked Standard 3v3", 1, 400),
            ]
        )
        rank_set = normalize_tracker_payload(payload, identity, resolved_at)

        reread = RankSet.from_record(identity, rank_set.to_record(), resolved_at)

        assert reread == rank_set
        assert reread.ranks[Playlist.STANDARD].tier == 0
