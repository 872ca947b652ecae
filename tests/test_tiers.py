"""Tier mapping, ordering and the highest-tier ratchet."""

import pytest

from yomirules.errors import PreconditionError
from yomirules.models import RANKED_TIERS, LeaderboardEntry, Tier, TierThresholds, higher_tier, tier_ordinal
from yomirules.tiers import assign_season_tiers, classify, rank_leaderboard, ratchet, tier_for_user


def _board(points_by_user):
    return [LeaderboardEntry(season_id="s1", user_id=u, points=p) for u, p in points_by_user]


@pytest.mark.parametrize(
    "rank,points,expected",
    [
        (1, 0, Tier.HOLOGRAPHIC),
        (3, -500, Tier.HOLOGRAPHIC),
        (4, 0, Tier.DIAMOND),
        (7, 0, Tier.DIAMOND),
        (10, 0, Tier.DIAMOND),
        (11, 25000, Tier.GOLD),
        (50, 30000, Tier.GOLD),
        (50, 12000, Tier.BRONZE),
        (50, 10000, Tier.BRONZE),
        (50, 9999.99, Tier.IRON),
        (50, 500, Tier.IRON),
        (None, 99999, Tier.IRON),
    ],
)
def test_classify(rank, points, expected):
    assert classify(rank, points) is expected


def test_classify_custom_thresholds():
    t = TierThresholds(holographic_max_rank=1, diamond_max_rank=2, gold_min_points=100, bronze_min_points=50)
    assert classify(2, 0, t) is Tier.DIAMOND
    assert classify(3, 100, t) is Tier.GOLD
    assert classify(3, 60, t) is Tier.BRONZE


def test_tier_for_user_empty_or_absent():
    assert tier_for_user([], "u1") is Tier.IRON
    assert tier_for_user(None, "u1") is Tier.IRON
    assert tier_for_user(_board([("u2", 50000)]), "u1") is Tier.IRON


def test_tier_for_user_ranks_by_points():
    board = _board([(f"u{i}", 1000 * i) for i in range(1, 13)])  # ascending input
    assert tier_for_user(board, "u12") is Tier.HOLOGRAPHIC
    assert tier_for_user(board, "u9") is Tier.DIAMOND
    assert tier_for_user(board, "u2") is Tier.IRON


def test_rank_leaderboard_numbers_from_one():
    ranked = rank_leaderboard(_board([("a", 5), ("b", 20), ("c", 10)]))
    assert [(r, e.user_id) for r, e in ranked] == [(1, "b"), (2, "c"), (3, "a")]


def test_assign_season_tiers_batch():
    points = [100000 - i * 1000 for i in range(10)] + [26000, 11000, 200]
    board = _board([(f"u{i}", p) for i, p in enumerate(points)])
    tiers = dict(assign_season_tiers(board))
    assert [tiers[f"u{i}"] for i in range(3)] == [Tier.HOLOGRAPHIC] * 3
    assert [tiers[f"u{i}"] for i in range(3, 10)] == [Tier.DIAMOND] * 7
    assert tiers["u10"] is Tier.GOLD
    assert tiers["u11"] is Tier.BRONZE
    assert tiers["u12"] is Tier.IRON
    assert assign_season_tiers([]) == []


def test_ordering_excludes_beta():
    assert Tier.BETA not in RANKED_TIERS
    assert [tier_ordinal(t) for t in RANKED_TIERS] == [0, 1, 2, 3, 4]
    assert higher_tier(Tier.BRONZE, Tier.GOLD) is Tier.GOLD
    assert higher_tier(Tier.GOLD, Tier.GOLD) is Tier.GOLD
    with pytest.raises(PreconditionError):
        tier_ordinal(Tier.BETA)


def test_ratchet_keeps_peak_below_diamond():
    progress = ratchet(Tier.BRONZE, Tier.IRON)
    assert progress.tier is Tier.IRON
    assert progress.highest_tier is Tier.BRONZE
    assert progress.is_new_tier is False


def test_ratchet_band_switch_to_diamond():
    progress = ratchet(Tier.GOLD, Tier.DIAMOND)
    assert progress.highest_tier is Tier.DIAMOND
    assert progress.is_new_tier is True


def test_ratchet_regresses_out_of_top_band():
    progress = ratchet(Tier.DIAMOND, Tier.GOLD)
    assert progress.highest_tier is Tier.GOLD
    assert progress.is_new_tier is False
    assert ratchet(Tier.HOLOGRAPHIC, Tier.DIAMOND).highest_tier is Tier.DIAMOND


def test_ratchet_peak_lost_after_top_band():
    highest = None
    for tier in (Tier.GOLD, Tier.DIAMOND, Tier.BRONZE):
        highest = ratchet(highest, tier).highest_tier
    assert highest is Tier.BRONZE


def test_ratchet_ties_keep_previous_peak():
    progress = ratchet(Tier.GOLD, Tier.GOLD)
    assert progress.highest_tier is Tier.GOLD
    assert progress.highest_tier is higher_tier(Tier.GOLD, Tier.GOLD)


def test_ratchet_first_computation():
    assert ratchet(None, Tier.BRONZE).is_new_tier is True
    assert ratchet(None, Tier.BRONZE).highest_tier is Tier.BRONZE
    assert ratchet(None, Tier.IRON).is_new_tier is True


def test_new_tier_flag_only_on_strict_increase():
    assert ratchet(Tier.IRON, Tier.BRONZE).is_new_tier is True
    assert ratchet(Tier.BRONZE, Tier.BRONZE).is_new_tier is False
    assert ratchet(Tier.GOLD, Tier.BRONZE).is_new_tier is False
    assert ratchet(Tier.DIAMOND, Tier.HOLOGRAPHIC).is_new_tier is True
    assert ratchet(Tier.IRON, Tier.IRON).is_new_tier is False


def test_ratchet_rejects_beta():
    with pytest.raises(PreconditionError):
        ratchet(None, Tier.BETA)
    with pytest.raises(PreconditionError):
        ratchet(Tier.BETA, Tier.GOLD)
