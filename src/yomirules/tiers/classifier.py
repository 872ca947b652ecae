"""Season tier rules: rank/points mapping and the highest-tier ratchet."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from yomirules.errors import PreconditionError
from yomirules.models.rules import TierThresholds
from yomirules.models.season import LeaderboardEntry, Tier, TierProgress, higher_tier, tier_ordinal


def classify(rank: int | None, points: float, thresholds: TierThresholds | None = None) -> Tier:
    """Map a 1-based leaderboard rank and season points to a tier. First match wins.

    ``rank=None`` means the user is not on the leaderboard.
    """
    t = thresholds or TierThresholds()
    if rank is None:
        return Tier.IRON
    if rank <= t.holographic_max_rank:
        return Tier.HOLOGRAPHIC
    if rank <= t.diamond_max_rank:
        return Tier.DIAMOND
    if points >= t.gold_min_points:
        return Tier.GOLD
    if points >= t.bronze_min_points:
        return Tier.BRONZE
    return Tier.IRON


def rank_leaderboard(entries: Iterable[LeaderboardEntry]) -> list[tuple[int, LeaderboardEntry]]:
    """Order by points descending (stable on ties) and number from 1."""
    ordered = sorted(entries, key=lambda e: e.points, reverse=True)
    return [(i + 1, entry) for i, entry in enumerate(ordered)]


def tier_for_user(
    leaderboard: Sequence[LeaderboardEntry] | None,
    user_id: str,
    thresholds: TierThresholds | None = None,
) -> Tier:
    """Tier for one user of a season leaderboard. Empty board or absent user -> iron."""
    if not leaderboard:
        return Tier.IRON
    for rank, entry in rank_leaderboard(leaderboard):
        if entry.user_id == user_id:
            return classify(rank, entry.points, thresholds)
    return Tier.IRON


def assign_season_tiers(
    leaderboard: Sequence[LeaderboardEntry] | None,
    thresholds: TierThresholds | None = None,
) -> list[tuple[str, Tier]]:
    """(user_id, tier) for every participant, without consulting previous cards."""
    if not leaderboard:
        return []
    return [(entry.user_id, classify(rank, entry.points, thresholds)) for rank, entry in rank_leaderboard(leaderboard)]


def ratchet(previous_highest: Tier | None, new_tier: Tier) -> TierProgress:
    """Apply the highest-tier rule to a freshly computed tier.

    Diamond and holographic replace the highest tier outright (they follow the
    current rank and can go down). A previous diamond/holographic value is a
    standing, not a peak, so it is no floor either. Below diamond the highest
    tier only moves up. Reaching iron never counts as an unlock.

    Only the highest tier is stored, so a below-diamond peak is lost once the
    user passes through the top band: gold, then diamond, then bronze ends
    at bronze.
    """
    new_tier = Tier(new_tier)
    if not new_tier.ranked:
        raise PreconditionError("beta cards are granted, not computed")
    if previous_highest is not None:
        previous_highest = Tier(previous_highest)
        if not previous_highest.ranked:
            raise PreconditionError("beta cards do not take part in the ratchet")

    if (
        previous_highest is None
        or new_tier.tracks_current_standing
        or previous_highest.tracks_current_standing
    ):
        highest = new_tier
    else:
        highest = higher_tier(previous_highest, new_tier)

    if previous_highest is None:
        is_new = True
    else:
        is_new = tier_ordinal(highest) > tier_ordinal(previous_highest) and new_tier is not Tier.IRON
    return TierProgress(
        tier=new_tier,
        highest_tier=highest,
        is_new_tier=is_new,
        previous_highest=previous_highest,
    )
