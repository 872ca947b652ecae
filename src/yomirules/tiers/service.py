"""Season card operations against the store.

All writes go through a ``SeasonCardWriter`` supplied by the caller.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from yomirules.models.rules import TierThresholds
from yomirules.models.season import AwardReport, Tier, TierProgress, UserSeasonCard
from yomirules.storage.cards import SeasonCardWriter
from yomirules.storage.leaderboards import load_leaderboard
from yomirules.tiers.classifier import assign_season_tiers, ratchet, tier_for_user

log = structlog.get_logger(__name__)


def recompute_card(
    writer: SeasonCardWriter,
    season_id: str,
    user_id: str,
    thresholds: TierThresholds | None = None,
    now_ms: int | None = None,
) -> TierProgress:
    """Recompute a user's tier from the season leaderboard and upsert the ratcheted card.

    A beta card is never overwritten; its current value is returned unchanged.
    """
    existing = writer.get_card(user_id, season_id)
    if existing is not None and existing.highest_tier_achieved is Tier.BETA:
        log.debug("season_card_beta_kept", user_id=user_id, season_id=season_id)
        return TierProgress(tier=Tier.BETA, highest_tier=Tier.BETA, is_new_tier=False, previous_highest=Tier.BETA)

    leaderboard = load_leaderboard(writer.conn, season_id)
    new_tier = tier_for_user(leaderboard, user_id, thresholds)
    progress = ratchet(existing.highest_tier_achieved if existing else None, new_tier)
    writer.upsert_card(user_id, season_id, progress.tier, progress.highest_tier, now_ms)
    if progress.is_new_tier:
        log.info("season_tier_unlocked", user_id=user_id, season_id=season_id, tier=progress.highest_tier.value)
    return progress


def award_season(
    writer: SeasonCardWriter,
    season_id: str,
    thresholds: TierThresholds | None = None,
    batch_size: int = 500,
) -> AwardReport:
    """Retroactive one-shot distribution: a card for every leaderboard participant.

    Tiers come straight from rank/points (no ratchet). Users who already hold
    a card for the season are skipped, so re-running is a no-op.
    """
    leaderboard = load_leaderboard(writer.conn, season_id)
    assigned = assign_season_tiers(leaderboard, thresholds)
    cards = [
        UserSeasonCard(user_id=user_id, season_id=season_id, tier=tier, highest_tier_achieved=tier)
        for user_id, tier in assigned
    ]
    created = writer.insert_missing(season_id, cards, batch_size=batch_size)
    created_set = set(created)
    report = AwardReport(
        season_id=season_id,
        created=created,
        skipped=[user_id for user_id, _ in assigned if user_id not in created_set],
    )
    log.info(
        "season_cards_awarded",
        season_id=season_id,
        participants=len(assigned),
        created=report.created_count,
        skipped=report.skipped_count,
    )
    return report


def grant_beta_cards(
    writer: SeasonCardWriter,
    user_ids: Iterable[str],
    beta_season_id: str = "beta",
    batch_size: int = 500,
) -> AwardReport:
    """One-time beta card grant. Users who already have one are skipped."""
    user_ids = list(dict.fromkeys(user_ids))
    cards = [
        UserSeasonCard(user_id=u, season_id=beta_season_id, tier=Tier.BETA, highest_tier_achieved=Tier.BETA)
        for u in user_ids
    ]
    created = writer.insert_missing(beta_season_id, cards, batch_size=batch_size)
    created_set = set(created)
    report = AwardReport(
        season_id=beta_season_id,
        created=created,
        skipped=[u for u in user_ids if u not in created_set],
    )
    log.info("beta_cards_granted", created=report.created_count, skipped=report.skipped_count)
    return report
