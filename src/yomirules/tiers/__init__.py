"""Season tiers: rank/points classification, highest-tier ratchet, card awards."""

from yomirules.tiers.classifier import assign_season_tiers, classify, rank_leaderboard, ratchet, tier_for_user

__all__ = ["classify", "rank_leaderboard", "tier_for_user", "assign_season_tiers", "ratchet"]
