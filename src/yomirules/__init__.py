"""Yomi economic rules: pool allocation, payouts, season tiers, daily rewards."""

__version__ = "0.1.0"
