"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"
_CWD_CONFIG = Path.cwd() / "config"


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    if _CWD_CONFIG.exists():
        return _CWD_CONFIG
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    config_dir = _find_config_dir(config_dir)
    default_path = config_dir / "default.toml"
    if not default_path.exists():
        return {}
    base = _load_toml(default_path)
    if profile:
        profile_path = config_dir / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        storage: dict[str, Any] | None = None,
        markets: dict[str, Any] | None = None,
        tiers: dict[str, Any] | None = None,
        rewards: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.storage = storage or {}
        self.markets = markets or {}
        self.tiers = tiers or {}
        self.rewards = rewards or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            storage=raw.get("storage"),
            markets=raw.get("markets"),
            tiers=raw.get("tiers"),
            rewards=raw.get("rewards"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def db_path(self) -> str:
        return self.storage.get("db_path", "data/yomi.duckdb")

    @property
    def card_batch_size(self) -> int:
        return int(self.storage.get("card_batch_size", 500))

    @property
    def default_liquidity(self) -> int:
        return int(self.markets.get("default_liquidity", 10000))

    @property
    def min_pool(self) -> int:
        return int(self.markets.get("min_pool", 10))

    @property
    def min_stake(self) -> int:
        return int(self.markets.get("min_stake", 10))

    @property
    def max_stake(self) -> int:
        return int(self.markets.get("max_stake", 100000))

    @property
    def fee_rate(self) -> float:
        return float(self.markets.get("fee_rate", 0.02))

    @property
    def min_probability(self) -> float:
        return float(self.markets.get("min_probability", 0.01))

    @property
    def max_probability(self) -> float:
        return float(self.markets.get("max_probability", 0.99))

    @property
    def min_odds(self) -> float:
        return float(self.markets.get("min_odds", 1.01))

    @property
    def max_odds(self) -> float:
        return float(self.markets.get("max_odds", 100.0))

    @property
    def holographic_max_rank(self) -> int:
        return int(self.tiers.get("holographic_max_rank", 3))

    @property
    def diamond_max_rank(self) -> int:
        return int(self.tiers.get("diamond_max_rank", 10))

    @property
    def gold_min_points(self) -> float:
        return float(self.tiers.get("gold_min_points", 25000))

    @property
    def bronze_min_points(self) -> float:
        return float(self.tiers.get("bronze_min_points", 10000))

    @property
    def beta_season_id(self) -> str:
        return str(self.tiers.get("beta_season_id", "beta"))

    @property
    def base_schedule(self) -> list[int] | None:
        schedule = self.rewards.get("base_schedule")
        return [int(v) for v in schedule] if schedule else None

    @property
    def welcome_bonus(self) -> int:
        return int(self.rewards.get("welcome_bonus", 1000))

    @property
    def jackpot_entries(self) -> list[dict[str, Any]]:
        return list(self.rewards.get("jackpot") or [])

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
