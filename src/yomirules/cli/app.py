"""Root CLI app - entry point and command registration."""

from pathlib import Path

import typer

from yomirules.config import get_settings
from yomirules.config.settings import configure_logging

app = typer.Typer(
    name="yomi",
    help="Yomi rules - pool allocation, payouts, season tiers and daily rewards.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Path | None = typer.Option(
        None, "--config-dir", "-C", help="Config directory (default: ./config or package config)"
    ),
    profile: str | None = typer.Option(
        None, "--profile", "-p", help="Config profile (e.g. dev) to overlay on default.toml"
    ),
    db_path: str | None = typer.Option(None, "--db", help="Database path (overrides storage.db_path)"),
    seed: int | None = typer.Option(None, "--seed", help="Seed for the jackpot draw"),
) -> None:
    """Configure logging and store options in context."""
    settings = get_settings(profile, config_dir)
    configure_logging(settings)
    ctx.obj = {
        "settings": settings,
        "config_dir": config_dir,
        "profile": profile,
        "db_path": db_path or settings.db_path,
        "seed": seed,
    }


# Subcommands registered from other modules
from yomirules.cli import pricing, rewards, seasons  # noqa: E402

app.add_typer(pricing.app, name="pricing")
app.add_typer(seasons.app, name="seasons")
app.add_typer(rewards.app, name="rewards")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
