"""CLI smoke tests."""

import json

from typer.testing import CliRunner

from yomirules.cli.app import app

runner = CliRunner()


def _invoke(tmp_path, *args):
    config_dir = tmp_path / "config"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "default.toml").write_text('[logging]\nlevel = "WARNING"\n')
    return runner.invoke(app, ["--config-dir", str(config_dir), "--db", str(tmp_path / "cli.duckdb"), *args])


def test_pricing_commands(tmp_path):
    result = _invoke(tmp_path, "pricing", "allocate", "-p", "50", "-l", "1000")
    assert result.exit_code == 0
    assert "pool_yes=500" in result.output and "pool_no=500" in result.output

    result = _invoke(tmp_path, "pricing", "payout", "-a", "100", "-p", "25")
    assert result.exit_code == 0
    assert "400" in result.output

    result = _invoke(tmp_path, "pricing", "payout", "-a", "100", "-p", "0")
    assert result.exit_code == 1


def test_pricing_quote_rejects_small_stake(tmp_path):
    result = _invoke(tmp_path, "pricing", "quote", "-a", "1", "-p", "50")
    assert result.exit_code == 1


def test_season_award_flow(tmp_path):
    board = tmp_path / "board.json"
    board.write_text(json.dumps([{"user_id": f"u{i}", "points": 1000 * (20 - i)} for i in range(12)]))
    assert _invoke(tmp_path, "seasons", "load-leaderboard", str(board), "-s", "s1").exit_code == 0

    result = _invoke(tmp_path, "seasons", "award", "-s", "s1", "--actor", "admin:test")
    assert result.exit_code == 0
    assert "Created: 12" in result.output

    result = _invoke(tmp_path, "seasons", "award", "-s", "s1", "--actor", "admin:test")
    assert "Created: 0" in result.output

    result = _invoke(tmp_path, "seasons", "cards", "-u", "u0")
    assert "holographic" in result.output


def test_rewards_claim_twice(tmp_path):
    first = _invoke(tmp_path, "rewards", "claim", "-u", "u1")
    assert first.exit_code == 0
    assert "Day 1: +100" in first.output
    second = _invoke(tmp_path, "rewards", "claim", "-u", "u1")
    assert second.exit_code == 1

    result = _invoke(tmp_path, "rewards", "welcome", "-u", "u1")
    assert result.exit_code == 0
    assert _invoke(tmp_path, "rewards", "welcome", "-u", "u1").exit_code == 1


def test_pricing_quote_against_multi_outcome(tmp_path):
    result = _invoke(tmp_path, "pricing", "quote", "-a", "100", "-p", "20", "--no", "--multi")
    assert result.exit_code == 0
    assert "Odds: 1.25  Potential payout: 123" in result.output

    result = _invoke(tmp_path, "pricing", "quote", "-a", "100", "-p", "20", "--no")
    assert result.exit_code == 1


def test_season_recompute_and_beta_grant(tmp_path):
    board = tmp_path / "board.json"
    board.write_text(json.dumps([{"user_id": "u1", "points": 30000}, {"user_id": "u2", "points": 500}]))
    assert _invoke(tmp_path, "seasons", "load-leaderboard", str(board), "-s", "s1").exit_code == 0

    result = _invoke(tmp_path, "seasons", "recompute", "-s", "s1", "-u", "u1", "--actor", "admin:test")
    assert result.exit_code == 0
    assert "Tier: holographic  Highest: holographic" in result.output
    assert "New tier unlocked!" in result.output

    result = _invoke(tmp_path, "seasons", "grant-beta", "u1", "u3", "--actor", "admin:test")
    assert result.exit_code == 0
    assert "Created: 2  Skipped: 0" in result.output
    result = _invoke(tmp_path, "seasons", "grant-beta", "u1", "--actor", "admin:test")
    assert "Created: 0  Skipped: 1" in result.output

    result = _invoke(tmp_path, "seasons", "cards", "-u", "u1")
    assert "beta" in result.output
    assert "Total: 2 cards" in result.output


def test_rewards_status(tmp_path):
    result = _invoke(tmp_path, "rewards", "status", "-u", "u1")
    assert result.exit_code == 0
    assert "Can claim: True" in result.output
    assert "Streak day: 1/7  Today's reward: 100" in result.output
    assert "Welcome bonus available: True" in result.output

    assert _invoke(tmp_path, "rewards", "claim", "-u", "u1").exit_code == 0
    result = _invoke(tmp_path, "rewards", "status", "-u", "u1")
    assert "Can claim: False" in result.output
    assert "Streak day: 2/7  Today's reward: 150" in result.output


def test_seed_option_is_accepted(tmp_path):
    result = _invoke(tmp_path, "--seed", "7", "rewards", "claim", "-u", "u1")
    assert result.exit_code == 0
    assert "Day 1: +100" in result.output
