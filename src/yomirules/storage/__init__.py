"""DuckDB persistence boundary: leaderboards, season cards, reward state."""
