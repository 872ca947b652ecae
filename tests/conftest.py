"""Shared fixtures: temporary DuckDB store."""

import tempfile
from pathlib import Path

import pytest

from yomirules.storage.db import get_connection, init_schema


@pytest.fixture
def temp_db():
    tmp = tempfile.mkdtemp()
    path = Path(tmp) / "test.duckdb"
    conn = get_connection(path)
    init_schema(conn)
    yield conn
    conn.close()
    path.unlink(missing_ok=True)
    Path(tmp).rmdir()
