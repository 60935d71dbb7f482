"""Shared pytest fixtures for secubot tests.

These fixtures are automatically available to all test files in this directory.
"""

from __future__ import annotations

import pytest

from secubot.database.models import init_db


@pytest.fixture
async def db_path(tmp_path) -> str:
    """Path of a freshly initialized SQLite database."""
    path = str(tmp_path / "secubot.db")
    await init_db(path)
    return path
