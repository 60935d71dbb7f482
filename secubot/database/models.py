"""SQLite database schema and initialization."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

import aiosqlite

logger = logging.getLogger(__name__)

# Stored dates are UTC, second precision.
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

SCHEMA = """
CREATE TABLE IF NOT EXISTS todos (
    channel_id      INTEGER NOT NULL,
    id              INTEGER NOT NULL,
    todo            TEXT    NOT NULL,
    creation_date   TEXT    NOT NULL,
    completion_date TEXT,
    assignee        INTEGER,
    priority        INTEGER NOT NULL DEFAULT 0,
    PRIMARY KEY (channel_id, id)
);

CREATE INDEX IF NOT EXISTS idx_todos_open ON todos(channel_id, completion_date);

CREATE TABLE IF NOT EXISTS hall_of_fame_tables (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    guild_id      INTEGER NOT NULL,
    title         TEXT    NOT NULL,
    description   TEXT,
    creation_date TEXT    NOT NULL,
    UNIQUE (guild_id, title)
);

CREATE TABLE IF NOT EXISTS hall_of_fame_entries (
    id            INTEGER PRIMARY KEY AUTOINCREMENT,
    hof_id        INTEGER NOT NULL REFERENCES hall_of_fame_tables(id) ON DELETE CASCADE,
    user_id       INTEGER NOT NULL,
    description   TEXT,
    creation_date TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_hof_entries_table ON hall_of_fame_entries(hof_id, user_id);
"""


def utc_now() -> str:
    """Current time in the stored text format."""
    return datetime.now(timezone.utc).strftime(TIME_FORMAT)


async def init_db(db_path: str) -> None:
    """Create the database file and apply the schema. Safe to call repeatedly."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    async with aiosqlite.connect(db_path) as db:
        await db.executescript(SCHEMA)
        await db.commit()
    logger.info("Database initialized at %s", db_path)
