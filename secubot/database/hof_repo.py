"""Hall of Fame repository — per-guild leaderboard tables and their entries."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiosqlite

from .models import utc_now

logger = logging.getLogger(__name__)


@dataclass
class HofTable:
    id: int
    guild_id: int
    title: str
    description: str | None
    creation_date: str


@dataclass
class HofEntry:
    id: int
    hof_id: int
    user_id: int
    description: str | None
    creation_date: str


class HallOfFameRepository:
    """CRUD operations for Hall of Fame tables and entries."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    async def create_table(
        self, guild_id: int, title: str, description: str | None = None
    ) -> HofTable:
        """Create a table. Raises ``aiosqlite.IntegrityError`` if the title is taken."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """INSERT INTO hall_of_fame_tables (guild_id, title, description, creation_date)
                   VALUES (?, ?, ?, ?)""",
                (guild_id, title, description, utc_now()),
            )
            await db.commit()
            table_id = cursor.lastrowid
        assert table_id is not None
        logger.info("Hall of Fame table created: guild=%d, title=%s", guild_id, title)
        table = await self.get_table(guild_id, title)
        assert table is not None
        return table

    async def get_table(self, guild_id: int, title: str) -> HofTable | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM hall_of_fame_tables WHERE guild_id = ? AND title = ?",
                (guild_id, title),
            )
            row = await cursor.fetchone()
            return HofTable(**dict(row)) if row else None

    async def list_titles(self, guild_id: int, prefix: str = "") -> list[str]:
        """Titles of the guild's tables starting with ``prefix``, sorted."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT title FROM hall_of_fame_tables WHERE guild_id = ? ORDER BY title",
                (guild_id,),
            )
            rows = await cursor.fetchall()
        return [row[0] for row in rows if row[0].startswith(prefix)]

    async def add_entry(self, table_id: int, user_id: int, reason: str | None) -> HofEntry:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """INSERT INTO hall_of_fame_entries (hof_id, user_id, description, creation_date)
                   VALUES (?, ?, ?, ?)""",
                (table_id, user_id, reason, utc_now()),
            )
            await db.commit()
            cursor = await db.execute(
                "SELECT * FROM hall_of_fame_entries WHERE id = ?", (cursor.lastrowid,)
            )
            row = await cursor.fetchone()
        assert row is not None
        return HofEntry(**dict(row))

    async def leaderboard(self, table_id: int, limit: int = 25) -> list[tuple[int, int]]:
        """Return ``(user_id, entry_count)`` pairs, highest count first."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """SELECT user_id, COUNT(*) AS total FROM hall_of_fame_entries
                   WHERE hof_id = ?
                   GROUP BY user_id
                   ORDER BY total DESC, MIN(id)
                   LIMIT ?""",
                (table_id, limit),
            )
            rows = await cursor.fetchall()
            return [(row[0], row[1]) for row in rows]

    async def user_entries(self, table_id: int, user_id: int) -> list[HofEntry]:
        """All entries for one user in a table, newest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """SELECT * FROM hall_of_fame_entries
                   WHERE hof_id = ? AND user_id = ?
                   ORDER BY id DESC""",
                (table_id, user_id),
            )
            rows = await cursor.fetchall()
            return [HofEntry(**dict(row)) for row in rows]
