"""TodoRepository — CRUD for the todos table.

TODO ids are numbered per channel, starting at 1.  A new id is always
``max(id) + 1`` for the channel, computed inside the INSERT so concurrent
adds cannot collide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import aiosqlite

from .models import utc_now

logger = logging.getLogger(__name__)

_NEXT_ID = "(SELECT COALESCE(MAX(id), 0) + 1 FROM todos WHERE channel_id = ?)"


@dataclass
class TodoRecord:
    """A single TODO entry."""

    channel_id: int
    id: int
    todo: str
    creation_date: str
    completion_date: str | None
    assignee: int | None
    priority: int

    @property
    def completed(self) -> bool:
        return self.completion_date is not None


class TodoRepository:
    """Async CRUD for per-channel TODO entries."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _fetch_rowid(db: aiosqlite.Connection, rowid: int) -> TodoRecord | None:
        db.row_factory = aiosqlite.Row
        cursor = await db.execute("SELECT * FROM todos WHERE rowid = ?", (rowid,))
        row = await cursor.fetchone()
        return TodoRecord(**dict(row)) if row else None

    @staticmethod
    async def _find_rowid(db: aiosqlite.Connection, channel_id: int, todo_id: int) -> int | None:
        cursor = await db.execute(
            "SELECT rowid FROM todos WHERE channel_id = ? AND id = ?",
            (channel_id, todo_id),
        )
        row = await cursor.fetchone()
        return row[0] if row else None

    async def _update(
        self, channel_id: int, todo_id: int, assignments: str, params: tuple
    ) -> TodoRecord | None:
        """Apply ``SET assignments`` to one TODO and return it, or None if missing."""
        async with aiosqlite.connect(self.db_path) as db:
            rowid = await self._find_rowid(db, channel_id, todo_id)
            if rowid is None:
                return None
            await db.execute(
                f"UPDATE todos SET {assignments} WHERE rowid = ?",  # noqa: S608
                (*params, rowid),
            )
            await db.commit()
            return await self._fetch_rowid(db, rowid)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get(self, channel_id: int, todo_id: int) -> TodoRecord | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM todos WHERE channel_id = ? AND id = ?",
                (channel_id, todo_id),
            )
            row = await cursor.fetchone()
            return TodoRecord(**dict(row)) if row else None

    async def list_channel(
        self,
        channel_id: int,
        *,
        include_completed: bool = False,
        assignee: int | None = None,
    ) -> list[TodoRecord]:
        """List a channel's TODOs ordered by id.

        Args:
            include_completed: Also return completed entries.
            assignee: Only return entries assigned to this user.
        """
        sql = "SELECT * FROM todos WHERE channel_id = ?"
        params: list[object] = [channel_id]
        if not include_completed:
            sql += " AND completion_date IS NULL"
        if assignee is not None:
            sql += " AND assignee = ?"
            params.append(assignee)
        sql += " ORDER BY id"
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(sql, tuple(params))
            rows = await cursor.fetchall()
            return [TodoRecord(**dict(row)) for row in rows]

    async def uncompleted_counts(self) -> dict[int, int]:
        """Return ``{channel_id: number of uncompleted TODOs}`` for non-empty channels."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """SELECT channel_id, COUNT(*) FROM todos
                   WHERE completion_date IS NULL
                   GROUP BY channel_id
                   ORDER BY channel_id"""
            )
            rows = await cursor.fetchall()
            return {row[0]: row[1] for row in rows}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(self, channel_id: int, text: str, assignee: int | None = None) -> TodoRecord:
        """Create a TODO with the channel's next id."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"""INSERT INTO todos (channel_id, id, todo, creation_date, assignee)
                    VALUES (?, {_NEXT_ID}, ?, ?, ?)""",  # noqa: S608
                (channel_id, channel_id, text, utc_now(), assignee),
            )
            await db.commit()
            rowid = cursor.lastrowid
            assert rowid is not None
            record = await self._fetch_rowid(db, rowid)
        assert record is not None
        logger.info("TODO created: channel=%d, id=%d", channel_id, record.id)
        return record

    async def complete(self, channel_id: int, todo_id: int) -> TodoRecord | None:
        return await self._update(channel_id, todo_id, "completion_date = ?", (utc_now(),))

    async def uncomplete(self, channel_id: int, todo_id: int) -> TodoRecord | None:
        return await self._update(channel_id, todo_id, "completion_date = NULL", ())

    async def assign(
        self, channel_id: int, todo_id: int, assignee: int | None
    ) -> TodoRecord | None:
        return await self._update(channel_id, todo_id, "assignee = ?", (assignee,))

    async def edit(self, channel_id: int, todo_id: int, text: str) -> TodoRecord | None:
        return await self._update(channel_id, todo_id, "todo = ?", (text,))

    async def move(
        self, channel_id: int, todo_id: int, new_channel_id: int
    ) -> TodoRecord | None:
        """Move a TODO to another channel, giving it that channel's next id."""
        return await self._update(
            channel_id,
            todo_id,
            f"channel_id = ?, id = {_NEXT_ID}",
            (new_channel_id, new_channel_id),
        )

    async def delete(self, channel_id: int, todo_id: int) -> TodoRecord | None:
        """Delete a TODO. Returns the deleted record, or None if it did not exist."""
        async with aiosqlite.connect(self.db_path) as db:
            rowid = await self._find_rowid(db, channel_id, todo_id)
            if rowid is None:
                return None
            record = await self._fetch_rowid(db, rowid)
            await db.execute("DELETE FROM todos WHERE rowid = ?", (rowid,))
            await db.commit()
            return record
