"""Tests for HallOfFameRepository."""

import aiosqlite
import pytest

from secubot.database.hof_repo import HallOfFameRepository
from secubot.database.models import init_db


@pytest.fixture
async def repo(tmp_path):
    db_path = str(tmp_path / "test.db")
    await init_db(db_path)
    return HallOfFameRepository(db_path)


class TestHofTables:
    async def test_create_and_get(self, repo):
        table = await repo.create_table(1, "Bug hunters", "Found a bug")
        assert table.guild_id == 1
        assert table.title == "Bug hunters"
        assert table.description == "Found a bug"

        assert await repo.get_table(1, "Bug hunters") == table

    async def test_get_is_scoped_to_guild(self, repo):
        await repo.create_table(1, "Bug hunters")
        assert await repo.get_table(2, "Bug hunters") is None

    async def test_duplicate_title_rejected(self, repo):
        await repo.create_table(1, "Bug hunters")
        with pytest.raises(aiosqlite.IntegrityError):
            await repo.create_table(1, "Bug hunters")

    async def test_same_title_in_other_guild(self, repo):
        await repo.create_table(1, "Bug hunters")
        other = await repo.create_table(2, "Bug hunters")
        assert other.guild_id == 2

    async def test_list_titles_with_prefix(self, repo):
        for title in ("Bug hunters", "Builders", "CTF"):
            await repo.create_table(1, title)
        await repo.create_table(2, "Bugs elsewhere")

        assert await repo.list_titles(1) == ["Bug hunters", "Builders", "CTF"]
        assert await repo.list_titles(1, "Bu") == ["Bug hunters", "Builders"]
        assert await repo.list_titles(1, "x") == []


class TestHofEntries:
    async def test_add_entry(self, repo):
        table = await repo.create_table(1, "CTF")
        entry = await repo.add_entry(table.id, 42, "first blood")
        assert entry.hof_id == table.id
        assert entry.user_id == 42
        assert entry.description == "first blood"

    async def test_leaderboard_orders_by_count(self, repo):
        table = await repo.create_table(1, "CTF")
        for user in (1, 2, 2, 3, 3, 3):
            await repo.add_entry(table.id, user, "flag")

        assert await repo.leaderboard(table.id) == [(3, 3), (2, 2), (1, 1)]

    async def test_leaderboard_limit(self, repo):
        table = await repo.create_table(1, "CTF")
        for user in range(5):
            await repo.add_entry(table.id, user, None)
        assert len(await repo.leaderboard(table.id, limit=2)) == 2

    async def test_leaderboard_empty(self, repo):
        table = await repo.create_table(1, "CTF")
        assert await repo.leaderboard(table.id) == []

    async def test_user_entries_newest_first(self, repo):
        table = await repo.create_table(1, "CTF")
        await repo.add_entry(table.id, 1, "old")
        await repo.add_entry(table.id, 2, "someone else")
        await repo.add_entry(table.id, 1, "new")

        entries = await repo.user_entries(table.id, 1)
        assert [e.description for e in entries] == ["new", "old"]
