"""Tests for TodoRepository."""

import aiosqlite
import pytest

from secubot.database.models import init_db
from secubot.database.todo_repo import TodoRepository


@pytest.fixture
async def repo(tmp_path):
    """Create a repository backed by a temporary database."""
    db_path = str(tmp_path / "test.db")
    await init_db(db_path)
    return TodoRepository(db_path)


class TestTodoRepositoryAdd:
    async def test_add_and_get(self, repo):
        record = await repo.add(100, "write tests", assignee=7)
        assert record.channel_id == 100
        assert record.id == 1
        assert record.todo == "write tests"
        assert record.assignee == 7
        assert record.priority == 0
        assert not record.completed

        fetched = await repo.get(100, 1)
        assert fetched == record

    async def test_ids_are_per_channel(self, repo):
        a = await repo.add(100, "a")
        b = await repo.add(100, "b")
        c = await repo.add(200, "c")
        assert (a.id, b.id, c.id) == (1, 2, 1)

    async def test_id_follows_max_after_delete(self, repo):
        await repo.add(100, "a")
        await repo.add(100, "b")
        await repo.delete(100, 1)
        record = await repo.add(100, "c")
        assert record.id == 3

    async def test_get_nonexistent(self, repo):
        assert await repo.get(100, 1) is None

    async def test_uninitialized_db_raises(self, tmp_path):
        repo = TodoRepository(str(tmp_path / "empty.db"))
        with pytest.raises(aiosqlite.Error):
            await repo.add(1, "x")


class TestTodoRepositoryList:
    async def test_hides_completed_by_default(self, repo):
        await repo.add(100, "open")
        await repo.add(100, "done")
        await repo.complete(100, 2)

        records = await repo.list_channel(100)
        assert [r.todo for r in records] == ["open"]

    async def test_include_completed(self, repo):
        await repo.add(100, "open")
        await repo.add(100, "done")
        await repo.complete(100, 2)

        records = await repo.list_channel(100, include_completed=True)
        assert [r.id for r in records] == [1, 2]
        assert records[1].completed

    async def test_filter_by_assignee(self, repo):
        await repo.add(100, "mine", assignee=1)
        await repo.add(100, "theirs", assignee=2)
        await repo.add(100, "nobody's")

        records = await repo.list_channel(100, assignee=1)
        assert [r.todo for r in records] == ["mine"]

    async def test_other_channels_excluded(self, repo):
        await repo.add(100, "here")
        await repo.add(200, "there")
        assert [r.todo for r in await repo.list_channel(100)] == ["here"]

    async def test_uncompleted_counts(self, repo):
        await repo.add(100, "a")
        await repo.add(100, "b")
        await repo.add(200, "c")
        await repo.add(300, "d")
        await repo.complete(300, 1)

        assert await repo.uncompleted_counts() == {100: 2, 200: 1}


class TestTodoRepositoryMutations:
    async def test_complete_and_uncomplete(self, repo):
        await repo.add(100, "a")

        done = await repo.complete(100, 1)
        assert done is not None
        assert done.completed
        assert done.completion_date is not None

        undone = await repo.uncomplete(100, 1)
        assert undone is not None
        assert not undone.completed

    async def test_assign_and_unassign(self, repo):
        await repo.add(100, "a")
        assert (await repo.assign(100, 1, 5)).assignee == 5
        assert (await repo.assign(100, 1, None)).assignee is None

    async def test_edit(self, repo):
        await repo.add(100, "old")
        record = await repo.edit(100, 1, "new")
        assert record.todo == "new"

    async def test_move_renumbers_into_target(self, repo):
        await repo.add(100, "stay")
        await repo.add(100, "go")
        await repo.add(200, "existing")

        moved = await repo.move(100, 2, 200)
        assert moved is not None
        assert moved.channel_id == 200
        assert moved.id == 2
        assert moved.todo == "go"
        assert await repo.get(100, 2) is None
        assert [r.id for r in await repo.list_channel(100)] == [1]

    async def test_delete_returns_record(self, repo):
        await repo.add(100, "bye")
        deleted = await repo.delete(100, 1)
        assert deleted is not None
        assert deleted.todo == "bye"
        assert await repo.get(100, 1) is None

    @pytest.mark.parametrize("method", ["complete", "uncomplete", "delete"])
    async def test_missing_returns_none(self, repo, method):
        assert await getattr(repo, method)(100, 1) is None

    async def test_missing_edit_assign_move_return_none(self, repo):
        assert await repo.edit(100, 1, "x") is None
        assert await repo.assign(100, 1, 5) is None
        assert await repo.move(100, 1, 200) is None
