"""Tests for TodoCog — /todo slash commands against a real SQLite file."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import aiosqlite
import discord
import pytest

from secubot.cogs.todo import NOT_FOUND_TEXT, TodoCog, mono, sanitize
from secubot.database.todo_repo import TodoRepository
from secubot.discord_ui.embeds import NO_TODOS_TEXT
from secubot.discord_ui.views import TodoListView

CHANNEL = 42


@pytest.fixture
def repo(db_path: str) -> TodoRepository:
    return TodoRepository(db_path)


@pytest.fixture
def cog(repo: TodoRepository) -> TodoCog:
    return TodoCog(MagicMock(), repo)


def _make_member(user_id: int, name: str) -> MagicMock:
    member = MagicMock(spec=discord.Member)
    member.id = user_id
    member.display_name = name
    return member


def _make_interaction(channel_id: int = CHANNEL) -> MagicMock:
    interaction = MagicMock(spec=discord.Interaction)
    interaction.channel_id = channel_id
    interaction.guild = MagicMock(spec=discord.Guild)
    interaction.guild.get_member = MagicMock(return_value=None)
    interaction.guild.fetch_member = AsyncMock(
        side_effect=discord.NotFound(MagicMock(status=404), "unknown member")
    )
    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.original_response = AsyncMock(return_value=MagicMock(spec=discord.Message))
    return interaction


def _reply(interaction: MagicMock) -> tuple[str, bool]:
    """Description and ephemeral flag of the embed reply."""
    kwargs = interaction.response.send_message.call_args.kwargs
    return kwargs["embed"].description, kwargs.get("ephemeral", False)


class TestHelpers:
    def test_sanitize(self) -> None:
        assert sanitize("ping @everyone `now`") == "ping @\u200beveryone 'now'"

    def test_mono(self) -> None:
        assert mono("a`b") == "`a'b`"


class TestTodoAdd:
    async def test_add_unassigned(self, cog: TodoCog, repo: TodoRepository) -> None:
        interaction = _make_interaction()
        await cog.add.callback(cog, interaction, content="buy milk")

        text, ephemeral = _reply(interaction)
        assert text == "TODO [1] (`buy milk`) added and assigned to no one."
        assert ephemeral is False
        assert (await repo.get(CHANNEL, 1)).todo == "buy milk"

    async def test_add_assigned(self, cog: TodoCog, repo: TodoRepository) -> None:
        interaction = _make_interaction()
        await cog.add.callback(
            cog, interaction, content="review", assignee=_make_member(7, "alice")
        )

        text, _ = _reply(interaction)
        assert text == "TODO [1] (`review`) added and assigned to alice."
        assert (await repo.get(CHANNEL, 1)).assignee == 7

    async def test_add_sanitizes(self, cog: TodoCog, repo: TodoRepository) -> None:
        await cog.add.callback(cog, _make_interaction(), content="@here `x`")
        assert (await repo.get(CHANNEL, 1)).todo == "@\u200bhere 'x'"

    async def test_add_too_long(self, cog: TodoCog, repo: TodoRepository) -> None:
        interaction = _make_interaction()
        await cog.add.callback(cog, interaction, content="x" * 1025)

        text, _ = _reply(interaction)
        assert "1024" in text
        assert await repo.list_channel(CHANNEL) == []

    async def test_add_db_failure(self, tmp_path) -> None:
        cog = TodoCog(MagicMock(), TodoRepository(str(tmp_path / "missing.db")))
        interaction = _make_interaction()
        await cog.add.callback(cog, interaction, content="x")

        text, _ = _reply(interaction)
        assert text == "Adding TODO failed."


class TestTodoMutations:
    async def test_complete(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        interaction = _make_interaction()
        await cog.complete.callback(cog, interaction, todo_id=1)

        assert _reply(interaction) == ("TODO [1] (`a`) completed.", False)
        assert (await repo.get(CHANNEL, 1)).completed

    async def test_complete_missing(self, cog: TodoCog) -> None:
        interaction = _make_interaction()
        await cog.complete.callback(cog, interaction, todo_id=9)
        assert _reply(interaction) == (NOT_FOUND_TEXT, False)

    async def test_complete_other_channel_not_found(
        self, cog: TodoCog, repo: TodoRepository
    ) -> None:
        await repo.add(CHANNEL, "a")
        interaction = _make_interaction(channel_id=7)
        await cog.complete.callback(cog, interaction, todo_id=1)
        assert _reply(interaction)[0] == NOT_FOUND_TEXT

    async def test_uncomplete_is_ephemeral(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        await repo.complete(CHANNEL, 1)
        interaction = _make_interaction()
        await cog.uncomplete.callback(cog, interaction, todo_id=1)

        assert _reply(interaction) == ("TODO [1] (`a`) uncompleted.", True)
        assert not (await repo.get(CHANNEL, 1)).completed

    async def test_delete(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        interaction = _make_interaction()
        await cog.delete.callback(cog, interaction, todo_id=1)

        assert _reply(interaction) == ("TODO [1] (`a`) deleted.", True)
        assert await repo.get(CHANNEL, 1) is None

    async def test_assign(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        interaction = _make_interaction()
        await cog.assign.callback(
            cog, interaction, todo_id=1, new_assignee=_make_member(5, "bob")
        )

        assert _reply(interaction) == ("TODO [1] (`a`) reassigned to bob.", True)
        assert (await repo.get(CHANNEL, 1)).assignee == 5

    async def test_unassign(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a", assignee=5)
        interaction = _make_interaction()
        await cog.assign.callback(cog, interaction, todo_id=1)

        assert _reply(interaction)[0] == "TODO [1] (`a`) reassigned to no one."
        assert (await repo.get(CHANNEL, 1)).assignee is None

    async def test_move(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        await repo.add(100, "existing")
        target = MagicMock(spec=discord.TextChannel)
        target.id = 100
        target.name = "general"

        interaction = _make_interaction()
        await cog.move.callback(cog, interaction, todo_id=1, new_channel=target)

        assert _reply(interaction)[0] == "TODO [1] (`a`) moved to general as [2]."
        assert (await repo.get(100, 2)).todo == "a"

    async def test_edit(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "old")
        interaction = _make_interaction()
        await cog.edit.callback(cog, interaction, todo_id=1, content="new @you")

        assert _reply(interaction) == ("TODO [1] edited to (`new @\u200byou`).", True)

    async def test_edit_too_long(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "old")
        interaction = _make_interaction()
        await cog.edit.callback(cog, interaction, todo_id=1, content="x" * 2000)

        assert _reply(interaction)[1] is True
        assert (await repo.get(CHANNEL, 1)).todo == "old"

    async def test_db_error_reports_failure(self, cog: TodoCog) -> None:
        cog.repo = MagicMock()
        cog.repo.delete = AsyncMock(side_effect=aiosqlite.OperationalError("locked"))
        interaction = _make_interaction()
        await cog.delete.callback(cog, interaction, todo_id=1)
        assert _reply(interaction)[0] == "Deleting TODO failed."


class TestTodoList:
    async def test_empty_list(self, cog: TodoCog) -> None:
        interaction = _make_interaction()
        await cog.list_todos.callback(cog, interaction)
        assert _reply(interaction)[0] == NO_TODOS_TEXT

    async def test_list_sends_view(self, cog: TodoCog, repo: TodoRepository) -> None:
        await repo.add(CHANNEL, "a")
        await repo.add(CHANNEL, "b", assignee=7)
        interaction = _make_interaction()
        interaction.guild.get_member = MagicMock(
            side_effect=lambda uid: _make_member(uid, "alice") if uid == 7 else None
        )

        await cog.list_todos.callback(cog, interaction)

        kwargs = interaction.response.send_message.call_args.kwargs
        view = kwargs["view"]
        assert isinstance(view, TodoListView)
        assert view.message is interaction.original_response.return_value
        assert [f.name for f in kwargs["embed"].fields] == ["[1]", "[2] - alice"]

    async def test_list_completed_and_assignee_filter(
        self, cog: TodoCog, repo: TodoRepository
    ) -> None:
        await repo.add(CHANNEL, "mine", assignee=7)
        await repo.add(CHANNEL, "other", assignee=8)
        await repo.complete(CHANNEL, 1)
        interaction = _make_interaction()

        await cog.list_todos.callback(
            cog, interaction, completed=True, assignee=_make_member(7, "alice")
        )

        embed = interaction.response.send_message.call_args.kwargs["embed"]
        assert [f.value for f in embed.fields] == ["mine"]

    async def test_unresolvable_assignee_shows_bare_id(
        self, cog: TodoCog, repo: TodoRepository
    ) -> None:
        await repo.add(CHANNEL, "a", assignee=7)
        interaction = _make_interaction()
        await cog.list_todos.callback(cog, interaction)

        embed = interaction.response.send_message.call_args.kwargs["embed"]
        assert embed.fields[0].name == "[1]"
