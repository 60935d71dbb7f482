"""TodoCog — per-channel TODO tracking.

Commands (`{}` mandatory, `[]` optional):
- /todo list [completed] [assignee]
- /todo add {content} [assignee]
- /todo complete {id} / uncomplete {id} / delete {id}
- /todo assign {id} [new_assignee]
- /todo move {id} {new_channel}
- /todo edit {id} {content}
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

import aiosqlite
import discord
from discord import app_commands
from discord.ext import commands

from ..database.todo_repo import TodoRecord, TodoRepository
from ..discord_ui.embeds import COLOR_ERROR, COLOR_INFO, NO_TODOS_TEXT, TodoEntry, text_embed
from ..discord_ui.views import TodoListView
from ..utils.members import resolve_nickname

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 1024
NOT_FOUND_TEXT = "Not found."
TOO_LONG_TEXT = f"Content can't have more than {MAX_CONTENT_CHARS} characters."


def sanitize(content: str) -> str:
    """Neutralise mentions and code spans in user-supplied TODO text."""
    return content.replace("@", "@\u200b").replace("`", "'")


def mono(text: str) -> str:
    """Wrap text in an inline code span."""
    safe = text.replace("`", "'")
    return f"`{safe}`"


@app_commands.guild_only()
class TodoCog(commands.GroupCog, group_name="todo", group_description="Manage channel TODOs"):
    """Cog exposing the ``/todo`` command group.

    Args:
        bot: The Discord bot instance.
        repo: TodoRepository backing all commands.
    """

    def __init__(self, bot: commands.Bot, repo: TodoRepository) -> None:
        self.bot = bot
        self.repo = repo

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _channel_id(interaction: discord.Interaction) -> int:
        channel_id = interaction.channel_id
        assert channel_id is not None
        return channel_id

    @staticmethod
    async def _respond(
        interaction: discord.Interaction,
        text: str,
        *,
        ephemeral: bool = False,
        color: int = COLOR_INFO,
    ) -> None:
        await interaction.response.send_message(
            embed=text_embed(text, color=color), ephemeral=ephemeral
        )

    async def _apply(
        self,
        interaction: discord.Interaction,
        operation: Awaitable[TodoRecord | None],
        *,
        success: Callable[[TodoRecord], str],
        failure: str,
        ephemeral: bool = False,
    ) -> None:
        """Await a repository mutation and reply with its outcome."""
        try:
            record = await operation
        except aiosqlite.Error:
            logger.exception("TODO operation failed in channel %s", interaction.channel_id)
            await self._respond(interaction, failure, ephemeral=ephemeral, color=COLOR_ERROR)
            return
        if record is None:
            await self._respond(
                interaction, NOT_FOUND_TEXT, ephemeral=ephemeral, color=COLOR_ERROR
            )
            return
        await self._respond(interaction, success(record), ephemeral=ephemeral)

    async def _load_entries(
        self,
        guild: discord.Guild | None,
        channel_id: int,
        include_completed: bool,
        assignee: int | None,
    ) -> list[TodoEntry]:
        records = await self.repo.list_channel(
            channel_id, include_completed=include_completed, assignee=assignee
        )
        return [
            TodoEntry(
                id=r.id,
                text=r.todo,
                completed=r.completed,
                assignee=await resolve_nickname(guild, r.assignee),
            )
            for r in records
        ]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @app_commands.command(name="list", description="List TODO entries")
    @app_commands.describe(
        completed="Show completed TODOs",
        assignee="Show only TODOs assigned to",
    )
    async def list_todos(
        self,
        interaction: discord.Interaction,
        completed: bool = False,
        assignee: discord.Member | None = None,
    ) -> None:
        guild = interaction.guild
        channel_id = self._channel_id(interaction)
        assignee_id = assignee.id if assignee is not None else None

        async def load() -> list[TodoEntry]:
            return await self._load_entries(guild, channel_id, completed, assignee_id)

        try:
            entries = await load()
        except aiosqlite.Error:
            logger.exception("Listing TODOs failed in channel %d", channel_id)
            await self._respond(interaction, "Listing TODOs failed.", color=COLOR_ERROR)
            return

        if not entries:
            await self._respond(interaction, NO_TODOS_TEXT)
            return

        view = TodoListView(entries, refresh=load)
        await interaction.response.send_message(embed=view.current_embed(), view=view)
        view.message = await interaction.original_response()

    @app_commands.command(name="add", description="Add TODO entry")
    @app_commands.describe(content="TODO content", assignee="TODO assignee")
    async def add(
        self,
        interaction: discord.Interaction,
        content: str,
        assignee: discord.Member | None = None,
    ) -> None:
        if len(content) > MAX_CONTENT_CHARS:
            await self._respond(interaction, TOO_LONG_TEXT)
            return
        text = sanitize(content)
        nickname = assignee.display_name if assignee is not None else "no one"
        await self._apply(
            interaction,
            self.repo.add(
                self._channel_id(interaction),
                text,
                assignee.id if assignee is not None else None,
            ),
            success=lambda r: f"TODO [{r.id}] ({mono(r.todo)}) added and assigned to {nickname}.",
            failure="Adding TODO failed.",
        )

    @app_commands.command(name="complete", description="Complete TODO entry")
    @app_commands.describe(todo_id="TODO id")
    async def complete(self, interaction: discord.Interaction, todo_id: int) -> None:
        await self._apply(
            interaction,
            self.repo.complete(self._channel_id(interaction), todo_id),
            success=lambda r: f"TODO [{todo_id}] ({mono(r.todo)}) completed.",
            failure="Completing TODO failed.",
        )

    @app_commands.command(name="uncomplete", description="Uncomplete TODO entry")
    @app_commands.describe(todo_id="TODO id")
    async def uncomplete(self, interaction: discord.Interaction, todo_id: int) -> None:
        await self._apply(
            interaction,
            self.repo.uncomplete(self._channel_id(interaction), todo_id),
            success=lambda r: f"TODO [{todo_id}] ({mono(r.todo)}) uncompleted.",
            failure="Uncompleting TODO failed.",
            ephemeral=True,
        )

    @app_commands.command(name="delete", description="Delete TODO entry")
    @app_commands.describe(todo_id="TODO id")
    async def delete(self, interaction: discord.Interaction, todo_id: int) -> None:
        await self._apply(
            interaction,
            self.repo.delete(self._channel_id(interaction), todo_id),
            success=lambda r: f"TODO [{todo_id}] ({mono(r.todo)}) deleted.",
            failure="Deleting TODO failed.",
            ephemeral=True,
        )

    @app_commands.command(name="assign", description="Assign TODO entry")
    @app_commands.describe(todo_id="TODO id", new_assignee="TODO new assignee")
    async def assign(
        self,
        interaction: discord.Interaction,
        todo_id: int,
        new_assignee: discord.Member | None = None,
    ) -> None:
        nickname = new_assignee.display_name if new_assignee is not None else "no one"
        await self._apply(
            interaction,
            self.repo.assign(
                self._channel_id(interaction),
                todo_id,
                new_assignee.id if new_assignee is not None else None,
            ),
            success=lambda r: f"TODO [{todo_id}] ({mono(r.todo)}) reassigned to {nickname}.",
            failure="Assigning TODO failed.",
            ephemeral=True,
        )

    @app_commands.command(name="move", description="Move TODO entry")
    @app_commands.describe(todo_id="TODO id", new_channel="TODO new channel")
    async def move(
        self,
        interaction: discord.Interaction,
        todo_id: int,
        new_channel: discord.TextChannel,
    ) -> None:
        await self._apply(
            interaction,
            self.repo.move(self._channel_id(interaction), todo_id, new_channel.id),
            success=lambda r: (
                f"TODO [{todo_id}] ({mono(r.todo)}) moved to {new_channel.name} as [{r.id}]."
            ),
            failure="Moving TODO failed.",
        )

    @app_commands.command(name="edit", description="Edit TODO entry")
    @app_commands.describe(todo_id="TODO id", content="TODO new content")
    async def edit(self, interaction: discord.Interaction, todo_id: int, content: str) -> None:
        if len(content) > MAX_CONTENT_CHARS:
            await self._respond(interaction, TOO_LONG_TEXT, ephemeral=True)
            return
        await self._apply(
            interaction,
            self.repo.edit(self._channel_id(interaction), todo_id, sanitize(content)),
            success=lambda r: f"TODO [{todo_id}] edited to ({mono(r.todo)}).",
            failure="Editing TODO failed.",
            ephemeral=True,
        )
