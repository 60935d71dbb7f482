"""Interactive views."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Awaitable, Callable

import discord

from .embeds import NO_TODOS_TEXT, TodoEntry, page_count, text_embed, todo_list_embed

logger = logging.getLogger(__name__)

# Buttons stay active for three minutes after the last click.
TODO_LIST_TIMEOUT = 180.0


class TodoListView(discord.ui.View):
    """◀ / Refresh / ▶ pagination for the ``/todo list`` embed.

    ``refresh`` re-runs the original query; page wraps around at both ends.
    """

    def __init__(
        self,
        entries: list[TodoEntry],
        refresh: Callable[[], Awaitable[list[TodoEntry]]],
        *,
        timeout: float = TODO_LIST_TIMEOUT,
    ) -> None:
        super().__init__(timeout=timeout)
        self.entries = entries
        self.page = 0
        self._refresh = refresh
        self.message: discord.Message | None = None

    @property
    def pages(self) -> int:
        return page_count(len(self.entries))

    def current_embed(self) -> discord.Embed:
        return todo_list_embed(self.entries, self.page)

    @discord.ui.button(emoji="◀", style=discord.ButtonStyle.primary)
    async def prev_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        self.page = (self.page - 1) % self.pages
        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    @discord.ui.button(label="Refresh", style=discord.ButtonStyle.secondary)
    async def refresh_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        entries = await self._refresh()
        logger.debug("TODO list refreshed: %d entries", len(entries))
        if not entries:
            await interaction.response.edit_message(embed=text_embed(NO_TODOS_TEXT), view=self)
            return
        self.entries = entries
        self.page = 0
        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    @discord.ui.button(emoji="▶", style=discord.ButtonStyle.primary)
    async def next_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ) -> None:
        self.page = (self.page + 1) % self.pages
        await interaction.response.edit_message(embed=self.current_embed(), view=self)

    async def on_timeout(self) -> None:
        for child in self.children:
            if isinstance(child, discord.ui.Button):
                child.disabled = True
        if self.message is not None:
            with contextlib.suppress(discord.HTTPException):
                await self.message.edit(view=self)
