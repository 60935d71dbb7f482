"""HallOfFameCog — per-guild leaderboards.

- /hof show {hof} [user]: leaderboard, or one user's entries
- /hof create: modal asking for a title and description
- /hof add {hof} {user} {reason}: record an entry
"""

from __future__ import annotations

import logging

import aiosqlite
import discord
from discord import app_commands
from discord.ext import commands

from ..database.hof_repo import HallOfFameRepository, HofTable
from ..discord_ui.embeds import EMBED_FIELDS_LIMIT, hof_embed
from ..utils.members import resolve_nickname

logger = logging.getLogger(__name__)

TABLE_NOT_FOUND_TEXT = "Hall of Fame table not found."
MISSING_REASON = "Missing reason"
MAX_REASON_CHARS = 128
MIN_TITLE_CHARS = 4
MAX_TITLE_CHARS = 64


class HofCreationModal(discord.ui.Modal, title="Create Hall of Fame table"):
    """Modal collecting a new table's title and optional description."""

    hof_title: discord.ui.TextInput = discord.ui.TextInput(
        label="Title", min_length=MIN_TITLE_CHARS, max_length=MAX_TITLE_CHARS
    )
    description: discord.ui.TextInput = discord.ui.TextInput(
        label="Description",
        style=discord.TextStyle.paragraph,
        max_length=MAX_REASON_CHARS,
        required=False,
    )

    def __init__(self, repo: HallOfFameRepository) -> None:
        super().__init__()
        self.repo = repo

    async def on_submit(self, interaction: discord.Interaction) -> None:
        guild_id = interaction.guild_id
        assert guild_id is not None
        title = self.hof_title.value.strip()
        description = self.description.value.strip() or None
        if len(title) < MIN_TITLE_CHARS:
            await interaction.response.send_message("Failure", ephemeral=True)
            return
        try:
            await self.repo.create_table(guild_id, title, description)
        except aiosqlite.Error:
            logger.warning("Failed to create Hall of Fame table %r", title, exc_info=True)
            response = "Failure"
        else:
            response = "Success"
        await interaction.response.send_message(response, ephemeral=True)


@app_commands.guild_only()
class HallOfFameCog(commands.GroupCog, group_name="hof", group_description="Hall of Fame"):
    """Cog exposing the ``/hof`` command group.

    Args:
        bot: The Discord bot instance.
        repo: HallOfFameRepository backing all commands.
    """

    def __init__(self, bot: commands.Bot, repo: HallOfFameRepository) -> None:
        self.bot = bot
        self.repo = repo

    async def hof_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        if interaction.guild_id is None:
            return []
        titles = await self.repo.list_titles(interaction.guild_id, current)
        return [app_commands.Choice(name=t, value=t) for t in titles[:25]]

    async def _get_table(self, interaction: discord.Interaction, title: str) -> HofTable | None:
        """Look up a table; tell the user when it does not exist."""
        guild_id = interaction.guild_id
        assert guild_id is not None
        table = await self.repo.get_table(guild_id, title)
        if table is None:
            await interaction.response.send_message(TABLE_NOT_FOUND_TEXT, ephemeral=True)
        return table

    @app_commands.command(name="show", description="Show a Hall of Fame table")
    @app_commands.describe(hof="Hall of Fame table", user="Show only this user's entries")
    @app_commands.autocomplete(hof=hof_autocomplete)
    async def show(
        self,
        interaction: discord.Interaction,
        hof: str,
        user: discord.User | None = None,
    ) -> None:
        table = await self._get_table(interaction, hof)
        if table is None:
            return
        if user is None:
            await self._show_table(interaction, table)
        else:
            await self._show_user(interaction, table, user)

    async def _show_table(self, interaction: discord.Interaction, table: HofTable) -> None:
        leaderboard = await self.repo.leaderboard(table.id, limit=EMBED_FIELDS_LIMIT)
        rows: list[tuple[str, int]] = []
        for user_id, count in leaderboard:
            name = await resolve_nickname(interaction.guild, user_id)
            rows.append((name or f"<unknown {user_id}>", count))
        await interaction.response.send_message(
            embed=hof_embed(table.title, table.description, rows)
        )

    async def _show_user(
        self, interaction: discord.Interaction, table: HofTable, user: discord.User
    ) -> None:
        entries = await self.repo.user_entries(table.id, user.id)
        lines = [f"### {table.title} entries for {user.mention}"]
        lines.extend(
            f"- *{e.creation_date}*: {e.description or MISSING_REASON}" for e in entries
        )
        await interaction.response.send_message(
            "\n".join(lines)[:2000], allowed_mentions=discord.AllowedMentions.none()
        )

    @app_commands.command(name="create", description="Create a Hall of Fame table")
    async def create(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_modal(HofCreationModal(self.repo))

    @app_commands.command(name="add", description="Add an entry to a Hall of Fame table")
    @app_commands.describe(hof="Hall of Fame table", user="User to add", reason="Why")
    @app_commands.autocomplete(hof=hof_autocomplete)
    async def add(
        self,
        interaction: discord.Interaction,
        hof: str,
        user: discord.User,
        reason: app_commands.Range[str, 1, MAX_REASON_CHARS],
    ) -> None:
        table = await self._get_table(interaction, hof)
        if table is None:
            return
        await self.repo.add_entry(table.id, user.id, reason)
        safe_reason = discord.utils.escape_markdown(reason)
        await interaction.response.send_message(
            f"{user.mention} was added to **{table.title}**: *{safe_reason}*"
        )
