"""Discord Bot class."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import discord
from discord import app_commands
from discord.ext import commands

logger = logging.getLogger(__name__)

ERROR_TEXT = "Could not generate response:\n```\n{error}\n```"


class SecubotBot(commands.Bot):
    """Discord bot hosting the secubot Cogs.

    Args:
        guild_ids: Guilds that get slash commands synced instantly.  When
            empty, commands are synced globally.
        message_content: Request the privileged message-content intent
            (needed by the URL cleaner).
    """

    def __init__(
        self,
        guild_ids: Sequence[int] = (),
        *,
        message_content: bool = False,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = message_content
        intents.guilds = True
        intents.members = False

        super().__init__(
            command_prefix="!",  # Not used, but required
            intents=intents,
        )
        self.guild_ids = tuple(guild_ids)
        self.tree.on_error = self.on_app_command_error

    async def on_ready(self) -> None:
        logger.info("Logged in as %s (ID: %s)", self.user, self.user.id if self.user else "?")
        await self.sync_commands()

    async def sync_commands(self) -> None:
        """Register slash commands, per guild when ``guild_ids`` is set."""
        try:
            if not self.guild_ids:
                synced = await self.tree.sync()
                logger.info("Synced %d global slash commands", len(synced))
                return
            for guild_id in self.guild_ids:
                guild = discord.Object(id=guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                logger.info("Synced %d slash commands to guild %d", len(synced), guild_id)
        except Exception:
            logger.exception("Failed to sync slash commands")

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        """Log a failed command and tell the invoking user what went wrong."""
        command = interaction.command.qualified_name if interaction.command else "?"
        logger.error("Command /%s failed", command, exc_info=error)

        cause = error.original if isinstance(error, app_commands.CommandInvokeError) else error
        text = ERROR_TEXT.format(error=cause)[:2000]
        try:
            if interaction.response.is_done():
                await interaction.followup.send(text, ephemeral=True)
            else:
                await interaction.response.send_message(text, ephemeral=True)
        except discord.HTTPException:
            logger.warning("Could not report error for /%s", command, exc_info=True)
