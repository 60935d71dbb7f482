"""PingCog — slash commands for the Ping Cannon.

- /ping commence users: start (or extend) the cannon in this channel
- /ping remove users: stop pinging some of the targets
- /ping stop: stop the cannon in this channel

The Cog only parses arguments and enqueues control messages; the
:class:`~secubot.ping.worker.PingWorker` it owns does the pinging.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from ..config import PingSettings
from ..ping import Commence, MailboxClosedError, PingMessage, PingWorker, Remove, Stop
from ..ping.mentions import extract_user_ids

if TYPE_CHECKING:
    from discord.abc import Messageable

logger = logging.getLogger(__name__)

COMMENCE_TEXT = "LOADING PING CANNON...."
REMOVE_TEXT = "Users removed from the targets."
STOP_TEXT = "The Ping Cannon has stopped."
NO_USERS_TEXT = "No users mentioned. Mention the targets, e.g. `@someone @someone-else`."
FAILURE_TEXT = "The Ping Cannon is not available right now."


class PingCog(commands.GroupCog, group_name="ping", group_description="The Ping Cannon"):
    """Cog that feeds the Ping Cannon worker.

    Args:
        bot: The Discord bot instance.
        settings: Worker timing; defaults to ten minutes at one tick per second.
        worker: Pre-built worker (tests); by default one is created that
            sends through ``bot``.
    """

    def __init__(
        self,
        bot: commands.Bot,
        *,
        settings: PingSettings | None = None,
        worker: PingWorker | None = None,
    ) -> None:
        self.bot = bot
        settings = settings or PingSettings()
        self.worker = worker or PingWorker(
            self._send_to_channel,
            timeout_seconds=settings.timeout_seconds,
            tick_seconds=settings.tick_seconds,
            mailbox_size=settings.mailbox_size,
        )

    async def cog_load(self) -> None:
        self.worker.start()
        logger.info("PingCog loaded — worker started")

    async def cog_unload(self) -> None:
        await self.worker.close()
        logger.info("PingCog unloaded — worker stopped")

    async def _send_to_channel(self, channel_id: int, text: str) -> None:
        """Outbound sender handed to the worker. Errors propagate to the worker."""
        channel = self.bot.get_channel(channel_id)
        if channel is None:
            channel = await self.bot.fetch_channel(channel_id)
        messageable: Messageable = channel  # type: ignore[assignment]
        await messageable.send(text, allowed_mentions=discord.AllowedMentions(users=True))

    async def _enqueue(
        self, interaction: discord.Interaction, message: PingMessage, reply: str
    ) -> None:
        """Hand a message to the worker and confirm it to the user.

        The interaction is deferred first: a full mailbox can keep ``send``
        waiting for longer than Discord allows before the first response.
        """
        if self.worker.closed:
            await interaction.response.send_message(FAILURE_TEXT, ephemeral=True)
            return
        await interaction.response.defer()
        try:
            await self.worker.send(message)
        except MailboxClosedError:
            logger.warning("Ping worker closed; dropped %r", message)
            await interaction.followup.send(FAILURE_TEXT)
            return
        await interaction.followup.send(reply)

    @app_commands.command(name="commence", description="Commence the Ping Cannon")
    @app_commands.describe(users="Users to ping")
    async def commence(self, interaction: discord.Interaction, users: str) -> None:
        targets = extract_user_ids(users)
        if not targets:
            await interaction.response.send_message(NO_USERS_TEXT, ephemeral=True)
            return
        channel_id = interaction.channel_id
        assert channel_id is not None
        await self._enqueue(interaction, Commence(channel_id, frozenset(targets)), COMMENCE_TEXT)

    @app_commands.command(name="remove", description="Remove users from the running cannon")
    @app_commands.describe(users="Users to remove")
    async def remove(self, interaction: discord.Interaction, users: str) -> None:
        targets = extract_user_ids(users)
        if not targets:
            await interaction.response.send_message(NO_USERS_TEXT, ephemeral=True)
            return
        channel_id = interaction.channel_id
        assert channel_id is not None
        await self._enqueue(interaction, Remove(channel_id, frozenset(targets)), REMOVE_TEXT)

    @app_commands.command(name="stop", description="Stop the Ping Cannon")
    async def stop(self, interaction: discord.Interaction) -> None:
        channel_id = interaction.channel_id
        assert channel_id is not None
        await self._enqueue(interaction, Stop(channel_id), STOP_TEXT)
