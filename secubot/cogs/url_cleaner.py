"""UrlCleanerCog — strip tracking parameters from posted links.

Requires the privileged message-content intent; without it
``message.content`` is empty and the listener never fires a reply.
"""

from __future__ import annotations

import contextlib
import logging

import discord
from discord.ext import commands

from ..url_cleaner import clean_urls, format_message

logger = logging.getLogger(__name__)


class UrlCleanerCog(commands.Cog):
    """Reply to messages containing tracked URLs with sanitized copies."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return
        cleaned = clean_urls(message.content)
        if not cleaned:
            return

        logger.debug("Sanitized %d URL(s) in message %d", len(cleaned), message.id)
        # Hiding the original previews needs Manage Messages; best effort.
        with contextlib.suppress(discord.HTTPException):
            await message.edit(suppress=True)
        await message.reply(format_message(cleaned), mention_author=False)
