"""TodoReminderCog — periodic nudge about uncompleted TODOs.

Every ``interval_days`` days each channel with uncompleted TODOs gets one
"TODOs reminder" embed.  ``discord.ext.tasks`` drives the loop; the
interval is applied at load time with ``change_interval``.
"""

from __future__ import annotations

import logging

import discord
from discord.ext import commands, tasks

from ..database.todo_repo import TodoRepository
from ..discord_ui.embeds import todo_reminder_embed

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_DAYS = 5


class TodoReminderCog(commands.Cog):
    """Cog that reminds channels about their open TODOs.

    Args:
        bot: The Discord bot instance.
        repo: TodoRepository to count open TODOs.
        interval_days: Days between reminders.
    """

    def __init__(
        self,
        bot: commands.Bot,
        repo: TodoRepository,
        *,
        interval_days: int = DEFAULT_INTERVAL_DAYS,
    ) -> None:
        self.bot = bot
        self.repo = repo
        self.interval_days = interval_days

    async def cog_load(self) -> None:
        self._reminder_loop.change_interval(hours=24 * self.interval_days)
        self._reminder_loop.start()
        logger.info("TodoReminderCog loaded — reminding every %d day(s)", self.interval_days)

    def cog_unload(self) -> None:
        self._reminder_loop.cancel()
        logger.info("TodoReminderCog unloaded — reminder loop stopped")

    @tasks.loop(hours=24 * DEFAULT_INTERVAL_DAYS)
    async def _reminder_loop(self) -> None:
        await self.send_reminders()

    @_reminder_loop.before_loop
    async def _before_reminder_loop(self) -> None:
        await self.bot.wait_until_ready()

    async def send_reminders(self) -> int:
        """Post one reminder per channel with open TODOs. Returns how many were sent."""
        counts = await self.repo.uncompleted_counts()
        sent = 0
        for channel_id, count in counts.items():
            channel = self.bot.get_channel(channel_id)
            if not isinstance(channel, discord.abc.Messageable):
                logger.warning("TodoReminderCog: channel %d not found", channel_id)
                continue
            try:
                await channel.send(embed=todo_reminder_embed(count))
            except discord.HTTPException:
                logger.warning("TodoReminderCog: failed to remind channel %d", channel_id)
                continue
            sent += 1
        if sent:
            logger.info("TodoReminderCog: reminded %d channel(s)", sent)
        return sent
