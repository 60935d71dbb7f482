"""One-call setup for all secubot Cogs.

``main`` calls this instead of wiring each Cog by hand.  Which Cogs are
registered follows ``Settings.enabled_commands``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from .config import Settings
    from .database.hof_repo import HallOfFameRepository
    from .database.todo_repo import TodoRepository
    from .integrations.github import GitHubClient

logger = logging.getLogger(__name__)


@dataclass
class BotComponents:
    """References to the initialized repositories and clients."""

    todo_repo: TodoRepository
    hof_repo: HallOfFameRepository
    github: GitHubClient


async def setup_bot(bot: Bot, settings: Settings) -> BotComponents:
    """Initialize the database and register every enabled Cog.

    Args:
        bot: Discord bot instance.
        settings: Parsed configuration.

    Returns:
        BotComponents with references to the initialized repositories.
    """
    from .cogs.changelog import ChangelogCog
    from .cogs.github import GitHubCog
    from .cogs.hall_of_fame import HallOfFameCog
    from .cogs.ping import PingCog
    from .cogs.todo import TodoCog
    from .cogs.todo_reminder import TodoReminderCog
    from .cogs.url_cleaner import UrlCleanerCog
    from .database.hof_repo import HallOfFameRepository
    from .database.models import init_db
    from .database.todo_repo import TodoRepository
    from .integrations.github import GitHubClient

    await init_db(settings.database_path)
    todo_repo = TodoRepository(settings.database_path)
    hof_repo = HallOfFameRepository(settings.database_path)
    github = GitHubClient(settings.github.token)
    logger.info("Database initialized: %s", settings.database_path)

    # --- PingCog ---
    if settings.is_enabled("ping"):
        await bot.add_cog(PingCog(bot, settings=settings.ping))
        logger.info("Registered PingCog")

    # --- TodoCog + reminders ---
    if settings.is_enabled("todo"):
        await bot.add_cog(TodoCog(bot, todo_repo))
        logger.info("Registered TodoCog")
        if settings.todo_reminder_days > 0:
            await bot.add_cog(
                TodoReminderCog(bot, todo_repo, interval_days=settings.todo_reminder_days)
            )
            logger.info("Registered TodoReminderCog")

    # --- HallOfFameCog ---
    if settings.is_enabled("hof"):
        await bot.add_cog(HallOfFameCog(bot, hof_repo))
        logger.info("Registered HallOfFameCog")

    # --- GitHubCog ---
    if settings.is_enabled("gh"):
        await bot.add_cog(GitHubCog(bot, github, settings.github))
        logger.info("Registered GitHubCog")

    # --- ChangelogCog ---
    if settings.is_enabled("changelog"):
        await bot.add_cog(ChangelogCog(bot, github, settings.changelog_repo))
        logger.info("Registered ChangelogCog")

    # --- UrlCleanerCog (needs message content) ---
    if settings.is_enabled("url_cleaner"):
        if settings.message_content:
            await bot.add_cog(UrlCleanerCog(bot))
            logger.info("Registered UrlCleanerCog")
        else:
            logger.warning("UrlCleanerCog skipped: MESSAGE_CONTENT_INTENT is off")

    return BotComponents(todo_repo=todo_repo, hof_repo=hof_repo, github=github)
