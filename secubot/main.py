"""Entry point for secubot."""

from __future__ import annotations

import asyncio
import logging
import signal
import sys

from .bot import SecubotBot
from .config import ConfigError, load_settings
from .setup import setup_bot
from .utils.logger import setup_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    """Start the bot."""
    setup_logging()
    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    logging.getLogger().setLevel(settings.log_level)

    bot = SecubotBot(settings.guild_ids, message_content=settings.message_content)

    async with bot:
        await setup_bot(bot, settings)

        # Handle signals
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda: asyncio.create_task(bot.close()))

        await bot.start(settings.discord_token)


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
