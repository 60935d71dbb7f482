"""Logging configuration."""

import logging
import sys


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure root logging for the bot process.

    ``level`` accepts either a logging constant or a level name such as
    ``"DEBUG"`` (the form it arrives in from ``LOG_LEVEL``).
    """
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.addHandler(handler)

    # discord.py logs every gateway event at INFO
    logging.getLogger("discord").setLevel(logging.WARNING)
    logging.getLogger("discord.http").setLevel(logging.WARNING)
