"""secubot — a Discord bot for small security teams.

Quick start::

    from secubot import SecubotBot, load_settings, setup_bot

"""

__version__ = "1.0.0"

from .bot import SecubotBot
from .config import ConfigError, Settings, load_settings
from .database.hof_repo import HallOfFameRepository
from .database.todo_repo import TodoRepository
from .ping import Commence, PingRegistry, PingWorker, Remove, Stop
from .setup import BotComponents, setup_bot

__all__ = [
    "__version__",
    # Bot
    "SecubotBot",
    "BotComponents",
    "setup_bot",
    # Config
    "ConfigError",
    "Settings",
    "load_settings",
    # Ping Cannon
    "Commence",
    "PingRegistry",
    "PingWorker",
    "Remove",
    "Stop",
    # Storage
    "HallOfFameRepository",
    "TodoRepository",
]
