"""The Ping Cannon: repeatedly mention a set of users in a channel."""

from .mentions import extract_user_ids, render_mentions
from .messages import Commence, PingMessage, Remove, Stop
from .registry import PingRegistry, PingTask
from .worker import MailboxClosedError, PingWorker

__all__ = [
    "Commence",
    "MailboxClosedError",
    "PingMessage",
    "PingRegistry",
    "PingTask",
    "PingWorker",
    "Remove",
    "Stop",
    "extract_user_ids",
    "render_mentions",
]
