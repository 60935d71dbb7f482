"""Cogs for secubot."""

from .changelog import ChangelogCog
from .github import GitHubCog
from .hall_of_fame import HallOfFameCog
from .ping import PingCog
from .todo import TodoCog
from .todo_reminder import TodoReminderCog
from .url_cleaner import UrlCleanerCog

__all__ = [
    "ChangelogCog",
    "GitHubCog",
    "HallOfFameCog",
    "PingCog",
    "TodoCog",
    "TodoReminderCog",
    "UrlCleanerCog",
]
