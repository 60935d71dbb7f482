"""Discord UI helpers: embeds, interactive views and message splitting."""

from .chunker import DISCORD_MAX_CHARS, split_message
from .embeds import COLOR_ERROR, COLOR_INFO, COLOR_SUCCESS, text_embed
from .views import TodoListView

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "DISCORD_MAX_CHARS",
    "TodoListView",
    "split_message",
    "text_embed",
]
