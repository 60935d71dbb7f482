"""Discord embed builders."""

from __future__ import annotations

from dataclasses import dataclass

import discord

# Colors
COLOR_INFO = 0x5865F2  # Discord blurple
COLOR_SUCCESS = 0x57F287  # Green
COLOR_ERROR = 0xED4245  # Red
COLOR_WARNING = 0xFEE75C  # Yellow

# Discord rejects embeds with more fields than this.
EMBED_FIELDS_LIMIT = 25

NO_TODOS_TEXT = "There are no incompleted TODOs in this channel."


@dataclass
class TodoEntry:
    """A TODO as shown in the list embed, with the assignee already resolved."""

    id: int
    text: str
    completed: bool
    assignee: str | None = None

    @property
    def field_name(self) -> str:
        name = f"[{self.id}]"
        if self.completed:
            name += " [DONE]"
        if self.assignee:
            name += f" - {self.assignee}"
        return name


def text_embed(text: str, *, color: int = COLOR_INFO) -> discord.Embed:
    """A description-only embed, used for short command replies."""
    return discord.Embed(description=text[:4096], color=color)


def page_count(total: int, per_page: int = EMBED_FIELDS_LIMIT) -> int:
    """Number of pages needed for ``total`` items (at least one)."""
    return max(1, -(-total // per_page))


def todo_list_embed(entries: list[TodoEntry], page: int) -> discord.Embed:
    """Render one page of TODO entries.

    The footer counts uncompleted entries across all pages, not only the
    visible one.
    """
    pages = page_count(len(entries))
    start = page * EMBED_FIELDS_LIMIT
    embed = discord.Embed(title="TODOs", color=COLOR_INFO)
    for entry in entries[start : start + EMBED_FIELDS_LIMIT]:
        embed.add_field(name=entry.field_name, value=entry.text[:1024], inline=False)
    uncompleted = sum(1 for e in entries if not e.completed)
    embed.set_footer(text=f"Page {page + 1}/{pages}: {uncompleted} uncompleted TODOs")
    return embed


def todo_reminder_embed(count: int) -> discord.Embed:
    return discord.Embed(
        title="TODOs reminder",
        description=f"There are {count} uncompleted TODOs here!",
        color=COLOR_WARNING,
    )


def hof_embed(
    title: str,
    description: str | None,
    leaderboard: list[tuple[str, int]],
) -> discord.Embed:
    """Render a Hall of Fame table as ``name: count`` inline fields."""
    desc = description or ""
    if not leaderboard:
        desc = f"{desc}\n\nThere are no entries." if desc else "There are no entries."
    embed = discord.Embed(title=title, description=desc, color=COLOR_SUCCESS)
    for name, count in leaderboard[:EMBED_FIELDS_LIMIT]:
        embed.add_field(name=name, value=str(count), inline=True)
    return embed
