"""Guild member helpers."""

from __future__ import annotations

import contextlib

import discord


async def resolve_nickname(guild: discord.Guild | None, user_id: int | None) -> str | None:
    """Display name of ``user_id`` in ``guild``, or None if it cannot be resolved.

    Tries the member cache first and falls back to an API fetch.
    """
    if guild is None or user_id is None:
        return None
    member = guild.get_member(user_id)
    if member is None:
        with contextlib.suppress(discord.HTTPException):
            member = await guild.fetch_member(user_id)
    return member.display_name if member is not None else None
