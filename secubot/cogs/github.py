"""GitHubCog — mirror Discord requests into GitHub issues.

- /gh issue {title} [details] [assignee]: open an issue in the channel's repo
- /gh where: show which repo this channel maps to
"""

from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from ..config import GitHubSettings
from ..integrations.github import GitHubClient, GitHubError
from ..integrations.mirror import mirror_for_channel, resolve_repo

logger = logging.getLogger(__name__)

DISABLED_TEXT = "ℹ️ Mirroring is disabled for this channel."
FAILED_TEXT = "⚠️ Failed to create GitHub issue."


def issue_extra(details: str | None, assignee: discord.abc.User | None) -> str:
    """Body text contributed by the optional command arguments."""
    parts: list[str] = []
    if assignee is not None:
        parts.append(f"Assignee: @{assignee.name}")
    if details:
        parts.append(details)
    return "\n\n".join(parts)


class GitHubCog(commands.GroupCog, group_name="gh", group_description="GitHub utilities"):
    """Cog exposing the ``/gh`` command group.

    Args:
        bot: The Discord bot instance.
        client: GitHub API client.
        settings: Token, default repo and channel mapping.
    """

    def __init__(
        self,
        bot: commands.Bot,
        client: GitHubClient,
        settings: GitHubSettings,
    ) -> None:
        self.bot = bot
        self.client = client
        self.settings = settings

    @app_commands.command(name="issue", description="Create a GitHub issue for this channel")
    @app_commands.describe(
        title="Short title",
        details="Details / context (optional)",
        assignee="Ping a teammate (optional)",
    )
    async def issue(
        self,
        interaction: discord.Interaction,
        title: str,
        details: str | None = None,
        assignee: discord.Member | None = None,
    ) -> None:
        channel_id = interaction.channel_id
        assert channel_id is not None
        await interaction.response.defer()
        try:
            url = await mirror_for_channel(
                self.client,
                self.settings,
                channel_id=channel_id,
                author=interaction.user.name,
                title=title,
                extra=issue_extra(details, assignee),
            )
        except GitHubError:
            await interaction.followup.send(FAILED_TEXT)
            return
        if url is None:
            await interaction.followup.send(DISABLED_TEXT)
        else:
            await interaction.followup.send(f"📬 Created: {url}")

    @app_commands.command(name="where", description="Show which repo this channel maps to")
    async def where(self, interaction: discord.Interaction) -> None:
        channel_id = interaction.channel_id
        assert channel_id is not None
        settings = self.settings

        if not settings.token:
            text = "GitHub mirroring is not configured (missing token)."
        elif settings.allowed_channels and channel_id not in settings.allowed_channels:
            text = f"This channel ({channel_id}) is **not** allowed to mirror."
        else:
            repo = resolve_repo(settings, channel_id)
            if repo is None:
                text = f"No repository mapped for channel {channel_id}."
            else:
                text = f"Channel {channel_id} → `{repo}`"
        await interaction.response.send_message(text)
