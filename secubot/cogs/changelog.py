"""ChangelogCog — /changelog and /version."""

from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from .. import __version__
from ..discord_ui.chunker import split_message
from ..integrations.github import GitHubClient, GitHubError

logger = logging.getLogger(__name__)

NO_CHANGELOG_TEXT = "No changelog in the release notes."


def format_changelog(body: str) -> str:
    """Bold markdown headings so they render inside a plain message."""
    lines = []
    for line in body.replace("\r\n", "\n").split("\n"):
        lines.append(f"**{line}**" if line.startswith("#") else line)
    return "\n".join(lines).strip()


class ChangelogCog(commands.Cog):
    """Cog reporting release information.

    Args:
        bot: The Discord bot instance.
        client: GitHub API client used to read releases.
        repo: ``owner/name`` whose latest release is shown.
    """

    def __init__(self, bot: commands.Bot, client: GitHubClient, repo: str) -> None:
        self.bot = bot
        self.client = client
        self.repo = repo

    @app_commands.command(name="changelog", description="Get the latest changelog")
    async def changelog(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer()
        try:
            body = await self.client.latest_release(self.repo)
        except GitHubError:
            logger.warning("Failed to fetch latest release of %s", self.repo, exc_info=True)
            await interaction.followup.send("Could not fetch the changelog.")
            return

        text = format_changelog(body) or NO_CHANGELOG_TEXT
        for chunk in split_message(text):
            await interaction.followup.send(chunk)

    @app_commands.command(name="version", description="Show the running version")
    async def version(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message(f"Running secubot v{__version__}")
