"""Channel-mapped GitHub issue mirroring.

Each Discord channel may map to its own repository (``GITHUB_CHANNEL_MAP``)
and otherwise falls back to ``GITHUB_REPO``.  An optional allow-list
(``GITHUB_ALLOWED_CHANNELS``) restricts which channels may mirror at all.
"""

from __future__ import annotations

import logging

from ..config import GitHubSettings
from .github import GitHubClient, GitHubError

logger = logging.getLogger(__name__)

ISSUE_BODY_TEMPLATE = """\
### Context
Submitted via Discord by @{author} in <#{channel_id}>.
{extra}

### Acceptance criteria
- Clear user impact
- Implementation approach agreed
- Tests cover new behavior"""


def resolve_repo(settings: GitHubSettings, channel_id: int) -> str | None:
    """Return the repository a channel mirrors to, or None when mirroring is off."""
    if not settings.token:
        return None
    if settings.allowed_channels and channel_id not in settings.allowed_channels:
        return None
    return settings.channel_map.get(channel_id) or settings.repo or None


def build_issue_body(author: str, channel_id: int, extra: str = "") -> str:
    return ISSUE_BODY_TEMPLATE.format(author=author, channel_id=channel_id, extra=extra)


async def mirror_for_channel(
    client: GitHubClient,
    settings: GitHubSettings,
    *,
    channel_id: int,
    author: str,
    title: str,
    extra: str = "",
) -> str | None:
    """Create an issue for ``channel_id``'s repository.

    Returns the issue URL, or None when mirroring is disabled for the
    channel.  Raises :class:`GitHubError` when the API call fails.
    """
    repo = resolve_repo(settings, channel_id)
    if repo is None:
        logger.info("mirror: skipped for channel %d (disabled or no repo)", channel_id)
        return None

    body = build_issue_body(author, channel_id, extra)
    try:
        url = await client.create_issue(repo, title, body, settings.default_labels)
    except GitHubError:
        logger.warning("mirror: GitHub issue creation failed for %s", repo, exc_info=True)
        raise
    logger.info("mirror: created issue %s", url)
    return url
