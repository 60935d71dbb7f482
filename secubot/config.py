"""Environment-driven configuration.

All settings come from environment variables, optionally loaded from a
``.env`` file in the working directory.  Parsing is strict: a malformed
value raises :class:`ConfigError` instead of silently falling back to a
default, so a typo in deployment shows up at startup.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ALL_COMMANDS = frozenset({"ping", "todo", "hof", "gh", "changelog", "url_cleaner"})

DEFAULT_DATABASE_PATH = "data/secubot.db"
DEFAULT_CHANGELOG_REPO = "seqre/secubot"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class GitHubSettings:
    """GitHub issue mirroring configuration."""

    token: str = ""
    repo: str = ""
    default_labels: tuple[str, ...] = ()
    allowed_channels: frozenset[int] = frozenset()
    channel_map: Mapping[int, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PingSettings:
    """Ping Cannon timing and mailbox size."""

    timeout_seconds: float = 600.0
    tick_seconds: float = 1.0
    mailbox_size: int = 32


@dataclass(frozen=True)
class Settings:
    discord_token: str
    database_path: str = DEFAULT_DATABASE_PATH
    log_level: str = "INFO"
    guild_ids: tuple[int, ...] = ()
    enabled_commands: frozenset[str] = ALL_COMMANDS
    message_content: bool = False
    todo_reminder_days: int = 5
    changelog_repo: str = DEFAULT_CHANGELOG_REPO
    github: GitHubSettings = field(default_factory=GitHubSettings)
    ping: PingSettings = field(default_factory=PingSettings)

    def redacted(self) -> Settings:
        """Return a copy safe to log (tokens replaced)."""
        github = dataclasses.replace(
            self.github, token="<REDACTED>" if self.github.token else ""
        )
        return dataclasses.replace(self, discord_token="<REDACTED>", github=github)

    def is_enabled(self, command: str) -> bool:
        return command in self.enabled_commands


# ---------------------------------------------------------------------------
# Value parsers
# ---------------------------------------------------------------------------


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def parse_int(name: str, raw: str, *, minimum: int | None = None) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if minimum is not None and value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def parse_id_list(name: str, raw: str) -> tuple[int, ...]:
    """Parse ``"1,2,3"`` into ``(1, 2, 3)``."""
    return tuple(parse_int(name, part, minimum=0) for part in _split(raw))


def parse_channel_map(name: str, raw: str) -> dict[int, str]:
    """Parse ``"123=owner/repo,456=owner/other"`` into a channel -> repo dict."""
    mapping: dict[int, str] = {}
    for pair in _split(raw):
        channel, sep, repo = pair.partition("=")
        repo = repo.strip()
        if not sep or "/" not in repo:
            raise ConfigError(f"{name} entries must look like channel=owner/repo, got {pair!r}")
        mapping[parse_int(name, channel, minimum=0)] = repo
    return mapping


def parse_commands(name: str, raw: str) -> frozenset[str]:
    names = frozenset(part.lower() for part in _split(raw))
    unknown = names - ALL_COMMANDS
    if unknown:
        raise ConfigError(f"{name} contains unknown commands: {', '.join(sorted(unknown))}")
    return names


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from the environment.

    When ``env`` is None the process environment is used after loading
    ``.env``; tests pass a plain dict instead.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    token = env.get("DISCORD_BOT_TOKEN", "")
    if not token:
        raise ConfigError("DISCORD_BOT_TOKEN is required")

    github = GitHubSettings(
        token=env.get("GITHUB_TOKEN", ""),
        repo=env.get("GITHUB_REPO", "").strip(),
        default_labels=tuple(_split(env.get("GITHUB_DEFAULT_LABELS", ""))),
        allowed_channels=frozenset(
            parse_id_list("GITHUB_ALLOWED_CHANNELS", env.get("GITHUB_ALLOWED_CHANNELS", ""))
        ),
        channel_map=parse_channel_map("GITHUB_CHANNEL_MAP", env.get("GITHUB_CHANNEL_MAP", "")),
    )

    ping = PingSettings(
        timeout_seconds=parse_float(
            "PING_TIMEOUT_SECONDS", env.get("PING_TIMEOUT_SECONDS", "600")
        ),
        tick_seconds=parse_float("PING_TICK_SECONDS", env.get("PING_TICK_SECONDS", "1")),
        mailbox_size=parse_int("PING_MAILBOX_SIZE", env.get("PING_MAILBOX_SIZE", "32"), minimum=1),
    )

    raw_commands = env.get("ENABLED_COMMANDS", "")
    enabled = parse_commands("ENABLED_COMMANDS", raw_commands) if raw_commands else ALL_COMMANDS

    settings = Settings(
        discord_token=token,
        database_path=env.get("DATABASE_PATH", "") or DEFAULT_DATABASE_PATH,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
        guild_ids=parse_id_list("GUILD_IDS", env.get("GUILD_IDS", "")),
        enabled_commands=enabled,
        message_content=parse_bool(
            "MESSAGE_CONTENT_INTENT", env.get("MESSAGE_CONTENT_INTENT", "false")
        ),
        todo_reminder_days=parse_int(
            "TODO_REMINDER_DAYS", env.get("TODO_REMINDER_DAYS", "5"), minimum=0
        ),
        changelog_repo=env.get("CHANGELOG_REPO", "") or DEFAULT_CHANGELOG_REPO,
        github=github,
        ping=ping,
    )
    logger.info("Parsed configuration: %r", settings.redacted())
    return settings
