"""Strip tracking parameters from URLs posted in chat."""

from __future__ import annotations

import re
from urllib.parse import unquote_plus, urlsplit, urlunsplit

from .trackers import TRACKERS

URL_PATTERN = re.compile(r"https?://\S*")


def clean_url(url: str) -> str:
    """Return ``url`` without tracker query parameters.

    Remaining parameters are kept byte-for-byte and in order; only the
    decoded key is compared against the tracker list.  When nothing remains
    the ``?`` is dropped as well.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    segments = parts.query.split("&")
    kept = [s for s in segments if unquote_plus(s.partition("=")[0]) not in TRACKERS]
    if len(kept) == len(segments):
        return url
    return urlunsplit(parts._replace(query="&".join(kept)))


def clean_urls(content: str) -> list[str]:
    """Find URLs in ``content`` and return the cleaned form of those that changed."""
    cleaned: list[str] = []
    for match in URL_PATTERN.finditer(content):
        url = match.group(0)
        clean = clean_url(url)
        if clean != url:
            cleaned.append(clean)
    return cleaned


def format_message(urls: list[str]) -> str:
    """Render sanitized URLs as a reply. Empty input gives an empty string."""
    if not urls:
        return ""
    lines = ["**Sanitized URLs**"]
    lines.extend(f" - {url}" for url in urls)
    return "\n".join(lines)


__all__ = ["TRACKERS", "URL_PATTERN", "clean_url", "clean_urls", "format_message"]
