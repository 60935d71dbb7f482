"""User-mention parsing and rendering.

Discord encodes a user mention as ``<@123>``; older clients and nickname
mentions use ``<@!123>``.  Both forms are accepted on input, output always
uses the plain form.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

MENTION_PATTERN = re.compile(r"<@!?(\d+)>")


def extract_user_ids(text: str) -> set[int]:
    """Return the set of user ids mentioned in ``text``.

    Anything that is not a mention token is ignored.
    """
    return {int(match) for match in MENTION_PATTERN.findall(text)}


def render_mentions(user_ids: Iterable[int]) -> str:
    """Render ids as space-separated mention tokens, in ascending id order."""
    return " ".join(f"<@{uid}>" for uid in sorted(user_ids))
