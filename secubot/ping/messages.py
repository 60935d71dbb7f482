"""Control messages accepted by the Ping Worker mailbox."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Commence:
    """Start a cannon in ``channel`` or add ``users`` to a running one."""

    channel: int
    users: frozenset[int]


@dataclass(frozen=True)
class Remove:
    """Drop ``users`` from the cannon running in ``channel``."""

    channel: int
    users: frozenset[int]


@dataclass(frozen=True)
class Stop:
    """Stop the cannon in ``channel``."""

    channel: int


PingMessage = Commence | Remove | Stop
