"""In-memory table of running ping cannons, one per channel.

The registry has no locking: exactly one :class:`~secubot.ping.worker.PingWorker`
owns it and every mutation happens on that worker's task.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass
class PingTask:
    """One channel's active cannon run."""

    channel: int
    expires_at: float
    users: set[int] = field(default_factory=set)

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at


class PingRegistry:
    """Mapping of channel id to :class:`PingTask`."""

    def __init__(self) -> None:
        self._tasks: dict[int, PingTask] = {}

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, channel: object) -> bool:
        return channel in self._tasks

    def __iter__(self) -> Iterator[PingTask]:
        return iter(list(self._tasks.values()))

    def get(self, channel: int) -> PingTask | None:
        return self._tasks.get(channel)

    def commence(self, channel: int, users: Iterable[int], expires_at: float) -> PingTask:
        """Create the channel's task, or merge ``users`` into the existing one.

        ``expires_at`` is only used on creation; a running task keeps its
        original deadline.
        """
        task = self._tasks.get(channel)
        if task is None:
            task = PingTask(channel=channel, expires_at=expires_at, users=set(users))
            self._tasks[channel] = task
        else:
            task.users.update(users)
        return task

    def remove(self, channel: int, users: Iterable[int]) -> PingTask | None:
        """Remove ``users`` from the channel's task.

        The task stays registered even when no users remain; it ends on
        ``stop`` or expiry.
        """
        task = self._tasks.get(channel)
        if task is not None:
            task.users.difference_update(users)
        return task

    def stop(self, channel: int) -> bool:
        """Delete the channel's task. Returns True if one existed."""
        return self._tasks.pop(channel, None) is not None

    def pop_expired(self, now: float) -> list[int]:
        """Delete every task whose deadline has passed and return their channels."""
        expired = [channel for channel, task in self._tasks.items() if task.is_expired(now)]
        for channel in expired:
            del self._tasks[channel]
        return expired
