"""PingWorker — the background loop behind the Ping Cannon.

Design:
- A single asyncio task owns the :class:`PingRegistry`.  Nothing else reads
  or writes it, so there is no per-entry locking.
- Command handlers talk to the worker only through a bounded mailbox
  (``asyncio.Queue``).  A full mailbox makes the sender wait until space
  frees up or the worker closes.
- Each tick: expire, notify expired channels, announce the rest, then apply
  at most one control message.  Applying one message per tick paces
  registry mutation to the tick rate.
- Outbound messages go through an injected ``send(channel_id, text)``
  coroutine.  Send failures are logged and never stop the loop.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable, Iterable

from .mentions import render_mentions
from .messages import Commence, PingMessage, Remove, Stop
from .registry import PingRegistry

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 600.0
DEFAULT_TICK_SECONDS = 1.0
DEFAULT_MAILBOX_SIZE = 32

EXHAUSTED_TEXT = "The Ping Cannon has been exhausted."

SendFunc = Callable[[int, str], Awaitable[object]]


class MailboxClosedError(RuntimeError):
    """Raised when a message is sent to a worker that has been closed."""


def announce_text(users: Iterable[int]) -> str:
    return f"./ping {render_mentions(users)}"


class PingWorker:
    """Owns the ping registry and runs the announce/expire loop.

    Args:
        send: Coroutine used for every outbound message.
        timeout_seconds: Lifetime of a channel's cannon, counted from the
            first ``Commence``.
        tick_seconds: Sleep between loop iterations.
        mailbox_size: Capacity of the control-message queue.
        clock: Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        send: SendFunc,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        mailbox_size: int = DEFAULT_MAILBOX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._send = send
        self.timeout_seconds = timeout_seconds
        self.tick_seconds = tick_seconds
        self._clock = clock
        self.registry = PingRegistry()
        self.mailbox: asyncio.Queue[PingMessage] = asyncio.Queue(maxsize=mailbox_size)
        self._task: asyncio.Task[None] | None = None
        self._closed = False
        self._closed_event = asyncio.Event()

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    async def send(self, message: PingMessage) -> None:
        """Enqueue a control message, waiting while the mailbox is full.

        Raises :class:`MailboxClosedError` if the worker is closed before or
        while waiting, and ``TypeError`` for anything that is not a control
        message.
        """
        if not isinstance(message, (Commence, Remove, Stop)):
            raise TypeError(f"Unknown ping message: {message!r}")
        if self._closed:
            raise MailboxClosedError("Ping worker is closed")
        try:
            self.mailbox.put_nowait(message)
        except asyncio.QueueFull:
            await self._put_or_close(message)

    async def _put_or_close(self, message: PingMessage) -> None:
        """Wait for mailbox space, giving up when the worker closes."""
        put = asyncio.ensure_future(self.mailbox.put(message))
        closed = asyncio.ensure_future(self._closed_event.wait())
        try:
            done, _ = await asyncio.wait({put, closed}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            closed.cancel()
            if not put.done():
                put.cancel()
        if put not in done and not put.done():
            raise MailboxClosedError("Ping worker closed while waiting for mailbox space")

    async def commence(self, channel: int, users: Iterable[int]) -> None:
        await self.send(Commence(channel=channel, users=frozenset(users)))

    async def remove(self, channel: int, users: Iterable[int]) -> None:
        await self.send(Remove(channel=channel, users=frozenset(users)))

    async def stop(self, channel: int) -> None:
        await self.send(Stop(channel=channel))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task[None]:
        """Spawn the loop on the running event loop. Idempotent."""
        if self._closed:
            raise MailboxClosedError("Ping worker is closed")
        if not self.is_running:
            self._task = asyncio.create_task(self.run(), name="secubot-ping-worker")
        assert self._task is not None
        return self._task

    async def close(self) -> None:
        """Refuse further messages, release waiting producers and cancel the loop."""
        self._closed = True
        self._closed_event.set()
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def run(self) -> None:
        """Tick forever."""
        logger.info(
            "Ping worker started (timeout=%ss, tick=%ss)", self.timeout_seconds, self.tick_seconds
        )
        while True:
            await self.tick()
            await asyncio.sleep(self.tick_seconds)

    # ------------------------------------------------------------------
    # Loop body
    # ------------------------------------------------------------------

    async def tick(self) -> None:
        """Run one loop iteration: expire, notify, announce, apply one message."""
        expired = self.registry.pop_expired(self._clock())
        for channel in expired:
            logger.info("Ping cannon in channel %d expired", channel)
            await self._safe_send(channel, EXHAUSTED_TEXT)

        for task in self.registry:
            if task.users:
                await self._safe_send(task.channel, announce_text(task.users))

        try:
            message = self.mailbox.get_nowait()
        except asyncio.QueueEmpty:
            return
        self.apply(message)
        self.mailbox.task_done()

    def apply(self, message: PingMessage) -> None:
        """Apply a control message to the registry."""
        if isinstance(message, Commence):
            task = self.registry.commence(
                message.channel,
                message.users,
                expires_at=self._clock() + self.timeout_seconds,
            )
            logger.debug(
                "Ping cannon in channel %d targets %d user(s)", task.channel, len(task.users)
            )
        elif isinstance(message, Remove):
            self.registry.remove(message.channel, message.users)
        elif isinstance(message, Stop):
            if self.registry.stop(message.channel):
                logger.info("Ping cannon in channel %d stopped", message.channel)
        else:
            raise TypeError(f"Unknown ping message: {message!r}")

    async def _safe_send(self, channel: int, text: str) -> None:
        try:
            await self._send(channel, text)
        except Exception:
            logger.warning("Ping worker: failed to send to channel %d", channel, exc_info=True)
