"""Bounded hand-over of search results from the collector to the display."""

import asyncio

from ..errors import ChannelError
from ..github_client.models import Issue


class ChannelClosed(Exception):
    """The sending side finished and every buffered record was received."""


_END_OF_STREAM = None


class IssueChannel:
    """Bounded multi-producer, single-consumer queue of ``Issue`` records.

    Producers call ``send``. The collector calls ``close_sender`` once when all
    producers are done, and the consumer sees ``ChannelClosed`` after the last
    record. Once the consumer calls ``close_receiver`` any further ``send``
    raises ``ChannelError``.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("Channel capacity must be at least 1")
        self.capacity = capacity
        self._queue: asyncio.Queue[Issue | None] = asyncio.Queue(maxsize=capacity)
        self._sender_closed = False
        self._receiver_closed = False
        self._ended = False

    @property
    def receiver_closed(self) -> bool:
        return self._receiver_closed

    async def send(self, issue: Issue) -> None:
        """Queue ``issue``, waiting while the channel is full.

        Raises:
            ChannelError: If the receiver is gone or the sender was closed
        """
        if self._receiver_closed:
            raise ChannelError(
                f"Unable to send issue #{issue.number}: receiver is closed"
            )
        if self._sender_closed:
            raise ChannelError("Unable to send on a closed channel")
        await self._queue.put(issue)

    async def close_sender(self) -> None:
        """Signal end of stream. Safe to call more than once."""
        if self._sender_closed:
            return
        self._sender_closed = True
        if not self._receiver_closed:
            await self._queue.put(_END_OF_STREAM)

    def close_receiver(self) -> None:
        """Stop receiving and drop anything still buffered.

        Draining the queue wakes producers blocked on a full channel. Their
        next ``send`` fails.
        """
        self._receiver_closed = True
        while not self._queue.empty():
            self._queue.get_nowait()

    async def receive(self, timeout: float | None = None) -> Issue:
        """Wait for the next record.

        Raises:
            ChannelClosed: When the stream has ended
            asyncio.TimeoutError: If nothing arrived within ``timeout`` seconds
        """
        if self._receiver_closed or self._ended:
            raise ChannelClosed()
        item = await asyncio.wait_for(self._queue.get(), timeout)
        if item is _END_OF_STREAM:
            self._ended = True
            raise ChannelClosed()
        return item
