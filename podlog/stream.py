"""
Fan-in stream of log entries.

Many producers (one per pod/container being tailed) send entries into a
single LogStream and one consumer reads them back. A producer signals that
its own sub-stream is done by sending the end-of-stream marker; closing the
stream is a separate operation that ends it for every producer.
"""

import asyncio
import logging

from .models import END_OF_STREAM, StreamItem

logger = logging.getLogger(__name__)


class StreamClosedError(RuntimeError):
    """Raised when sending on a closed stream or receiving from a drained one."""


class LogStream:
    """Asyncio conduit carrying log entries from producers to a consumer."""

    def __init__(self, maxsize: int = 0):
        """
        Initialize the stream.

        Args:
            maxsize: Maximum number of buffered items; 0 means unbounded
        """
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        """Number of items waiting to be received."""
        return self._queue.qsize()

    async def send(self, item: StreamItem) -> None:
        """
        Send an item, waiting for room when the stream is bounded.

        Raises:
            StreamClosedError: If the stream has been closed
        """
        if self.closed:
            raise StreamClosedError("send on closed log stream")
        await self._queue.put(item)

    def send_nowait(self, item: StreamItem) -> None:
        """
        Send an item without waiting.

        Raises:
            StreamClosedError: If the stream has been closed
            asyncio.QueueFull: If a bounded stream has no room
        """
        if self.closed:
            raise StreamClosedError("send on closed log stream")
        self._queue.put_nowait(item)

    async def send_eof(self) -> None:
        """Mark the end of the caller's sub-stream without closing the stream."""
        await self.send(END_OF_STREAM)

    def close(self) -> None:
        """Close the stream. Items already sent can still be received."""
        if not self.closed:
            self._closed.set()
            logger.debug(f"Log stream closed with {self.qsize()} pending items")

    async def receive(self) -> StreamItem:
        """
        Receive the next item, waiting until one is available.

        Returns:
            StreamItem: A log entry or the end-of-stream marker

        Raises:
            StreamClosedError: If the stream is closed and fully drained
        """
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()
            if self.closed:
                raise StreamClosedError("log stream closed")

            getter = asyncio.ensure_future(self._queue.get())
            closer = asyncio.ensure_future(self._closed.wait())
            try:
                done, _ = await asyncio.wait(
                    {getter, closer}, return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                closer.cancel()
                if not getter.done():
                    getter.cancel()

            if getter in done:
                return getter.result()

    def __aiter__(self):
        return self

    async def __anext__(self) -> StreamItem:
        try:
            return await self.receive()
        except StreamClosedError:
            raise StopAsyncIteration
