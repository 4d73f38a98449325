import asyncio
import logging
from typing import Any, AsyncIterator, Optional

from ..components.logs import configure_logging
from ..components.metrics import EVENTS_RECEIVED
from ..model import ChangeEvent
from .errors import FeedClosedError, FeedError

configure_logging()
logger = logging.getLogger(__name__)

_END = object()


class ChangeFeed:
    """
    Channel between the change stream and the consumer loop.

    A reader task pulls raw changes from the stream, converts them to
    `ChangeEvent`s and puts them on a bounded queue in feed order. The end of
    the stream and transport failures travel through the same queue, after
    every event read before them.
    """

    def __init__(self, stream: AsyncIterator[dict], queue_size: int = 0):
        self.stream = stream
        self.queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=queue_size)
        self._reader: Optional[asyncio.Task] = None
        self._last_error: Optional[Exception] = None
        self.closed = False

    def start(self):
        if self._reader is None:
            self._reader = asyncio.create_task(self._pump())

    async def _pump(self):
        try:
            async for change in self.stream:
                event = ChangeEvent.from_change(change)
                EVENTS_RECEIVED.labels(event.operation.value).inc()
                await self.queue.put(event)
        except Exception as err:
            self._last_error = err
            await self.queue.put(FeedError(f"Change feed failed: {err}"))
        else:
            await self.queue.put(_END)

    async def get(self, timeout: Optional[float] = None) -> ChangeEvent:
        """
        Wait for the next event.

        Raises:
            asyncio.TimeoutError: if nothing arrived within `timeout` seconds.
            FeedClosedError: at the end of the feed.
            FeedError: when the underlying transport failed.
        """
        if self.closed:
            raise FeedClosedError("Change feed is closed")

        return self._unwrap(await asyncio.wait_for(self.queue.get(), timeout))

    def get_nowait(self) -> ChangeEvent:
        """
        Return an event that already arrived.

        Raises:
            asyncio.QueueEmpty: if nothing is waiting.
            FeedClosedError, FeedError: as `get`.
        """
        if self.closed:
            raise FeedClosedError("Change feed is closed")

        return self._unwrap(self.queue.get_nowait())

    def _unwrap(self, item: Any) -> ChangeEvent:
        if item is _END:
            raise FeedClosedError("Change feed ended")
        if isinstance(item, FeedError):
            raise item from self._last_error
        return item

    async def close(self):
        if self.closed:
            return
        self.closed = True

        if self._reader is not None and not self._reader.done():
            self._reader.cancel()
            await asyncio.gather(self._reader, return_exceptions=True)

        close = getattr(self.stream, "close", None) or getattr(self.stream, "aclose", None)
        if close is not None:
            try:
                await close()
            except Exception as err:
                logger.warning("Error while closing the change stream", {"error": str(err)})

        logger.debug("Change feed closed")
