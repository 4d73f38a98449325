from ..components.metrics import BUFFERED_EVENTS
from ..model import Batch, ChangeEvent


class Batcher:
    """
    Accumulates measured events into batches of at most `batch_size` events.

    Neither `accept` nor `drain` awaits, so on a single event loop both run
    atomically with respect to each other.
    """

    def __init__(self, batch_size: int):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")

        self.batch_size = batch_size
        self.flushed = 0
        self._events: list[ChangeEvent] = []

    def accept(self, event: ChangeEvent) -> bool:
        """
        Append an event to the current batch.

        Returns:
            bool: True if the batch is now full and must be drained.
        """
        self._events.append(event)
        BUFFERED_EVENTS.set(len(self._events))
        return self.full

    @property
    def full(self) -> bool:
        return len(self._events) >= self.batch_size

    @property
    def pending(self) -> int:
        return len(self._events)

    def drain(self) -> Batch:
        """
        Hand over the current content, possibly empty, and start a new batch.
        An empty batch does not consume a sequence number.
        """
        events, self._events = self._events, []
        batch = Batch(self.flushed, events)
        if events:
            self.flushed += 1

        BUFFERED_EVENTS.set(0)
        return batch
