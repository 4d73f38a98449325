import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..components.logs import configure_logging
from ..components.metrics import BATCH_LATENCY, BATCHES, EVENTS_PROCESSED, THROUGHPUT

configure_logging()
logger = logging.getLogger(__name__)


@dataclass
class MetricsState:
    processed_event_count: int = 0
    total_batch_latency: float = 0.0
    batch_count: int = 0
    failed_batch_count: int = 0
    measurement_start: Optional[float] = None


@dataclass(frozen=True)
class MetricsSnapshot:
    processed_events: int
    batch_count: int
    failed_batches: int
    elapsed: float
    throughput: float  # events/sec over the measurement window
    average_batch_latency: float  # seconds

    @property
    def average_batch_latency_ms(self) -> float:
        return self.average_batch_latency * 1000


class MetricsAggregator:
    """
    Single aggregation point for the measured run.

    Throughput is computed over the wall-clock measurement window, never from
    summed batch latencies. The average latency only covers the time spent
    inside batches.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._state = MetricsState()
        self._lock = asyncio.Lock()

    @property
    def started(self) -> bool:
        return self._state.measurement_start is not None

    def start_measurement(self, at: Optional[float] = None):
        if self.started:
            logger.warning("Measurement already started, ignoring")
            return
        self._state.measurement_start = self.clock() if at is None else at

    async def record(self, batch_size: int, latency: float, failed: bool = False):
        async with self._lock:
            self._state.processed_event_count += batch_size
            self._state.total_batch_latency += latency
            self._state.batch_count += 1
            if failed:
                self._state.failed_batch_count += 1

        EVENTS_PROCESSED.inc(batch_size)
        BATCHES.labels("failed" if failed else "ok").inc()
        BATCH_LATENCY.observe(latency)

    async def snapshot(self, end: Optional[float] = None) -> MetricsSnapshot:
        """
        Derive the run metrics, measuring elapsed time up to `end` (now by default).
        """
        end = self.clock() if end is None else end

        async with self._lock:
            state = MetricsState(**vars(self._state))

        elapsed = 0.0
        if state.measurement_start is not None:
            elapsed = max(0.0, end - state.measurement_start)

        throughput = state.processed_event_count / elapsed if elapsed > 0 else 0.0
        average = state.total_batch_latency / state.batch_count if state.batch_count else 0.0

        THROUGHPUT.set(throughput)

        return MetricsSnapshot(
            processed_events=state.processed_event_count,
            batch_count=state.batch_count,
            failed_batches=state.failed_batch_count,
            elapsed=elapsed,
            throughput=throughput,
            average_batch_latency=average,
        )
