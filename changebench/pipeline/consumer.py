import asyncio
import logging
import math
from enum import Enum
from typing import Optional

import click

from ..components.config_parser import ConsumerParams
from ..components.logs import configure_logging
from ..components.metrics import IN_FLIGHT_BATCHES
from ..model import Batch, ChangeEvent, OperationKind, Scenario
from ..store import ChangeFeed, FeedClosedError, FeedError, MongoStore, StoreConnectionError
from .aggregator import MetricsAggregator, MetricsSnapshot
from .batcher import Batcher
from .classifier import PhaseClassifier, Verdict
from .lifecycle import LifecycleController
from .processor import BatchProcessor
from .report import render_report

configure_logging()
logger = logging.getLogger(__name__)


class RunOutcome(Enum):
    Completed = "completed"
    TransportError = "transport_error"
    ConnectionError = "connection_error"
    SeedingTimeout = "seeding_timeout"
    Interrupted = "interrupted"

    @property
    def exit_code(self) -> int:
        return {
            RunOutcome.Completed: 0,
            RunOutcome.TransportError: 1,
            RunOutcome.ConnectionError: 1,
            RunOutcome.SeedingTimeout: 3,
            RunOutcome.Interrupted: 130,
        }[self]


class Consumer:
    def __init__(self, store: MongoStore, scenario: Scenario, params: ConsumerParams):
        """
        Create a consumer measuring one scenario against the given store.
        :param store: The store to watch, also used for keyed lookups.
        :param scenario: The full document mode and batch size of the run.
        :param params: Timeouts, measured operations and concurrency bounds.
        """
        self.store = store
        self.scenario = scenario
        self.params = params

        self.lifecycle = LifecycleController(params.seeding_timeout, params.idle_timeout)
        self.classifier = PhaseClassifier(
            self.lifecycle, [OperationKind(op) for op in params.measured_operations]
        )
        self.batcher = Batcher(scenario.batch_size)
        self.processor = BatchProcessor.for_mode(scenario.full_document, store)
        self.aggregator = MetricsAggregator(self.lifecycle.clock)

        self.feed: Optional[ChangeFeed] = None
        self.snapshot: Optional[MetricsSnapshot] = None

        self._in_flight: set[asyncio.Task] = set()
        self._slots = asyncio.Semaphore(params.max_concurrent_batches)
        self._released = False

    async def start(self) -> RunOutcome:
        try:
            await self.store.connect()
            stream = await self.store.watch(self.scenario.full_document)
        except StoreConnectionError as err:
            logger.error("Could not open the change feed", {"error": str(err)})
            await self.stop()
            return RunOutcome.ConnectionError

        return await self.run(ChangeFeed(stream, self.params.queue_size))

    async def run(self, feed: ChangeFeed) -> RunOutcome:
        """
        Consume the feed until the run completes or fails. The feed and the
        store are released on every exit path.
        """
        self.feed = feed
        feed.start()
        self.lifecycle.start()
        logger.info(
            "Waiting for events",
            {
                "scenario": str(self.scenario),
                "seeding_timeout": self.params.seeding_timeout,
                "idle_timeout": self.params.idle_timeout,
            },
        )

        try:
            return await self._consume(feed)
        except asyncio.CancelledError:
            logger.warning("Run interrupted", {"phase": self.lifecycle.phase.name})
            if self.lifecycle.phase.is_measuring:
                await self._finalize()
            raise
        finally:
            await self.stop()

    async def _consume(self, feed: ChangeFeed) -> RunOutcome:
        while True:
            try:
                if self.lifecycle.expired():
                    # events that arrived while ingestion was blocked still count
                    event = feed.get_nowait()
                else:
                    remaining = self.lifecycle.remaining()
                    event = await feed.get(None if math.isinf(remaining) else remaining)
            except asyncio.QueueEmpty:
                return await self._on_deadline()
            except asyncio.TimeoutError:
                continue
            except FeedClosedError:
                logger.error("Change feed ended", {"phase": self.lifecycle.phase.name})
                return await self._abort()
            except FeedError as err:
                logger.error(
                    "Change feed failed, not reconnecting",
                    {"phase": self.lifecycle.phase.name, "error": str(err)},
                )
                return await self._abort()

            await self._handle(event)

    async def _handle(self, event: ChangeEvent):
        verdict = self.classifier.classify(event)

        if verdict is Verdict.FirstMeasured:
            self.aggregator.start_measurement(self.lifecycle.measuring_since)
        if not verdict.is_measured:
            return

        if self.batcher.accept(event):
            await self._dispatch(self.batcher.drain())

    async def _dispatch(self, batch: Batch):
        """
        Start processing a batch without waiting for it. Tasks are created in
        arrival order; ingestion pauses while `max_concurrent_batches` are in
        flight.
        """
        await self._slots.acquire()
        IN_FLIGHT_BATCHES.inc()

        task = asyncio.create_task(self._process(batch))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _process(self, batch: Batch):
        try:
            result = await self.processor.process(batch)
            await self.aggregator.record(result.size, result.latency, result.failed)
        finally:
            self._slots.release()
            IN_FLIGHT_BATCHES.dec()

    async def _wait_in_flight(self):
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    async def _on_deadline(self) -> RunOutcome:
        if self.lifecycle.phase.is_seeding:
            logger.error(
                "No measured event before the seeding timeout, assuming the generator failed",
                {"seeding_timeout": self.params.seeding_timeout},
            )
            self.lifecycle.finalize()
            return RunOutcome.SeedingTimeout

        logger.info(
            "No new measured events for the idle window, finalizing",
            {"idle_timeout": self.params.idle_timeout},
        )
        await self._finalize()
        return RunOutcome.Completed

    async def _abort(self) -> RunOutcome:
        if self.lifecycle.phase.is_measuring:
            await self._finalize()
        else:
            self.lifecycle.finalize()
        return RunOutcome.TransportError

    async def _finalize(self):
        """
        Process the partial batch, wait for every batch in flight and emit the
        report.
        """
        end = self.lifecycle.clock()
        self.lifecycle.finalize()

        batch = self.batcher.drain()
        if len(batch):
            await self._dispatch(batch)
        await self._wait_in_flight()

        self.snapshot = await self.aggregator.snapshot(end)
        logger.info(
            "Run finalized",
            {
                "processed_events": self.snapshot.processed_events,
                "batches": self.snapshot.batch_count,
                "throughput": round(self.snapshot.throughput, 2),
            },
        )

        for line in render_report(self.scenario, self.snapshot):
            click.echo(line)

    async def stop(self):
        """
        Release the feed and the store. Only the first call has an effect.
        """
        if self._released:
            return
        self._released = True

        await self._wait_in_flight()

        if self.feed is not None:
            await self.feed.close()
        await self.store.close()

        self.lifecycle.finalize()
        self.lifecycle.terminate()
        logger.info("Consumer stopped")
