import asyncio

import pytest

from changebench.pipeline import MetricsAggregator


@pytest.fixture
def aggregator(fake_clock) -> MetricsAggregator:
    return MetricsAggregator(clock=fake_clock)


@pytest.mark.asyncio
async def test_snapshot_derives_throughput_and_average(aggregator: MetricsAggregator, fake_clock):
    aggregator.start_measurement()
    for size, latency in [(3, 0.1), (3, 0.2), (2, 0.6)]:
        await aggregator.record(size, latency)

    fake_clock.advance(4)
    snapshot = await aggregator.snapshot()

    assert snapshot.processed_events == 8
    assert snapshot.batch_count == 3
    assert snapshot.failed_batches == 0
    assert snapshot.elapsed == pytest.approx(4)
    assert snapshot.throughput == pytest.approx(2)
    assert snapshot.average_batch_latency == pytest.approx(0.3)
    assert snapshot.average_batch_latency_ms == pytest.approx(300)


@pytest.mark.asyncio
async def test_throughput_uses_elapsed_time_not_latencies(
    aggregator: MetricsAggregator, fake_clock
):
    aggregator.start_measurement()
    await aggregator.record(10, 0.01)

    snapshot = await aggregator.snapshot(end=fake_clock.now + 5)

    assert snapshot.throughput == pytest.approx(2)


@pytest.mark.asyncio
async def test_empty_snapshot(aggregator: MetricsAggregator):
    snapshot = await aggregator.snapshot()

    assert snapshot.processed_events == 0
    assert snapshot.batch_count == 0
    assert snapshot.elapsed == 0
    assert snapshot.throughput == 0
    assert snapshot.average_batch_latency == 0


@pytest.mark.asyncio
async def test_zero_elapsed_gives_zero_throughput(aggregator: MetricsAggregator, fake_clock):
    aggregator.start_measurement()
    await aggregator.record(5, 0.5)

    snapshot = await aggregator.snapshot(end=fake_clock.now)

    assert snapshot.throughput == 0
    assert snapshot.average_batch_latency == pytest.approx(0.5)


@pytest.mark.asyncio
async def test_failed_batches_are_counted(aggregator: MetricsAggregator):
    aggregator.start_measurement()
    await aggregator.record(3, 0.1)
    await aggregator.record(3, 0.3, failed=True)

    snapshot = await aggregator.snapshot()

    assert snapshot.processed_events == 6
    assert snapshot.batch_count == 2
    assert snapshot.failed_batches == 1
    assert snapshot.average_batch_latency == pytest.approx(0.2)


def test_measurement_start_is_set_once(aggregator: MetricsAggregator, fake_clock):
    aggregator.start_measurement(at=10.0)
    aggregator.start_measurement(at=20.0)

    assert aggregator.started
    assert aggregator._state.measurement_start == 10.0


@pytest.mark.asyncio
async def test_concurrent_records_are_not_lost(aggregator: MetricsAggregator):
    aggregator.start_measurement()

    async def record(i: int):
        await asyncio.sleep(0)
        await aggregator.record(2, 0.001)

    await asyncio.gather(*[record(i) for i in range(200)])
    snapshot = await aggregator.snapshot()

    assert snapshot.processed_events == 400
    assert snapshot.batch_count == 200
