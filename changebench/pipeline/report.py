from ..model import Scenario
from .aggregator import MetricsSnapshot

START_MARKER = "[CONSUMER] --- FINAL RESULTS ---"
END_MARKER = "--- [CONSUMER] END ---"


def render_report(scenario: Scenario, snapshot: MetricsSnapshot) -> list[str]:
    return [
        START_MARKER,
        f"Scenario: {scenario}",
        f"Total Events Processed: {snapshot.processed_events}",
        f"Total Processing Time: {snapshot.elapsed:.2f} sec",
        f"M1 - Throughput: {snapshot.throughput:.2f} ops/sec",
        f"M2 - Avg. Batch Latency: {snapshot.average_batch_latency_ms:.2f} ms",
        f"Batches: {snapshot.batch_count} ({snapshot.failed_batches} failed)",
        END_MARKER,
    ]
