"""
Prometheus metrics exported by the consumer and the generator.

Consumer:
- EVENTS_RECEIVED: change events read from the feed, labeled by operation
- EVENTS_PROCESSED: measured events handed to the processor
- BATCHES: processed batches, labeled by status (ok, failed)
- BATCH_LATENCY: wall-clock duration of one batch of work
- BUFFERED_EVENTS: events waiting in the current partial batch
- IN_FLIGHT_BATCHES: batches currently being processed
- PHASE: current pipeline phase (0=seeding, 1=measuring, 2=finalizing, 3=terminated)
- THROUGHPUT: throughput of the last finalized run

Generator:
- GENERATOR_OPERATIONS: store writes issued, labeled by phase (seeding, update)
"""

from prometheus_client import Counter, Gauge, Histogram

EVENTS_RECEIVED = Counter(
    "cb_events_received_total", "Change events read from the feed", ["operation"]
)
EVENTS_PROCESSED = Counter("cb_events_processed_total", "Measured events processed")
BATCHES = Counter("cb_batches_total", "Processed batches", ["status"])
BATCH_LATENCY = Histogram(
    "cb_batch_latency_seconds",
    "Batch processing latency",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0),
)
BUFFERED_EVENTS = Gauge("cb_buffered_events", "Events in the current partial batch")
IN_FLIGHT_BATCHES = Gauge("cb_in_flight_batches", "Batches currently processed")
PHASE = Gauge("cb_phase", "Current pipeline phase")
THROUGHPUT = Gauge("cb_throughput", "Measured throughput (events/sec)")

GENERATOR_OPERATIONS = Counter(
    "cb_generator_operations_total", "Store writes issued by the generator", ["phase"]
)
