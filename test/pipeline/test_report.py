from changebench.model import FullDocumentMode, Scenario
from changebench.pipeline import MetricsSnapshot, render_report
from changebench.pipeline.report import END_MARKER, START_MARKER


def test_report_lines_in_order():
    snapshot = MetricsSnapshot(
        processed_events=5,
        batch_count=2,
        failed_batches=0,
        elapsed=2.5,
        throughput=2.0,
        average_batch_latency=0.0125,
    )

    lines = render_report(Scenario(FullDocumentMode.Default, 3), snapshot)

    assert lines == [
        START_MARKER,
        "Scenario: fullDocument=default, batchSize=3",
        "Total Events Processed: 5",
        "Total Processing Time: 2.50 sec",
        "M1 - Throughput: 2.00 ops/sec",
        "M2 - Avg. Batch Latency: 12.50 ms",
        "Batches: 2 (0 failed)",
        END_MARKER,
    ]
