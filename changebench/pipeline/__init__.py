from .aggregator import MetricsAggregator, MetricsSnapshot, MetricsState
from .batcher import Batcher
from .classifier import PhaseClassifier, Verdict
from .consumer import Consumer, RunOutcome
from .lifecycle import LifecycleController, PhaseTransitionError
from .processor import BatchProcessor, BatchResult, EmbeddedProcessor, LookupProcessor
from .report import render_report

__all__ = [
    "Batcher",
    "BatchProcessor",
    "BatchResult",
    "Consumer",
    "EmbeddedProcessor",
    "LifecycleController",
    "LookupProcessor",
    "MetricsAggregator",
    "MetricsSnapshot",
    "MetricsState",
    "PhaseClassifier",
    "PhaseTransitionError",
    "RunOutcome",
    "Verdict",
    "render_report",
]
