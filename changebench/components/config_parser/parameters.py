from dataclasses import dataclass

from .base_classes import ExplicitParams
from .consumer import ConsumerParams
from .generator import GeneratorParams
from .metrics import MetricsParams
from .store import StoreParams


@dataclass(init=False)
class Parameters(ExplicitParams):
    store: StoreParams
    consumer: ConsumerParams
    generator: GeneratorParams
    metrics: MetricsParams
