from .base_classes import ExplicitParams
from .consumer import ConsumerParams
from .generator import GeneratorParams
from .metrics import MetricsParams
from .parameters import Parameters
from .store import StoreParams

__all__ = [
    "ExplicitParams",
    "Parameters",
    "StoreParams",
    "ConsumerParams",
    "GeneratorParams",
    "MetricsParams",
]
