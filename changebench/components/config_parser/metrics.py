from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class MetricsParams(ExplicitParams):
    port: int = 8081
