from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class GeneratorParams(ExplicitParams):
    insert_chunk_size: int = 1000
    update_concurrency: int = 100
