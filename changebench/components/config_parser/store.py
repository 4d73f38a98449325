from dataclasses import dataclass

from .base_classes import ExplicitParams


@dataclass(init=False)
class StoreParams(ExplicitParams):
    uri: str = "mongodb://localhost:27017/?replicaSet=rs0"
    database: str = "testdb"
    collection: str = "testcoll"
    max_await_time_ms: int = 1000
    server_selection_timeout_ms: int = 5000
