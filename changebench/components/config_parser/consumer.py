from dataclasses import dataclass, field

from ...model import OperationKind
from .base_classes import ExplicitParams

OPERATION_NAMES = {kind.value for kind in OperationKind if kind is not OperationKind.Other}


@dataclass(init=False)
class ConsumerParams(ExplicitParams):
    seeding_timeout: float = 900.0
    idle_timeout: float = 30.0
    measured_operations: list = field(default_factory=lambda: ["update"])
    queue_size: int = 10_000
    max_concurrent_batches: int = 4

    def __init__(self, data=None):
        operations = (data or {}).get("measured_operations")
        if operations is not None and not isinstance(operations, list):
            raise ValueError(
                f"measured_operations must be a list of operation names, got {operations!r}"
            )

        self.measured_operations = ["update"]
        super().__init__(data)

        if self.seeding_timeout <= 0 or self.idle_timeout <= 0:
            raise ValueError("Timeouts must be strictly positive")
        if self.max_concurrent_batches < 1:
            raise ValueError("max_concurrent_batches must be at least 1")
        if not self.measured_operations:
            raise ValueError("At least one measured operation is required")

        unknown = [op for op in self.measured_operations if str(op).lower() not in OPERATION_NAMES]
        if unknown:
            raise ValueError(
                f"Unknown measured operations {unknown}, expected some of {sorted(OPERATION_NAMES)}"
            )
