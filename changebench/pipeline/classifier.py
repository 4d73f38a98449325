import logging
from enum import Enum
from typing import Iterable

from ..components.logs import configure_logging
from ..model import ChangeEvent, OperationKind
from .lifecycle import LifecycleController

configure_logging()
logger = logging.getLogger(__name__)


class Verdict(Enum):
    Seeding = "seeding"
    FirstMeasured = "first_measured"
    Measured = "measured"
    Ignored = "ignored"
    Dropped = "dropped"

    @property
    def is_measured(self):
        return self in (Verdict.FirstMeasured, Verdict.Measured)


class PhaseClassifier:
    """
    Sorts events into bulk-load noise and measured workload, and drives the
    lifecycle timers accordingly.
    """

    def __init__(
        self,
        lifecycle: LifecycleController,
        measured: Iterable[OperationKind] = (OperationKind.Update,),
    ):
        self.lifecycle = lifecycle
        self.measured = frozenset(OperationKind(kind) for kind in measured)

    def is_measured(self, event: ChangeEvent) -> bool:
        return event.operation in self.measured

    def classify(self, event: ChangeEvent) -> Verdict:
        phase = self.lifecycle.phase

        if not phase.accepts_events:
            return Verdict.Dropped

        measured = self.is_measured(event)

        if phase.is_seeding:
            if not measured:
                self.lifecycle.touch_seeding()
                return Verdict.Seeding

            self.lifecycle.enter_measuring()
            logger.info("Measured phase detected", {"operation": event.operation.value})
            return Verdict.FirstMeasured

        # once measuring, only the idle timer governs the lifecycle
        if not measured:
            return Verdict.Ignored

        self.lifecycle.touch_idle()
        return Verdict.Measured
