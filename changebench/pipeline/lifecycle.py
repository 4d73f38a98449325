import logging
import math
import time
from typing import Callable, Optional

from ..components.logs import configure_logging
from ..components.metrics import PHASE
from ..model import Phase

configure_logging()
logger = logging.getLogger(__name__)


class PhaseTransitionError(RuntimeError):
    pass


class LifecycleController:
    """
    Owns the run phase and its two deadlines.

    Deadlines are absolute values on a monotonic clock, recomputed on every
    qualifying event. At most one of them is armed at any time: the seeding
    deadline while `Seeding`, the idle deadline while `Measuring`.
    """

    def __init__(
        self,
        seeding_timeout: float,
        idle_timeout: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.seeding_timeout = seeding_timeout
        self.idle_timeout = idle_timeout
        self.clock = clock

        self.phase = Phase.Seeding
        self.seeding_deadline: Optional[float] = None
        self.idle_deadline: Optional[float] = None
        self.measuring_since: Optional[float] = None

        PHASE.set(self.phase.value)

    def _advance(self, target: Phase):
        if not self.phase.can_advance_to(target):
            raise PhaseTransitionError(f"Cannot go from {self.phase.name} to {target.name}")

        logger.debug("Phase transition", {"from": self.phase.name, "to": target.name})
        self.phase = target
        PHASE.set(target.value)

    def start(self):
        """
        Arm the seeding deadline. Called once, when the feed is open.
        """
        if self.phase.is_seeding:
            self.seeding_deadline = self.clock() + self.seeding_timeout

    def touch_seeding(self):
        if self.phase.is_seeding:
            self.seeding_deadline = self.clock() + self.seeding_timeout

    def enter_measuring(self) -> float:
        """
        Leave `Seeding` for good and arm the idle deadline.

        Returns:
            float: the clock value at which measurement started.
        """
        self._advance(Phase.Measuring)
        now = self.clock()

        self.seeding_deadline = None
        self.idle_deadline = now + self.idle_timeout
        self.measuring_since = now
        return now

    def touch_idle(self):
        if self.phase.is_measuring:
            self.idle_deadline = self.clock() + self.idle_timeout

    @property
    def deadline(self) -> Optional[float]:
        if self.phase.is_seeding:
            return self.seeding_deadline
        if self.phase.is_measuring:
            return self.idle_deadline
        return None

    def remaining(self) -> float:
        """
        Seconds until the active deadline expires, `math.inf` when none is armed.
        """
        deadline = self.deadline
        if deadline is None:
            return math.inf
        return max(0.0, deadline - self.clock())

    def expired(self) -> bool:
        deadline = self.deadline
        return deadline is not None and self.clock() >= deadline

    def finalize(self):
        """
        Stop the timers. Only the first call has an effect.
        """
        if self.phase.is_finalizing or self.phase.is_terminated:
            return

        self._advance(Phase.Finalizing)
        self.seeding_deadline = None
        self.idle_deadline = None

    def terminate(self):
        if self.phase.is_terminated:
            return

        self._advance(Phase.Terminated)
        self.seeding_deadline = None
        self.idle_deadline = None
