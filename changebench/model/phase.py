from enum import Enum


class Phase(Enum):
    Seeding = 0
    Measuring = 1
    Finalizing = 2
    Terminated = 3

    @property
    def is_seeding(self):
        return self == Phase.Seeding

    @property
    def is_measuring(self):
        return self == Phase.Measuring

    @property
    def is_finalizing(self):
        return self == Phase.Finalizing

    @property
    def is_terminated(self):
        return self == Phase.Terminated

    @property
    def accepts_events(self):
        return self in (Phase.Seeding, Phase.Measuring)

    def can_advance_to(self, other: "Phase") -> bool:
        return other.value > self.value
