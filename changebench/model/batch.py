from dataclasses import dataclass, field
from typing import Any

from .change_event import ChangeEvent


@dataclass
class Batch:
    sequence: int
    events: list[ChangeEvent] = field(default_factory=list)

    @property
    def keys(self) -> list[Any]:
        return [event.document_key for event in self.events]

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
