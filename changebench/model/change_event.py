from dataclasses import dataclass
from typing import Any, Optional

from .operation import OperationKind


@dataclass(frozen=True)
class ChangeEvent:
    """
    One notification read from the change feed.
    """

    operation: OperationKind
    document_key: Any = None
    embedded_document: Optional[dict] = None

    @classmethod
    def from_change(cls, change: dict) -> "ChangeEvent":
        """
        Build an event from a raw change-stream document. `documentKey` is
        reduced to its `_id` when it holds nothing else.
        """
        key = change.get("documentKey")
        if isinstance(key, dict) and set(key) == {"_id"}:
            key = key["_id"]

        return cls(
            operation=OperationKind(change.get("operationType", "other")),
            document_key=key,
            embedded_document=change.get("fullDocument"),
        )
