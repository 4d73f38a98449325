from dataclasses import dataclass

from .full_document_mode import FullDocumentMode


@dataclass(frozen=True)
class Scenario:
    full_document: FullDocumentMode
    batch_size: int

    def __post_init__(self):
        if not isinstance(self.full_document, FullDocumentMode):
            object.__setattr__(self, "full_document", FullDocumentMode(self.full_document))
        if not isinstance(self.batch_size, int) or self.batch_size < 1:
            raise ValueError(f"batch_size must be a positive integer, got {self.batch_size!r}")

    def __str__(self):
        return f"fullDocument={self.full_document.value}, batchSize={self.batch_size}"
