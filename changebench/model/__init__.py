from .batch import Batch
from .change_event import ChangeEvent
from .full_document_mode import FullDocumentMode
from .operation import OperationKind
from .phase import Phase
from .scenario import Scenario

__all__ = [
    "Batch",
    "ChangeEvent",
    "FullDocumentMode",
    "OperationKind",
    "Phase",
    "Scenario",
]
