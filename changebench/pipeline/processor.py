import logging
import time
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Protocol

from ..components.logs import configure_logging
from ..model import Batch, FullDocumentMode

configure_logging()
logger = logging.getLogger(__name__)


class DocumentLookup(Protocol):
    async def find_by_keys(self, keys: Iterable[Any]) -> list[dict]: ...


@dataclass(frozen=True)
class BatchResult:
    sequence: int
    size: int
    latency: float
    documents: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class BatchProcessor:
    """
    Simulated unit of work for one batch. Subclasses implement `work`; the
    timing brackets exactly that call.

    A failing batch is logged and reported with the time elapsed until the
    failure; the exception never reaches the caller.
    """

    mode: FullDocumentMode

    async def work(self, batch: Batch) -> list[dict]:
        raise NotImplementedError

    async def process(self, batch: Batch) -> BatchResult:
        documents: list[dict] = []
        error = None

        start = time.perf_counter()
        try:
            documents = await self.work(batch)
        except Exception as err:
            error = str(err) or err.__class__.__name__
        latency = time.perf_counter() - start

        if error is not None:
            logger.error(
                "Batch processing failed",
                {"sequence": batch.sequence, "size": len(batch), "error": error},
            )

        return BatchResult(batch.sequence, len(batch), latency, len(documents), error)

    @classmethod
    def for_mode(cls, mode: FullDocumentMode, store: DocumentLookup) -> "BatchProcessor":
        if mode.embeds_documents:
            return EmbeddedProcessor()
        return LookupProcessor(store)


class LookupProcessor(BatchProcessor):
    """
    Events only carry their key: resolve the current documents with one
    keyed bulk lookup.
    """

    mode = FullDocumentMode.Default

    def __init__(self, store: DocumentLookup):
        self.store = store

    async def work(self, batch: Batch) -> list[dict]:
        if not len(batch):
            return []

        keys = batch.keys
        documents = await self.store.find_by_keys(keys)

        if len(documents) < len(keys):
            logger.debug(
                "Lookup resolved fewer documents than keys",
                {"sequence": batch.sequence, "keys": len(keys), "documents": len(documents)},
            )
        return documents


class EmbeddedProcessor(BatchProcessor):
    """
    Events carry their document: consume it in place, no store round-trip.
    """

    mode = FullDocumentMode.UpdateLookup

    async def work(self, batch: Batch) -> list[dict]:
        return [event.embedded_document for event in batch if event.embedded_document is not None]
