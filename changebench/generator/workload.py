import asyncio
import logging
import random
import string
from typing import Iterator

from ..components.config_parser import GeneratorParams
from ..components.logs import configure_logging
from ..components.metrics import GENERATOR_OPERATIONS
from ..store import MongoStore

configure_logging()
logger = logging.getLogger(__name__)

PAYLOAD_ALPHABET = string.ascii_letters + string.digits


def generate_payload(size_kb: int) -> str:
    return "".join(random.choices(PAYLOAD_ALPHABET, k=size_kb * 1024))


def seed_documents(num_docs: int, payload: str, chunk_size: int) -> Iterator[list[dict]]:
    """
    Yield the seed documents in chunks of at most `chunk_size`.
    """
    for first in range(0, num_docs, chunk_size):
        last = min(first + chunk_size, num_docs)
        yield [{"docId": i, "payload": payload, "version": 0} for i in range(first, last)]


class WorkloadGenerator:
    """
    Produces the two phases watched by the consumer: a bulk seeding of
    `num_docs` documents, then one update per document.
    """

    def __init__(self, store: MongoStore, params: GeneratorParams):
        self.store = store
        self.params = params

    async def seed(self, num_docs: int, doc_size: int) -> int:
        logger.info("Seeding phase started", {"num_docs": num_docs, "doc_size_kb": doc_size})
        collection = self.store.collection

        await collection.drop()
        logger.info("Dropped old collection")

        payload = generate_payload(doc_size)
        inserted = 0
        for chunk in seed_documents(num_docs, payload, self.params.insert_chunk_size):
            await collection.insert_many(chunk, ordered=False)
            inserted += len(chunk)
            GENERATOR_OPERATIONS.labels("seeding").inc(len(chunk))

        logger.info("Seeding phase complete", {"inserted": inserted})
        return inserted

    async def update(self, num_docs: int) -> int:
        logger.info("Update phase started", {"num_docs": num_docs})
        collection = self.store.collection
        slots = asyncio.Semaphore(self.params.update_concurrency)

        async def update_one(doc_id: int) -> int:
            async with slots:
                result = await collection.update_one({"docId": doc_id}, {"$set": {"version": 1}})
            GENERATOR_OPERATIONS.labels("update").inc()
            return result.modified_count

        modified = sum(await asyncio.gather(*[update_one(i) for i in range(num_docs)]))

        logger.info("Update phase complete", {"modified": modified})
        return modified

    async def run(self, num_docs: int, doc_size: int):
        await self.seed(num_docs, doc_size)
        await self.update(num_docs)
