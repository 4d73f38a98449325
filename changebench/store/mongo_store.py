import logging
from typing import Any, Iterable, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.change_stream import AsyncChangeStream
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from ..components.config_parser import StoreParams
from ..components.logs import configure_logging
from ..model import FullDocumentMode
from .errors import StoreConnectionError

configure_logging()
logger = logging.getLogger(__name__)


class MongoStore:
    """
    Connection to the watched collection. The client is created on `connect`
    so that it binds to the running event loop.
    """

    def __init__(self, params: StoreParams):
        self.params = params
        self.client: Optional[AsyncMongoClient] = None
        self.closed = False

    @property
    def connected(self) -> bool:
        return self.client is not None and not self.closed

    @property
    def collection(self) -> AsyncCollection:
        if not self.connected:
            raise StoreConnectionError("Store is not connected")
        return self.client[self.params.database][self.params.collection]

    async def connect(self):
        client = AsyncMongoClient(
            self.params.uri, serverSelectionTimeoutMS=self.params.server_selection_timeout_ms
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as err:
            await client.close()
            raise StoreConnectionError(f"Could not connect to {self.params.uri}: {err}") from err

        self.client = client
        logger.info(
            "Connected to store",
            {"database": self.params.database, "collection": self.params.collection},
        )

    async def watch(self, mode: FullDocumentMode) -> AsyncChangeStream:
        try:
            return await self.collection.watch(
                [],
                full_document=mode.watch_option,
                max_await_time_ms=self.params.max_await_time_ms,
            )
        except PyMongoError as err:
            raise StoreConnectionError(f"Could not open the change stream: {err}") from err

    async def find_by_keys(self, keys: Iterable[Any]) -> list[dict]:
        """
        Resolve the current documents for the given `_id` keys. Documents
        deleted since the event was emitted are absent from the result.
        """
        ids = [key["_id"] if isinstance(key, dict) and "_id" in key else key for key in keys]
        cursor = self.collection.find({"_id": {"$in": ids}})
        return await cursor.to_list()

    async def close(self):
        if self.client is None or self.closed:
            return

        self.closed = True
        await self.client.close()
        logger.info("Disconnected from store")
