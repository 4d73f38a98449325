import asyncio
from typing import Any, Iterable, Optional

from changebench.model import FullDocumentMode
from changebench.store import StoreConnectionError


def change(operation: str, key: Any = None, document: Optional[dict] = None) -> dict:
    raw = {"operationType": operation}
    if key is not None:
        raw["documentKey"] = {"_id": key}
    if document is not None:
        raw["fullDocument"] = document
    return raw


def updates(*keys) -> list[dict]:
    return [change("update", key, {"_id": key, "version": 1}) for key in keys]


def inserts(*keys) -> list[dict]:
    return [change("insert", key, {"_id": key, "version": 0}) for key in keys]


class FakeClock:
    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeStream:
    """
    Change stream replaying a list of raw changes, then either blocking
    forever, ending, or failing.
    """

    def __init__(
        self,
        changes: Iterable[dict],
        end: bool = False,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.changes = list(changes)
        self.end = end
        self.error = error
        self.delay = delay
        self.closed = 0

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for raw in self.changes:
            if self.delay:
                await asyncio.sleep(self.delay)
            yield raw

        if self.error is not None:
            raise self.error
        if not self.end:
            await asyncio.Event().wait()

    async def close(self):
        self.closed += 1


class FakeStore:
    def __init__(
        self,
        stream: Optional[FakeStream] = None,
        fail_connect: bool = False,
        fail_lookup: bool = False,
        lookup_delay: float = 0.0,
    ):
        self.stream = stream or FakeStream([])
        self.fail_connect = fail_connect
        self.fail_lookup = fail_lookup
        self.lookup_delay = lookup_delay
        self.lookups: list[list] = []
        self.watched_mode: Optional[FullDocumentMode] = None
        self.connected = False
        self.closed = 0

    async def connect(self):
        if self.fail_connect:
            raise StoreConnectionError("store unreachable")
        self.connected = True

    async def watch(self, mode: FullDocumentMode) -> FakeStream:
        self.watched_mode = mode
        return self.stream

    async def find_by_keys(self, keys) -> list[dict]:
        keys = list(keys)
        self.lookups.append(keys)
        if self.lookup_delay:
            await asyncio.sleep(self.lookup_delay)
        if self.fail_lookup:
            raise RuntimeError("lookup failed")
        return [{"_id": key, "version": 1} for key in keys]

    async def close(self):
        self.closed += 1
