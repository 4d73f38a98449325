from .change_feed import ChangeFeed
from .errors import FeedClosedError, FeedError, StoreConnectionError
from .mongo_store import MongoStore

__all__ = [
    "ChangeFeed",
    "FeedClosedError",
    "FeedError",
    "MongoStore",
    "StoreConnectionError",
]
