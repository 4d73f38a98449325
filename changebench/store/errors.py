class StoreConnectionError(Exception):
    """The store could not be reached."""


class FeedError(Exception):
    """The change feed failed mid-stream."""


class FeedClosedError(FeedError):
    """The change feed ended."""
