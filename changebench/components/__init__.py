from . import config_parser, metrics
from .asyncloop import AsyncLoop
from .singleton import Singleton

__all__ = [
    "AsyncLoop",
    "Singleton",
    "config_parser",
    "metrics",
]
