import asyncio
import inspect
import logging
from signal import SIGINT, SIGTERM
from typing import Any, Callable, Coroutine, Optional

from .logs import configure_logging
from .singleton import Singleton

configure_logging()
logger = logging.getLogger(__name__)


class AsyncLoop(metaclass=Singleton):
    def __init__(self):
        self.loop = asyncio.new_event_loop()
        self.tasks: set[asyncio.Task] = set()
        self.interrupted = False

        self.loop.add_signal_handler(SIGINT, self.stop)
        self.loop.add_signal_handler(SIGTERM, self.stop)

    @classmethod
    def run(
        cls,
        process: Callable[[], Coroutine[Any, Any, Any]],
        stop_callback: Callable,
        on_interrupt: Optional[Any] = None,
    ) -> Any:
        """
        Run an async process to completion with guaranteed cleanup.

        The process runs as a task registered in the loop's task set, so a
        SIGINT or SIGTERM cancels it. Whatever the exit path (normal return,
        exception or cancellation), `stop_callback` is called afterwards. It
        may be sync or async.

        Args:
            process: Async callable to run (e.g. consumer.start)
            stop_callback: Cleanup function called on every exit path
            on_interrupt: Value returned when the process got cancelled

        Returns:
            The process result, or `on_interrupt` if it was cancelled.
        """
        instance = cls()
        result = on_interrupt
        try:
            task = instance.loop.create_task(process())
            instance.tasks.add(task)
            task.add_done_callback(instance.tasks.discard)
            result = instance.loop.run_until_complete(task)
        except asyncio.CancelledError:
            logger.error("Stopping the instance")
        finally:
            if inspect.iscoroutinefunction(stop_callback):
                instance.loop.run_until_complete(stop_callback())
            else:
                stop_callback()
            cls.stop()

        return result

    @classmethod
    def stop(cls):
        instance = cls()
        for task in list(instance.tasks):
            if not task.done():
                instance.interrupted = True
                task.cancel()
