# superfs/watchdog/debounce.py

"""
Per-directory throttling of change notifications
"""
import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Union

from ..fs.entry import Entry
from .events import ChangeEvent

logger = logging.getLogger(__name__)

WatchCallback = Callable[[Entry], Union[None, Awaitable[None]]]


class Throttle:
    """
    Leading-edge throttle keyed by string

    The first hit for a key passes and locks the key for quiet_period
    seconds; hits inside that window are dropped. The lock lapses on its own.
    """

    def __init__(self, quiet_period: float = 0.5,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize throttle

        Args:
            quiet_period: Seconds a key stays locked after a delivered hit
            clock: Monotonic time source
        """
        if quiet_period < 0:
            raise ValueError(f"quiet_period must be >= 0, got {quiet_period}")

        self.quiet_period = quiet_period
        self.clock = clock
        self.locked_until: Dict[str, float] = {}

        self.stats = {
            'total_events': 0,
            'delivered_events': 0,
            'dropped_events': 0,
        }

    def is_locked(self, key: str) -> bool:
        until = self.locked_until.get(key)
        return until is not None and self.clock() < until

    def try_acquire(self, key: str) -> bool:
        """
        Register a hit for key

        Returns:
            True if the hit should be delivered
        """
        self.stats['total_events'] += 1

        if self.is_locked(key):
            self.stats['dropped_events'] += 1
            return False

        self.locked_until[key] = self.clock() + self.quiet_period
        self.stats['delivered_events'] += 1
        return True

    def reset(self):
        self.locked_until.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get throttle statistics"""
        return {
            **self.stats,
            'locked_keys': sum(1 for key in self.locked_until if self.is_locked(key)),
            'quiet_period': self.quiet_period,
        }


class ThrottledChannel:
    """
    Delivers watch events to a consumer callback, one per quiet period per
    directory

    push() must run on the event loop thread; observer threads hand events
    over with submit().
    """

    def __init__(self, callback: WatchCallback,
                 throttle: Throttle,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        self.callback = callback
        self.throttle = throttle
        self.loop = loop
        self.tasks: Set[asyncio.Task] = set()
        self.closed = False

    def submit(self, entry: Entry, event: ChangeEvent):
        """Thread-safe hand-over from an observer thread"""
        if self.closed:
            return
        if self.loop is None:
            self.push(entry, event)
            return
        try:
            self.loop.call_soon_threadsafe(self.push, entry, event)
        except RuntimeError:
            # Loop already closed
            logger.debug(f"Dropping event after loop shutdown: {event}")

    def push(self, entry: Entry, event: ChangeEvent) -> bool:
        """
        Stamp and deliver event unless the directory is in its quiet period

        Returns:
            True if the callback was invoked
        """
        if self.closed:
            return False

        if not self.throttle.try_acquire(str(entry.path)):
            logger.debug(f"Throttled event for {entry.path}: {event}")
            return False

        changed = entry.with_change(event.change_mode, event.file_name)
        logger.debug(f"Delivering change for {entry.path}: {event}")

        try:
            result = self.callback(changed)
        except Exception as e:
            logger.error(f"Error in watch callback for {entry.path}: {e}")
            return True

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self.tasks.add(task)
            task.add_done_callback(self._task_done)

        return True

    def _task_done(self, task: asyncio.Task):
        self.tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Error in watch callback: {error}")

    def close(self):
        self.closed = True
        for task in list(self.tasks):
            task.cancel()
