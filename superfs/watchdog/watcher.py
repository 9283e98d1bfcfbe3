# superfs/watchdog/watcher.py

"""
Watch sessions: one observer, one non-recursive watch per directory
"""
import logging
from typing import Dict, Iterator, List

from watchdog.observers import Observer
from watchdog.observers.polling import PollingObserver

from ..fs.entry import Entry
from .debounce import ThrottledChannel
from .handlers import DirectoryEventHandler

logger = logging.getLogger(__name__)


class WatchSession:
    """
    Running watch over a set of directories

    Returned by Directory.watch(). entries lists the watched directory
    records in traversal order. Stop with stop() or use as an (async)
    context manager.
    """

    def __init__(self, entries: List[Entry],
                 channel: ThrottledChannel,
                 use_polling: bool = False,
                 poll_interval: float = 1.0):
        """
        Initialize watch session

        Args:
            entries: Directory records to watch
            channel: Delivery channel to the consumer
            use_polling: Use polling instead of OS events
            poll_interval: Polling interval in seconds
        """
        self.entries = list(entries)
        self.channel = channel
        self.use_polling = use_polling
        self.poll_interval = poll_interval

        self.observer = None
        self.handlers: Dict[str, DirectoryEventHandler] = {}
        self.is_watching = False

    def start(self):
        """
        Schedule one watch per directory and start the observer

        Raises:
            OSError: If a watch could not be scheduled
        """
        if self.is_watching:
            logger.warning("Watch session already started")
            return

        if self.use_polling:
            self.observer = PollingObserver(timeout=self.poll_interval)
            logger.debug(f"Using polling observer (interval: {self.poll_interval}s)")
        else:
            self.observer = Observer()
            logger.debug("Using OS event observer")

        try:
            for entry in self.entries:
                handler = DirectoryEventHandler(entry, self.channel)
                # Recursion is handled by scheduling every directory
                self.observer.schedule(handler, str(entry.path), recursive=False)
                self.handlers[str(entry.path)] = handler

            self.observer.start()
        except Exception:
            self.observer = None
            self.handlers.clear()
            raise

        self.is_watching = True
        logger.info(f"Watching {len(self.entries)} directories")

    def stop(self, timeout: float = 10.0):
        """Stop observer and drop pending deliveries"""
        if not self.is_watching:
            return

        self.channel.close()
        if self.observer:
            self.observer.stop()
            self.observer.join(timeout=timeout)
            self.observer = None

        self.is_watching = False
        logger.info(f"Stopped watching {len(self.entries)} directories")

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.stop()

