# superfs/watchdog/handlers.py

"""
Event handlers for directory watches
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from watchdog.events import (
    FileSystemEventHandler,
    FileClosedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
    FileDeletedEvent,
    FileMovedEvent,
    DirCreatedEvent,
    DirModifiedEvent,
    DirDeletedEvent,
    DirMovedEvent
)

from ..fs.entry import Entry
from .debounce import ThrottledChannel
from .events import ChangeEvent, EventType

logger = logging.getLogger(__name__)


def convert_event(event) -> Optional[ChangeEvent]:
    """Convert a watchdog event; None for kinds the watch does not report"""
    if isinstance(event, (FileCreatedEvent, DirCreatedEvent)):
        event_type = EventType.CREATED
    elif isinstance(event, (FileModifiedEvent, DirModifiedEvent)):
        event_type = EventType.MODIFIED
    elif isinstance(event, (FileDeletedEvent, DirDeletedEvent)):
        event_type = EventType.DELETED
    elif isinstance(event, (FileMovedEvent, DirMovedEvent)):
        event_type = EventType.MOVED
    elif isinstance(event, FileClosedEvent):
        event_type = EventType.CLOSED
    else:
        # opened / closed-no-write and future event kinds
        return None

    return ChangeEvent(event_type=event_type, src_path=Path(event.src_path))


class DirectoryEventHandler(FileSystemEventHandler):
    """
    Forwards native events for one watched directory to a channel

    Runs on the observer thread.
    """

    def __init__(self, entry: Entry, channel: ThrottledChannel):
        """
        Initialize handler

        Args:
            entry: Watched directory record, stamped and passed to the consumer
            channel: Channel delivering to the consumer callback
        """
        self.entry = entry
        self.channel = channel

        self.stats = {
            'events_received': 0,
            'events_forwarded': 0,
            'last_event': None,
        }

    def on_any_event(self, event):
        """Handle any file system event"""
        self.stats['events_received'] += 1
        self.stats['last_event'] = datetime.now()

        watchdog_event = convert_event(event)
        if watchdog_event is None:
            return

        self.channel.submit(self.entry, watchdog_event)
        self.stats['events_forwarded'] += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get handler statistics"""
        return self.stats.copy()
