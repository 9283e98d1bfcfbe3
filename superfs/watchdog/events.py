# superfs/watchdog/events.py

"""
Change notifications handed from observer threads to the event loop
"""
from enum import Enum
from dataclasses import dataclass
from pathlib import Path


class EventType(Enum):
    """Change kind stamped on the watched entry as change_mode"""
    CREATED = "created"
    MODIFIED = "modified"
    DELETED = "deleted"
    MOVED = "moved"
    CLOSED = "closed"


@dataclass(frozen=True)
class ChangeEvent:
    """One change below a watched directory"""
    event_type: EventType
    src_path: Path

    @property
    def file_name(self) -> str:
        """Name stamped on the watched entry as changed_file"""
        return self.src_path.name

    @property
    def change_mode(self) -> str:
        return self.event_type.value
