# superfs/watchdog/__init__.py

"""
superfs watch support
Native change events, per-directory throttling and watch sessions
"""
from .events import ChangeEvent, EventType
from .debounce import Throttle, ThrottledChannel
from .handlers import DirectoryEventHandler, convert_event
from .watcher import WatchSession

__all__ = [
    'ChangeEvent',
    'EventType',
    'Throttle',
    'ThrottledChannel',
    'DirectoryEventHandler',
    'convert_event',
    'WatchSession',
]
