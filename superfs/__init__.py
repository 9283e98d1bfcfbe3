# superfs/__init__.py

"""
superfs
Object-oriented asyncio access to directory trees
"""
from .fs import (
    EntryRef, Entry, DirectoryEntry, FileEntry,
    SuperFSError, NotFoundError, AccessError, ReadWriteError, RemoveError,
    Matcher, create_matcher,
    ReadOptions, CopyOptions, WatchOptions,
    File, Directory,
)
from .watchdog import WatchSession
from .utils import Config, load_config, setup_logging

__version__ = "1.0.0"

__all__ = [
    'EntryRef', 'Entry', 'DirectoryEntry', 'FileEntry',
    'SuperFSError', 'NotFoundError', 'AccessError', 'ReadWriteError', 'RemoveError',
    'Matcher', 'create_matcher',
    'ReadOptions', 'CopyOptions', 'WatchOptions',
    'File', 'Directory',
    'WatchSession',
    'Config', 'load_config', 'setup_logging',
]
