# superfs/fs/__init__.py

"""
superfs filesystem handles
Directory and File handles, entry records, options and errors
"""
from .entry import EntryRef, Entry, DirectoryEntry, FileEntry
from .errors import SuperFSError, NotFoundError, AccessError, ReadWriteError, RemoveError
from .patterns import Matcher, PatternRule, create_matcher
from .options import ReadOptions, CopyOptions, WatchOptions
from .file import File
from .directory import Directory

__all__ = [
    'EntryRef',
    'Entry',
    'DirectoryEntry',
    'FileEntry',
    'SuperFSError',
    'NotFoundError',
    'AccessError',
    'ReadWriteError',
    'RemoveError',
    'Matcher',
    'PatternRule',
    'create_matcher',
    'ReadOptions',
    'CopyOptions',
    'WatchOptions',
    'File',
    'Directory',
]
