# superfs/fs/entry.py

"""
Entry records: bare path references and materialized stat records
"""
import os
import stat as stat_module
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union


def _extension(name: str) -> str:
    stem, dot, suffix = name.rpartition('.')
    if not dot or not stem:
        return ''
    return suffix.lower()


@dataclass(frozen=True)
class EntryRef:
    """Path-only reference to a filesystem object (not materialized)"""
    path: Path

    def __post_init__(self):
        if not isinstance(self.path, Path):
            object.__setattr__(self, 'path', Path(self.path))

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def parent_dir(self) -> Path:
        return self.path.parent

    @property
    def extension(self) -> str:
        return _extension(self.name)


@dataclass(frozen=True)
class Entry(EntryRef):
    """
    Materialized filesystem object

    Produced by Directory.create(), File.create() and Directory.read(). All
    annotations (relative path, copy outcome, watch change) are applied with
    dataclasses.replace, never in place.
    """
    is_file: bool = False
    is_dir: bool = False
    is_link: bool = False
    is_block_device: bool = False
    is_char_device: bool = False
    is_fifo: bool = False
    is_socket: bool = False

    size: int = 0
    mode: int = 0
    uid: int = 0
    gid: int = 0
    ino: int = 0
    dev: int = 0
    nlink: int = 0
    atime: float = 0.0
    mtime: float = 0.0
    ctime: float = 0.0

    relative: Optional[str] = None

    # copy outcome
    file_exists: Optional[bool] = None
    file_overwritten: Optional[bool] = None

    # watch notification
    change_mode: Optional[str] = None
    changed_file: Optional[str] = None

    @classmethod
    def from_stat(cls, path: Union[str, Path], st: os.stat_result, **kwargs: Any) -> 'Entry':
        """Build a record from an lstat/stat result"""
        mode = st.st_mode
        return cls(
            path=Path(path),
            is_file=stat_module.S_ISREG(mode),
            is_dir=stat_module.S_ISDIR(mode),
            is_link=stat_module.S_ISLNK(mode),
            is_block_device=stat_module.S_ISBLK(mode),
            is_char_device=stat_module.S_ISCHR(mode),
            is_fifo=stat_module.S_ISFIFO(mode),
            is_socket=stat_module.S_ISSOCK(mode),
            size=st.st_size,
            mode=mode,
            uid=st.st_uid,
            gid=st.st_gid,
            ino=st.st_ino,
            dev=st.st_dev,
            nlink=st.st_nlink,
            atime=st.st_atime,
            mtime=st.st_mtime,
            ctime=st.st_ctime,
            **kwargs,
        )

    @property
    def permissions(self) -> int:
        """Permission bits of mode (no file type bits)"""
        return stat_module.S_IMODE(self.mode)

    def with_relative(self, relative: str) -> 'Entry':
        return replace(self, relative=relative)

    def with_copy_outcome(self, file_exists: bool, file_overwritten: bool) -> 'Entry':
        return replace(self, file_exists=file_exists, file_overwritten=file_overwritten)

    def with_change(self, change_mode: str, changed_file: Optional[str]) -> 'Entry':
        return replace(self, change_mode=change_mode, changed_file=changed_file)

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to a JSON-friendly dictionary"""
        data = asdict(self)
        data['path'] = str(self.path)
        data['name'] = self.name
        data['parent_dir'] = str(self.parent_dir)
        data['extension'] = self.extension
        return data


@dataclass(frozen=True)
class DirectoryEntry(Entry):
    """Materialized directory record"""

    def handle(self):
        from .directory import Directory
        return Directory(self.path)


@dataclass(frozen=True)
class FileEntry(Entry):
    """Materialized file record"""
    encoding: Optional[str] = 'utf-8'

    def handle(self):
        from .file import File
        return File(self.path, encoding=self.encoding)
