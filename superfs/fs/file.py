# superfs/fs/file.py

"""
File handle: metadata and content access for a single file
"""
import logging
from pathlib import Path
from typing import Optional, Union

from . import primitives
from .entry import FileEntry
from ..utils.paths import resolve_path

logger = logging.getLogger(__name__)


class File:
    """
    Handle for one file path

    Construction does not touch the filesystem; every method is a coroutine
    that awaits the underlying primitive.
    """

    def __init__(self, path: Union[str, Path],
                 encoding: Optional[str] = 'utf-8',
                 base_dir: Optional[Union[str, Path]] = None):
        """
        Initialize file handle

        Args:
            path: File path; '.'/'..' prefixed paths resolve against base_dir
                or the calling module's directory
            encoding: Text encoding for read()/write(); None means bytes
            base_dir: Directory for relative marker resolution
        """
        self.path = resolve_path(path, base_dir)
        self.encoding = encoding

    def __repr__(self) -> str:
        return f"File({str(self.path)!r}, encoding={self.encoding!r})"

    async def create(self) -> FileEntry:
        """
        Materialize metadata

        Raises:
            NotFoundError: Path does not exist
            AccessError: Path could not be stat'ed
        """
        st = await primitives.lstat(self.path)
        return FileEntry.from_stat(self.path, st, encoding=self.encoding)

    async def exists(self) -> bool:
        return await primitives.exists(self.path)

    async def read_bytes(self) -> bytes:
        return await primitives.read_file(self.path)

    async def read(self) -> Union[str, bytes]:
        """Read content, decoded with encoding unless encoding is None"""
        data = await primitives.read_file(self.path)
        if self.encoding is None:
            return data
        return data.decode(self.encoding)

    async def write(self, data: Union[str, bytes], mode: Optional[int] = None):
        """
        Write content, replacing the file

        Args:
            data: Text (encoded with encoding, utf-8 if None) or bytes
            mode: Permission bits to apply
        """
        if isinstance(data, str):
            data = data.encode(self.encoding or 'utf-8')
        await primitives.write_file(self.path, data, mode)
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")

    async def delete(self):
        """
        Remove the file

        Raises:
            RemoveError: Unlink failed
        """
        await primitives.remove_file(self.path)
        logger.debug(f"Removed file {self.path}")

    async def copy(self, dest: Union[str, Path], overwrite: bool = False,
                   mode: Optional[int] = None) -> FileEntry:
        """
        Copy file content to dest

        Existing destinations are only replaced when overwrite is set.

        Returns:
            Source record annotated with file_exists/file_overwritten
        """
        entry = await self.create()
        dest = Path(dest)

        data = await primitives.read_file(self.path)
        target_exists = await primitives.exists(dest)
        if not target_exists or overwrite:
            await primitives.write_file(dest, data, mode if mode is not None else entry.permissions)

        return entry.with_copy_outcome(
            file_exists=target_exists,
            file_overwritten=target_exists and overwrite,
        )
