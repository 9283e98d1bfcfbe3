# superfs/fs/primitives.py

"""
Awaitable single-path filesystem primitives

Each call runs the blocking os function in the default executor and maps
OSError onto the superfs error taxonomy.
"""
import asyncio
import functools
import logging
import os
from pathlib import Path
from typing import Any, Callable, List, Optional, Type, Union

from .errors import (
    AccessError,
    ReadWriteError,
    RemoveError,
    SuperFSError,
    translate_os_error,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


async def _run(func: Callable, *args: Any,
               error_cls: Type[SuperFSError], path: PathLike) -> Any:
    """Run blocking call in thread pool, translating OS errors"""
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, functools.partial(func, *args))
    except OSError as e:
        logger.debug(f"{func.__name__} failed for {path}: {e}")
        raise translate_os_error(e, error_cls, str(path)) from e


async def stat(path: PathLike) -> os.stat_result:
    """Stat path, following symlinks"""
    return await _run(os.stat, path, error_cls=AccessError, path=path)


async def lstat(path: PathLike) -> os.stat_result:
    """Stat path without following symlinks"""
    return await _run(os.lstat, path, error_cls=AccessError, path=path)


async def read_dir(path: PathLike) -> List[str]:
    """List raw entry names of a directory, sorted by name"""
    names = await _run(os.listdir, path, error_cls=AccessError, path=path)
    return sorted(names)


async def exists(path: PathLike) -> bool:
    """Check if path is accessible; never raises"""
    try:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, os.access, path, os.F_OK)
    except Exception as e:
        logger.debug(f"Access check failed for {path}: {e}")
        return False


def _read_bytes(path: PathLike) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def _write_bytes(path: PathLike, data: bytes, mode: Optional[int]) -> None:
    with open(path, 'wb') as f:
        f.write(data)
    if mode is not None:
        os.chmod(path, mode)


async def read_file(path: PathLike) -> bytes:
    """Read whole file as bytes"""
    return await _run(_read_bytes, path, error_cls=ReadWriteError, path=path)


async def write_file(path: PathLike, data: bytes, mode: Optional[int] = None) -> None:
    """
    Write bytes to file, replacing existing content

    Args:
        path: Destination file
        data: Content to write
        mode: Permission bits applied after writing
    """
    await _run(_write_bytes, path, data, mode, error_cls=ReadWriteError, path=path)


async def create_dir(path: PathLike, mode: Optional[int] = None) -> None:
    """Create a single directory"""
    if mode is None:
        await _run(os.mkdir, path, error_cls=ReadWriteError, path=path)
    else:
        await _run(os.mkdir, path, mode, error_cls=ReadWriteError, path=path)


async def remove_file(path: PathLike) -> None:
    """Unlink a file or symlink"""
    await _run(os.unlink, path, error_cls=RemoveError, path=path)


async def remove_dir(path: PathLike) -> None:
    """Remove an empty directory"""
    await _run(os.rmdir, path, error_cls=RemoveError, path=path)
