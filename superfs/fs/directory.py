# superfs/fs/directory.py

"""
Directory handle: traversal, copy, delete and watch over a directory tree
"""
import asyncio
import logging
import stat as stat_module
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Union

from . import primitives
from .entry import DirectoryEntry, Entry, FileEntry
from .file import File
from .options import CopyOptions, ReadOptions, WatchOptions, merge_options
from .patterns import create_matcher
from ..utils.config import Config, get_config
from ..utils.paths import create_path_array, resolve_path
from ..watchdog.debounce import Throttle, ThrottledChannel
from ..watchdog.watcher import WatchSession

logger = logging.getLogger(__name__)


def _join_relative(prefix: str, name: str) -> str:
    return f"{prefix}/{name}" if prefix else name


def _is_real_dir(entry: Entry) -> bool:
    # Symlinked directories are listed as DirectoryEntry but removed as links
    return isinstance(entry, DirectoryEntry) and not entry.is_link


class Directory:
    """
    Handle for one directory path

    Construction does not touch the filesystem. All operations are
    coroutines awaiting each filesystem call in turn; siblings are never
    processed in parallel, so results keep listing order.
    """

    def __init__(self, path: Union[str, Path],
                 base_dir: Optional[Union[str, Path]] = None,
                 config: Optional[Config] = None):
        """
        Initialize directory handle

        Args:
            path: Directory path; '.'/'..' prefixed paths resolve against
                base_dir or the calling module's directory
            base_dir: Directory for relative marker resolution
            config: Configuration (defaults to the global config)
        """
        self.path = resolve_path(path, base_dir)
        self._config = config

    @property
    def config(self) -> Config:
        return self._config if self._config is not None else get_config()

    def __repr__(self) -> str:
        return f"Directory({str(self.path)!r})"

    def _child(self, path: Path) -> 'Directory':
        return Directory(path, config=self._config)

    async def create(self) -> DirectoryEntry:
        """
        Materialize metadata

        Raises:
            NotFoundError: Path does not exist
            AccessError: Path could not be stat'ed
        """
        st = await primitives.lstat(self.path)
        return DirectoryEntry.from_stat(self.path, st)

    async def exists(self) -> bool:
        """Check if the directory path is accessible; never raises"""
        return await primitives.exists(self.path)

    async def read(self, options: Union[ReadOptions, Mapping[str, Any], None] = None,
                   **kwargs: Any) -> List[Entry]:
        """
        Read directory entries

        Keyword options (or a ReadOptions / mapping as first argument):
            encoding: Encoding stamped on file entries (config default)
            recursive: Descend into sub-directories
            relative_path: Prefix for relative paths (used for recursion)
            skip_files: Leave files out of the result
            skip_dirs: Leave directories out of the result (still descended)
            add_parent: Prepend this directory's own record
            filter: Inclusion pattern; directories are tested by relative
                path, files by full path
            ignore: Pattern applied to raw entry names first. Names that
                match are kept. Entries returned from sub-directories are
                dropped when their full path matches.

        Returns:
            Flat list of DirectoryEntry / FileEntry records, listing order,
            depth first

        Raises:
            NotFoundError: Directory or an entry vanished during traversal
            AccessError: A stat or listing failed
        """
        base = ReadOptions(encoding=self.config.read.encoding)
        opts = merge_options(ReadOptions, options, base=base, **kwargs)
        return await self._read(opts)

    async def _read(self, opts: ReadOptions) -> List[Entry]:
        file_filter = create_matcher(opts.filter)
        ignore = create_matcher(opts.ignore)

        out_files: List[Entry] = []
        if opts.add_parent:
            out_files.append(await self.create())

        raw_files = await primitives.read_dir(self.path)
        if ignore:
            raw_files = [name for name in raw_files if ignore.test(name)]

        for name in raw_files:
            file_path = self.path / name
            st = await primitives.stat(file_path)

            if stat_module.S_ISDIR(st.st_mode):
                child = self._child(file_path)
                relative = _join_relative(opts.relative_path, name)
                entry = (await child.create()).with_relative(relative)

                if not opts.skip_dirs and (file_filter is None or file_filter.test(relative)):
                    out_files.append(entry)

                if opts.recursive and not entry.is_link:
                    sub_opts = merge_options(
                        ReadOptions, opts,
                        relative_path=relative,
                        add_parent=False,
                    )
                    for sub in await child._read(sub_opts):
                        if ignore and ignore.test(sub.path):
                            continue
                        out_files.append(sub)
            else:
                if opts.skip_files:
                    continue

                if file_filter and not file_filter.test(file_path):
                    continue

                fl = File(file_path, encoding=opts.encoding)
                entry = (await fl.create()).with_relative(
                    _join_relative(opts.relative_path, name))
                out_files.append(entry)

        logger.debug(f"Read {len(out_files)} entries from {self.path}")
        return out_files

    async def mkdir(self, target: Union[str, Path], mode: Optional[int] = None) -> List[Path]:
        """
        Create target and any missing ancestors

        Existing directories are left untouched.

        Args:
            target: Directory to create
            mode: Permission bits for created directories

        Returns:
            Directories actually created, root to leaf

        Raises:
            ReadWriteError: A directory could not be created
        """
        created = []
        for path in create_path_array(target):
            if await primitives.exists(path):
                continue

            await primitives.create_dir(path, mode)
            created.append(path)

        if created:
            logger.debug(f"Created {len(created)} directories for {target}")
        return created

    async def copy(self, dest: Union[str, Path],
                   options: Union[bool, CopyOptions, Mapping[str, Any], None] = None,
                   **kwargs: Any) -> List[Entry]:
        """
        Copy the directory tree into dest

        Best-effort merge copy: directories are created as needed, files are
        written when missing at dest or when overwrite is set. Nothing is
        rolled back on failure.

        Args:
            dest: Destination directory (created if missing)
            options: True for recursive without overwrite, a falsy value for
                the defaults, or CopyOptions / mapping; keywords override
                (recursive, overwrite, dir_mode, file_mode)

        Returns:
            Source entries in traversal order; file entries carry
            file_exists / file_overwritten

        Raises:
            NotFoundError, AccessError: Reading the source failed
            ReadWriteError: Creating or writing a destination failed
        """
        if options is True:
            options = CopyOptions(recursive=True, overwrite=False)
        elif not options:
            options = None
        defaults = self.config.copy
        base = CopyOptions(
            overwrite=defaults.overwrite,
            dir_mode=defaults.dir_mode,
            file_mode=defaults.file_mode,
        )
        opts = merge_options(CopyOptions, options, base=base, **kwargs)

        dest = Path(dest)
        if not await primitives.exists(dest):
            await self.mkdir(dest)

        # Always deep, whatever opts.recursive says
        files = await self.read(recursive=True)

        copied = []
        for fl in files:
            dest_file = dest / fl.relative
            if isinstance(fl, DirectoryEntry):
                dir_mode = opts.dir_mode if opts.dir_mode is not None else fl.permissions
                await self.mkdir(dest_file, dir_mode)
                copied.append(fl)
                continue

            data = await primitives.read_file(fl.path)
            target_exists = await primitives.exists(dest_file)
            if not target_exists or opts.overwrite:
                file_mode = opts.file_mode if opts.file_mode is not None else fl.permissions
                await primitives.write_file(dest_file, data, file_mode)

            copied.append(fl.with_copy_outcome(
                file_exists=target_exists,
                file_overwritten=target_exists and opts.overwrite,
            ))

        written = sum(1 for fl in copied if isinstance(fl, FileEntry) and (not fl.file_exists or fl.file_overwritten))
        logger.info(f"Copied {self.path} -> {dest} ({written} files written, {len(copied)} entries)")
        return copied

    async def delete(self) -> List[Entry]:
        """
        Remove everything below this directory

        Files go first, then directories deepest first, so each directory is
        empty when removed. The directory itself is kept.

        Returns:
            Removed entries in removal order

        Raises:
            RemoveError: A removal failed; remaining entries are left alone
        """
        files = await self.read(recursive=True)

        def removal_key(fl: Entry):
            if _is_real_dir(fl):
                return (1, -fl.relative.count('/'))
            return (0, 0)

        # sorted() is stable: listing order survives within each depth
        ordered = sorted(files, key=removal_key)

        for fl in ordered:
            if _is_real_dir(fl):
                await primitives.remove_dir(fl.path)
            else:
                await primitives.remove_file(fl.path)
            logger.debug(f"Removed {fl.path}")

        logger.info(f"Deleted {len(ordered)} entries below {self.path}")
        return ordered

    async def watch(self, options: Union[WatchOptions, Mapping[str, Any], Callable, None] = None,
                    callback: Optional[Callable] = None,
                    **kwargs: Any) -> WatchSession:
        """
        Watch this directory and every sub-directory for changes

        Accepts watch(callback), watch(options, callback) or
        watch(callback, ignore=..., quiet_period=...).

        The callback receives the watched DirectoryEntry stamped with
        change_mode and changed_file. After a delivery, further events for
        the same directory are dropped for quiet_period seconds. Coroutine
        callbacks are scheduled as tasks.

        Args:
            options: WatchOptions or mapping (ignore, quiet_period,
                use_polling, poll_interval)
            callback: Consumer callback

        Returns:
            Started WatchSession; its entries are the watched directories
        """
        if callable(options) and callback is None:
            options, callback = None, options
        if callback is None:
            raise TypeError("watch() requires a callback")

        opts = merge_options(WatchOptions, options, **kwargs)
        defaults = self.config.watch
        quiet_period = opts.quiet_period if opts.quiet_period is not None else defaults.quiet_period
        use_polling = opts.use_polling if opts.use_polling is not None else defaults.use_polling
        poll_interval = opts.poll_interval if opts.poll_interval is not None else defaults.poll_interval
        ignore = create_matcher(opts.ignore if opts.ignore is not None else defaults.ignore_patterns)

        dirs = await self.read(recursive=True, skip_files=True, add_parent=True)
        watched = [fl for fl in dirs if not (ignore and ignore.test(fl.path))]

        channel = ThrottledChannel(
            callback,
            Throttle(quiet_period),
            loop=asyncio.get_running_loop(),
        )
        session = WatchSession(
            watched,
            channel,
            use_polling=use_polling,
            poll_interval=poll_interval,
        )
        session.start()
        return session
