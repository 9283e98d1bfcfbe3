# superfs/utils/paths.py

"""
Path helpers: relative marker resolution and ancestor lists
"""
import inspect
import os
import re
import sysconfig
from pathlib import Path
from typing import List, Optional, Union

_RELATIVE_MARKER = re.compile(r'^\.\.?')

_PACKAGE_DIR = Path(__file__).resolve().parent.parent

_STDLIB_DIRS = {
    Path(sysconfig.get_paths()[key]).resolve()
    for key in ('stdlib', 'platstdlib')
}

_THIRD_PARTY_DIRS = {'site-packages', 'dist-packages'}


def _is_stdlib(source: Path) -> bool:
    if _THIRD_PARTY_DIRS.intersection(source.parts):
        return False
    return any(stdlib in source.parents for stdlib in _STDLIB_DIRS)


def caller_directory(skip_package: bool = True) -> Path:
    """
    Find the directory of the first calling module outside this package

    Standard library frames (event loop, thread pool) are skipped too, so
    a coroutine or executor job resolves to the user module driving it.
    Falls back to the current working directory when no frame carries a
    user source file (interactive sessions, exec'd code, bare threads).
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            filename = frame.f_globals.get('__file__')
            if filename:
                source = Path(filename).resolve()
                in_package = skip_package and _PACKAGE_DIR in source.parents
                if not in_package and not _is_stdlib(source):
                    return source.parent
            frame = frame.f_back
    finally:
        del frame

    return Path.cwd()


def resolve_path(path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> Path:
    """
    Normalize a path given to a Directory or File handle

    Paths starting with '.' or '..' are resolved against base_dir, or the
    directory of the calling module when base_dir is None. Anything else is
    returned unchanged (as a Path).

    Args:
        path: Path as given by the caller
        base_dir: Directory to resolve relative markers against

    Returns:
        Resolved path
    """
    raw = os.fspath(path)
    if not _RELATIVE_MARKER.match(raw):
        return Path(raw)

    base = Path(base_dir) if base_dir is not None else caller_directory()
    return Path(os.path.normpath(os.path.join(base, raw)))


def create_path_array(path: Union[str, Path]) -> List[Path]:
    """
    Build the list of directories needed to create path, root to leaf

    The filesystem root itself is never part of the result.

    Example:
        /tmp/a/b -> [/tmp, /tmp/a, /tmp/a/b]
    """
    target = Path(os.path.abspath(os.fspath(path)))
    ancestors = [p for p in reversed(target.parents) if p != Path(p.anchor)]
    return ancestors + [target]
